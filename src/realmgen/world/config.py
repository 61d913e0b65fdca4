"""World generation configuration models."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class WorldGenConfig(BaseModel):
    """Counts, ranges, and retry caps for the world pipeline."""

    coast_depth_min: int = Field(default=2, description="Minimum coast band depth")
    coast_depth_max: int = Field(default=3, description="Maximum coast band depth")

    lakes_min: int = Field(default=1, description="Minimum lake count")
    lakes_max: int = Field(default=2, description="Maximum lake count")
    lake_attempts: int = Field(default=50, description="Placement attempts per lake")

    forest_clusters_min: int = Field(default=3, description="Minimum forest clusters")
    forest_clusters_max: int = Field(default=5, description="Maximum forest clusters")
    forest_size_min: int = Field(default=2, description="Minimum tiles per forest")
    forest_size_max: int = Field(default=4, description="Maximum tiles per forest")

    mountain_ranges_min: int = Field(default=2, description="Minimum mountain ranges")
    mountain_ranges_max: int = Field(default=4, description="Maximum mountain ranges")
    mountain_size_min: int = Field(default=2, description="Minimum tiles per range")
    mountain_size_max: int = Field(default=3, description="Maximum tiles per range")

    cluster_start_attempts: int = Field(
        default=10, description="Attempts to find a cluster start tile"
    )
    growth_attempts: int = Field(
        default=4, description="Direction retries per cluster growth step"
    )

    rivers_min: int = Field(default=1, description="Minimum river count")
    rivers_max: int = Field(default=2, description="Maximum river count")

    towns_min: int = Field(default=2, description="Minimum town count")
    towns_max: int = Field(default=4, description="Maximum town count")
    town_attempts: int = Field(default=30, description="Placement attempts per town")
    min_town_distance: int = Field(
        default=3, description="Minimum Manhattan distance between towns"
    )

    min_features_per_quadrant: int = Field(
        default=3, description="POI floor enforced in each map quadrant"
    )

    cave_count: int = Field(
        default=0, description="Cave entrances placed beside mountains"
    )


class CustomNames(BaseModel):
    """Names supplied by the caller, consumed before generated ones.

    A bare list is read as town names, the shape older save files use.
    """

    towns: list[str] = Field(default_factory=list)
    mountains: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_list(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            return {"towns": list(data), "mountains": []}
        if data is None:
            return {}
        return data
