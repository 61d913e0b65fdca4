"""Per-size town layouts and town generation settings."""

from pydantic import BaseModel, Field

from ..exceptions import UnknownTownSizeError
from ..tile_types import BuildingType, TownSize, TownTileType


class TownLayout(BaseModel, frozen=True):
    """Everything about a town interior that depends on its size tier."""

    size: TownSize
    width: int
    height: int
    square_size: int = Field(description="Side length of the central square")
    house_exclusion: int = Field(
        description="Chebyshev radius around the center kept free of houses"
    )
    important: tuple[BuildingType, ...] = Field(
        description="Civic buildings placed around the square, in order"
    )
    houses: int
    decorations: int = Field(description="Decoration placement attempts")
    farm_clusters: int
    has_walls: bool = False
    has_keep: bool = False
    road_width: int = Field(default=1, description="Main road width in tiles")
    road_surface: TownTileType = TownTileType.DIRT_PATH

    @property
    def square_half(self) -> int:
        return self.square_size // 2


_LAYOUTS: dict[TownSize, TownLayout] = {
    TownSize.HAMLET: TownLayout(
        size=TownSize.HAMLET,
        width=8,
        height=8,
        square_size=1,
        house_exclusion=1,
        important=(BuildingType.BARN,),
        houses=5,
        decorations=36,
        farm_clusters=2,
    ),
    TownSize.VILLAGE: TownLayout(
        size=TownSize.VILLAGE,
        width=12,
        height=12,
        square_size=2,
        house_exclusion=2,
        important=(BuildingType.INN, BuildingType.SHOP, BuildingType.BLACKSMITH),
        houses=8,
        decorations=45,
        farm_clusters=4,
    ),
    TownSize.TOWN: TownLayout(
        size=TownSize.TOWN,
        width=16,
        height=16,
        square_size=3,
        house_exclusion=3,
        important=(
            BuildingType.INN,
            BuildingType.SHOP,
            BuildingType.TEMPLE,
            BuildingType.BLACKSMITH,
            BuildingType.TAVERN,
            BuildingType.TAVERN,
        ),
        houses=20,
        decorations=36,
        farm_clusters=6,
        road_width=2,
    ),
    TownSize.CITY: TownLayout(
        size=TownSize.CITY,
        width=20,
        height=20,
        square_size=3,
        house_exclusion=3,
        important=(
            BuildingType.TEMPLE,
            BuildingType.MARKET,
            BuildingType.MANOR,
            BuildingType.BLACKSMITH,
            *(BuildingType.TAVERN,) * 3,
            *(BuildingType.GUILD,) * 3,
            *(BuildingType.BANK,) * 3,
        ),
        houses=40,
        decorations=24,
        farm_clusters=0,
        has_walls=True,
        has_keep=True,
        road_width=2,
        road_surface=TownTileType.STONE_PATH,
    ),
}


def coerce_town_size(size: TownSize | str) -> TownSize:
    """Parse a size tier name.

    Raises:
        UnknownTownSizeError: If the name is not a known tier.
    """
    try:
        return TownSize(size)
    except ValueError:
        raise UnknownTownSizeError(f"Unknown town size: {size!r}") from None


def layout_for(size: TownSize | str) -> TownLayout:
    """The layout for a size tier.

    Raises:
        UnknownTownSizeError: If the size has no layout.
    """
    return _LAYOUTS[coerce_town_size(size)]


class TownGenConfig(BaseModel):
    """Tunables for town interior generation shared by every size tier."""

    river_width: int = Field(default=2, description="River band width in tiles")
    direct_connection_ratio: float = Field(
        default=0.3, description="Share of houses linked straight to the road"
    )
    connection_passes: int = Field(
        default=10, description="Passes linking remaining houses to the network"
    )
    max_connection_distance: int = Field(
        default=10, description="Longest house-to-network link, exclusive"
    )
    farm_start_attempts: int = Field(
        default=10, description="Attempts to find a start tile per farm cluster"
    )
    repair_connectivity: bool = Field(
        default=True, description="Route or remove houses left unreachable"
    )
