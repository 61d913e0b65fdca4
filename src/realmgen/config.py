"""Generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel

from .town.layout import TownGenConfig
from .world.config import WorldGenConfig

CONFIGS_DIR = Path(__file__).parent.parent.parent / "configs"


class GenerationConfig(BaseModel):
    """Complete configuration for world and town generation."""

    world: WorldGenConfig = WorldGenConfig()
    town: TownGenConfig = TownGenConfig()


def load_config(config_path: Path | str) -> GenerationConfig:
    """Load configuration from a TOML file.

    Tables left out of the file keep their defaults.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a value has the wrong type.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GenerationConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    A name that looks like a path is used as-is; otherwise it is looked up
    as ``configs/{name}.toml`` at the project root.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    config_path = CONFIGS_DIR / f"{name}.toml"
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {CONFIGS_DIR}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    if not CONFIGS_DIR.exists():
        return []
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
