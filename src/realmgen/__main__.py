"""CLI entry point: generate a world or a town and report on it."""

import argparse
import json
from pathlib import Path

import structlog

from .config import GenerationConfig, find_config, load_config
from .exceptions import RealmgenError
from .log import configure_logging
from .npcs import populate_town
from .render import compute_town_stats, compute_world_stats, town_image, world_image
from .rng import SeededRNG
from .town import generate_town_map, validate_town
from .visit import enter_town
from .world import find_starting_town, generate_world_map, validate_world


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="realmgen",
        description="Seeded world, town, and NPC generation",
    )
    parser.add_argument("--config", type=str, help="Path or name of a generation TOML config")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug events")
    subparsers = parser.add_subparsers(dest="command", required=True)

    world = subparsers.add_parser("world", help="Generate a world map")
    world.add_argument("--seed", type=str, default=None, help="World seed (random if omitted)")
    world.add_argument("--width", type=int, default=10)
    world.add_argument("--height", type=int, default=10)
    world.add_argument("--town-name", action="append", default=[], help="Custom town name (repeatable)")
    world.add_argument("--image", type=Path, help="Write a PNG of the map here")
    world.add_argument("--scale", type=int, default=16, help="Pixels per tile in the PNG")
    world.add_argument("--json", action="store_true", help="Print the full map as JSON")

    town = subparsers.add_parser("town", help="Generate a town interior and its people")
    town.add_argument("--seed", type=str, default=None, help="Town seed, or world seed with --at")
    town.add_argument("--size", type=str, default="village", help="hamlet, village, town, or city")
    town.add_argument("--name", type=str, default="Millbrook")
    town.add_argument("--entry", type=str, default="south", help="Edge the player enters from")
    town.add_argument("--river", choices=["NORTH_SOUTH", "EAST_WEST"], default=None)
    town.add_argument(
        "--at",
        type=str,
        default=None,
        help="'x,y' of a town on the world generated from --seed; 'start' for the starting town",
    )
    town.add_argument("--image", type=Path, help="Write a PNG of the town here")
    town.add_argument("--scale", type=int, default=16, help="Pixels per tile in the PNG")
    town.add_argument("--json", action="store_true", help="Print the town and NPCs as JSON")
    return parser


def _load(args: argparse.Namespace) -> GenerationConfig:
    if not args.config:
        return GenerationConfig()
    return load_config(find_config(args.config))


def run_world(args: argparse.Namespace, config: GenerationConfig) -> None:
    world = generate_world_map(
        args.width,
        args.height,
        seed=args.seed,
        custom_names=args.town_name,
        config=config.world,
    )
    validate_world(world)

    if args.json:
        print(world.model_dump_json(indent=2))
    else:
        stats = compute_world_stats(world)
        start = find_starting_town(world)
        stats["starting_town"] = {"x": start.x, "y": start.y}
        print(json.dumps(stats, indent=2))

    if args.image:
        world_image(world, scale=args.scale).save(args.image)
        structlog.get_logger().info("image_saved", path=str(args.image))


def run_town(args: argparse.Namespace, config: GenerationConfig) -> None:
    if args.at:
        world = generate_world_map(seed=args.seed, config=config.world)
        if args.at == "start":
            position = find_starting_town(world)
            x, y = position.x, position.y
        else:
            x, y = (int(part) for part in args.at.split(",", 1))
        visit = enter_town(world, world.seed, x, y, args.entry, config=config.town)
        town_map, npcs = visit.town_map, visit.npcs
    else:
        seed = SeededRNG(args.seed).seed
        town_map = generate_town_map(
            args.size,
            args.name,
            entry_direction=args.entry,
            seed=seed,
            has_river=args.river is not None,
            river_direction=args.river or "NORTH_SOUTH",
            config=config.town,
        )
        npcs = populate_town(town_map, seed)
    validate_town(town_map)

    if args.json:
        payload = {
            "town": town_map.model_dump(mode="json"),
            "npcs": [npc.model_dump(mode="json", by_alias=True) for npc in npcs],
        }
        print(json.dumps(payload, indent=2))
    else:
        stats = compute_town_stats(town_map)
        stats["npcs"] = [f"{npc.name} ({npc.title}): {npc.job}" for npc in npcs]
        print(json.dumps(stats, indent=2))

    if args.image:
        town_image(town_map, scale=args.scale).save(args.image)
        structlog.get_logger().info("image_saved", path=str(args.image))


def main(argv: list[str] | None = None) -> None:
    """Run the generator CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)
    logger = structlog.get_logger()

    try:
        config = _load(args)
    except FileNotFoundError as e:
        logger.error("config_not_found", error=str(e))
        raise SystemExit(1)

    try:
        if args.command == "world":
            run_world(args, config)
        else:
            run_town(args, config)
    except (RealmgenError, ValueError) as e:
        logger.error("generation_failed", error=str(e))
        raise SystemExit(1)


if __name__ == "__main__":
    main()
