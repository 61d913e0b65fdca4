"""Filling a generated town with residents and workers."""

from collections.abc import Callable
from dataclasses import dataclass

import structlog
from structlog.typing import FilteringBoundLogger

from ..names import (
    HUMAN_LAST_NAMES,
    HUMAN_NAMES_FEMALE,
    HUMAN_NAMES_MALE,
    NOBLE_LAST_NAMES,
    NOBLE_TOWN_SUFFIXES,
)
from ..rng import SeededRNG, coerce_seed, derive_seed
from ..state import TownMap
from ..tile_types import BuildingType, TownSize, TownTileType
from ..types import Position
from .generator import NPC, NPCLocation, NPCOptions, generate_npc
from .roles import Gender, Role

FIELD_SITE = "field"

CHILD_ACTIVITIES: tuple[str, ...] = (
    "Playing in the street",
    "Helping parents",
    "Exploring nearby",
    "Playing tag",
)

DOMESTIC_ACTIVITIES: tuple[str, ...] = (
    "Tending the hearth",
    "Cleaning the house",
    "Resting in the square",
    "Trading at the market",
    "Mending nets",
    "Preparing a meal",
    "Helping neighbors",
    "Running errands",
    "Fetching water",
)

# Trade jobs each town can support, with how many residents may hold each
VOCATION_SLOTS: dict[TownSize, dict[str, int]] = {
    TownSize.HAMLET: {"Cloth Weaver": 1, "Tool Mender": 1},
    TownSize.VILLAGE: {
        "Cloth Weaver": 1,
        "Tool Mender": 1,
        "Tanner": 1,
        "Tailor": 1,
        "Carpenter": 1,
    },
    TownSize.TOWN: {
        "Cloth Weaver": 2,
        "Tool Mender": 2,
        "Tanner": 2,
        "Tailor": 2,
        "Carpenter": 2,
        "Ale Brewer": 2,
        "Baker": 2,
    },
    TownSize.CITY: {
        "Cloth Weaver": 5,
        "Tool Mender": 4,
        "Tanner": 4,
        "Tailor": 5,
        "Carpenter": 4,
        "Ale Brewer": 3,
        "Baker": 4,
    },
}

FARMING_SIZES = frozenset({TownSize.HAMLET, TownSize.VILLAGE, TownSize.TOWN})


@dataclass
class Site:
    """A building or work tile that NPCs can be attached to."""

    x: int
    y: int
    kind: str
    name: str | None = None

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)


@dataclass
class TownSites:
    residential: list[Site]
    service: list[Site]
    work: list[Site]


def survey_town(town: TownMap) -> TownSites:
    """Bucket the town's tiles into homes, service buildings, and farm fields."""
    sites = TownSites(residential=[], service=[], work=[])
    for tile in town.tiles:
        if tile.type == TownTileType.BUILDING and tile.building_type is not None:
            site = Site(tile.x, tile.y, tile.building_type.value, tile.building_name)
            if tile.building_type.residential:
                sites.residential.append(site)
            else:
                sites.service.append(site)
        elif tile.type == TownTileType.FARM_FIELD:
            sites.work.append(Site(tile.x, tile.y, FIELD_SITE))
    return sites


class Population:
    """Accumulates a town's NPCs, deriving each one's seed from its building."""

    def __init__(self, town: TownMap, seed: int, rng: SeededRNG):
        self.town = town
        self.seed = seed
        self.rng = rng
        self.npcs: list[NPC] = []

    def add(
        self,
        role: Role,
        workplace: Site,
        home: Site | None,
        job: Callable[[NPC], str] | None = None,
        **options,
    ) -> NPC:
        npc_seed = derive_seed(self.seed, workplace.x, workplace.y, self.rng)
        npc = generate_npc(
            NPCOptions(
                seed=npc_seed,
                role=role,
                no_evil=True,
                npc_id=f"npc_{len(self.npcs) + 1}",
                **options,
            )
        )
        npc.location = NPCLocation(
            x=workplace.x,
            y=workplace.y,
            building_name=workplace.name or workplace.kind,
            building_type=workplace.kind,
            home_coords=home.position if home is not None else None,
        )
        if job is not None:
            npc.job = job(npc)
        self.npcs.append(npc)
        return npc

    def add_pair(
        self,
        role: Role,
        partner_role: Role,
        building: Site,
        job: Callable[[NPC], str],
        partner_job: Callable[[NPC], str],
        **options,
    ) -> tuple[NPC, NPC]:
        """Two workers sharing a surname, of opposite genders."""
        first = self.add(role, building, building, job, **options)
        second = self.add(
            partner_role,
            building,
            building,
            partner_job,
            gender=first.gender.opposite,
            last_name=first.last_name,
            title_index=first.selected_title_index,
        )
        return first, second

    def homes_taken(self) -> set[Position]:
        return {
            npc.location.home_coords
            for npc in self.npcs
            if npc.location is not None and npc.location.home_coords is not None
        }


def noble_family_name(residence: Site, town_name: str, rng: SeededRNG) -> str:
    """Surname for the family in the manor or keep.

    A residence named after its family lends that name; otherwise the family
    sometimes takes the town's name with its founding suffix dropped, or a
    stock noble surname.
    """
    if residence.name and residence.name not in ("Manor", "Keep"):
        return residence.name.split(" ")[0]
    if rng.random() < 0.4:
        for suffix in NOBLE_TOWN_SUFFIXES:
            if town_name.endswith(suffix) and len(town_name) > len(suffix):
                return town_name[: -len(suffix)]
        return town_name
    return rng.choice(NOBLE_LAST_NAMES)


def add_noble_family(population: Population, residence: Site, town_name: str) -> None:
    family = noble_family_name(residence, town_name, population.rng)

    def of_town(npc: NPC) -> str:
        return f"{npc.title} of {town_name}"

    head = population.add(Role.NOBLE, residence, residence, of_town, last_name=family)
    population.add(
        Role.NOBLE,
        residence,
        residence,
        of_town,
        last_name=family,
        gender=head.gender.opposite,
        title_index=head.selected_title_index,
    )
    for _ in range(population.rng.range(1, 3)):
        population.add(
            Role.NOBLE_CHILD,
            residence,
            residence,
            lambda npc: f"{npc.title} of the House {family}",
            last_name=family,
        )


def add_town_leaders(population: Population, sites: TownSites) -> None:
    """A noble family if the town has a manor or keep, otherwise an elder."""
    town = population.town
    seat = next((site for site in sites.residential if BuildingType(site.kind).noble_seat), None)
    if seat is not None:
        add_noble_family(population, seat, town.town_name)
    elif sites.residential:
        home = sites.residential[0]
        population.add(
            Role.VILLAGER,
            home,
            home,
            lambda npc: f"Leader of {town.town_name}",
            title="Headman" if town.town_size == TownSize.HAMLET else "Elder",
        )


def _shopkeeper_name(building_name: str | None) -> dict:
    # "Mira's Goods" is run by Mira
    if not building_name or "'s " not in building_name:
        return {}
    candidate = building_name.split("'s ")[0]
    if candidate in HUMAN_NAMES_MALE:
        return {"first_name": candidate, "gender": Gender.MALE}
    if candidate in HUMAN_NAMES_FEMALE:
        return {"first_name": candidate, "gender": Gender.FEMALE}
    return {}


def staff_building(population: Population, building: Site) -> None:
    """Put the working household into a service building; barns stay empty."""
    name = building.name
    kind = BuildingType(building.kind)

    if kind in (BuildingType.TAVERN, BuildingType.INN):
        place = name or "the tavern"
        population.add_pair(
            Role.TAVERN_KEEPER,
            Role.TAVERN_KEEPER,
            building,
            lambda npc: f"Owner of {place}",
            lambda npc: f"Co-Owner of {place}",
            title="Owner",
        )
    elif kind in (BuildingType.SHOP, BuildingType.MARKET):
        place = name or "the shop"
        population.add_pair(
            Role.MERCHANT,
            Role.MERCHANT,
            building,
            lambda npc: f"Proprietor of {place}",
            lambda npc: f"Merchant at {place}",
            **_shopkeeper_name(name),
        )
    elif kind == BuildingType.TEMPLE:
        place = name or "the temple"
        population.add_pair(
            Role.PRIEST,
            Role.ACOLYTE,
            building,
            lambda npc: f"{npc.title} of {place}",
            lambda npc: f"{npc.title} of {place}",
        )
    elif kind == BuildingType.BLACKSMITH:
        place = name or "the smithy"
        population.add_pair(
            Role.BLACKSMITH,
            Role.BLACKSMITH,
            building,
            lambda npc: f"Master Smith of {place}",
            lambda npc: f"Assistant Smith at {place}",
        )
    elif kind == BuildingType.GUILD:
        place = name or "the guild"
        population.add(Role.GUILD_MASTER, building, building, lambda npc: f"Master of {place}")


def _assign_adult_job(
    population: Population,
    npc: NPC,
    work_sites: list[Site],
    vocations: dict[str, int],
) -> None:
    rng = population.rng
    if npc.role == Role.FARMER and work_sites:
        site = work_sites[rng.range(0, len(work_sites) - 1)]
        npc.location.x = site.x
        npc.location.y = site.y
        npc.location.building_type = site.kind
        npc.job = "Tilling the fields"
        return

    open_vocations = [vocation for vocation, slots in vocations.items() if slots > 0]
    if open_vocations:
        vocation = rng.choice(open_vocations)
        vocations[vocation] -= 1
        npc.job = vocation
    else:
        npc.job = rng.choice(DOMESTIC_ACTIVITIES)


def add_household(
    population: Population,
    home: Site,
    work_sites: list[Site],
    vocations: dict[str, int],
) -> None:
    """A family of three to six; the first two are working adults."""
    rng = population.rng
    family = rng.choice(HUMAN_LAST_NAMES)
    can_farm = bool(work_sites) and population.town.town_size in FARMING_SIZES

    for i in range(rng.range(3, 6)):
        if i >= 2:
            child = population.add(Role.VILLAGER, home, home, last_name=family, title="Child")
            child.job = rng.choice(CHILD_ACTIVITIES)
            continue

        role = Role.FARMER if can_farm else Role.VILLAGER
        adult = population.add(
            role,
            home,
            home,
            last_name=family,
            title="Farmer" if role == Role.FARMER else "Citizen",
        )
        _assign_adult_job(population, adult, work_sites, vocations)


def populate_town(
    town_map: TownMap,
    seed: int | str,
    logger: FilteringBoundLogger | None = None,
) -> list[NPC]:
    """Generate everyone who lives and works in a town.

    Leaders come first (a noble family in the manor or keep, or else an
    elder in the first house), then the staff of each service building,
    then a household in every home not already taken.

    Args:
        town_map: A generated town.
        seed: Town seed, as an int or a string of digits.
        logger: Structured logger; defaults to ``structlog.get_logger()``.

    Returns:
        NPCs with ids ``npc_1``, ``npc_2``, ... in generation order. Empty
        for a town with no buildings.

    Raises:
        InvalidSeedError: If the seed is not an integer.
    """
    seed = coerce_seed(seed)
    log = (logger or structlog.get_logger()).bind(town=town_map.town_name, seed=seed)
    rng = SeededRNG(seed)
    population = Population(town_map, seed, rng)
    sites = survey_town(town_map)

    add_town_leaders(population, sites)
    for building in sites.service:
        staff_building(population, building)

    taken = population.homes_taken()
    vocations = dict(VOCATION_SLOTS[town_map.town_size])
    for home in sites.residential:
        if home.position not in taken:
            add_household(population, home, sites.work, vocations)

    log.info(
        "town_populated",
        npcs=len(population.npcs),
        homes=len(sites.residential),
        services=len(sites.service),
        fields=len(sites.work),
    )
    return population.npcs
