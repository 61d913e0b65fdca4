"""Deterministic NPC generation from a seed and a few fixed traits."""

from pydantic import BaseModel, ConfigDict, Field

from ..names import HUMAN_LAST_NAMES, HUMAN_NAMES_FEMALE, HUMAN_NAMES_MALE
from ..rng import SeededRNG
from ..types import Position
from .roles import ALL_ROLES, Gender, Role, RoleDefinition, coerce_role, role_definition

ALIGNMENTS: tuple[str, ...] = (
    "Lawful Good", "Neutral Good", "Chaotic Good",
    "Lawful Neutral", "True Neutral", "Chaotic Neutral",
    "Lawful Evil", "Neutral Evil", "Chaotic Evil",
)

TRINKETS: tuple[str, ...] = (
    "Brass Key", "Carved Wooden Duck", "Silver Locket", "Strange Coin", "Dice Set",
    "Dried Rabbit's Foot", "Letter from home", "Map fragment", "Shiny rock", "Bone whistle",
    "Copper Ring", "Old pipe", "Deck of cards", "Small mirror", "Bag of marbles",
)

TRINKET_CHANCE = 0.3


class HitPoints(BaseModel):
    current: int
    max: int


class NPCLocation(BaseModel):
    """Where an NPC spends the day and where they sleep."""

    x: int
    y: int
    building_name: str
    building_type: str  # A BuildingType value, or "field" for farm work
    home_coords: Position | None = None


class NPC(BaseModel):
    """A generated character."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    seed: int
    name: str
    last_name: str
    age: int
    gender: Gender
    race: str
    role: Role
    title: str
    npc_class: str = Field(alias="class")
    level: int
    alignment: str
    stats: dict[str, int]
    hp: HitPoints
    inventory: list[str]
    selected_title_index: int | None = None
    is_npc: bool = True
    location: NPCLocation | None = None
    job: str | None = None


class NPCOptions(BaseModel):
    """Traits to pin when generating an NPC; anything left unset is rolled."""

    seed: int | str | None = None
    race: str = "Human"
    gender: Gender | None = None
    role: Role | str | None = None
    level: int = 1
    title: str | None = None
    title_index: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    no_evil: bool = False
    npc_id: str | None = None


def ability_modifier(score: int) -> int:
    return (score - 10) // 2


def _first_name(gender: Gender | None, rng: SeededRNG) -> str:
    if gender == Gender.MALE:
        return rng.choice(HUMAN_NAMES_MALE)
    if gender == Gender.FEMALE:
        return rng.choice(HUMAN_NAMES_FEMALE)
    return rng.choice(HUMAN_NAMES_MALE + HUMAN_NAMES_FEMALE)


def generate_name(
    gender: Gender | str | None,
    rng: SeededRNG,
    last_name: str | None = None,
) -> str:
    """Random full name; ``last_name`` fixes the surname when given."""
    first = _first_name(Gender(gender) if gender is not None else None, rng)
    surname = last_name if last_name is not None else rng.choice(HUMAN_LAST_NAMES)
    return f"{first} {surname}"


def _pick_title(
    options: NPCOptions,
    definition: RoleDefinition,
    gender: Gender,
    rng: SeededRNG,
) -> tuple[str, int | None]:
    if options.title:
        return options.title, None

    titles = definition.titles_for(gender)
    index = options.title_index
    # A paired title index from a role with a longer list is re-rolled
    if index is None or not 0 <= index < len(titles):
        index = rng.range(0, len(titles) - 1)
    return titles[index], index


def _roll_age(role: Role, title: str, rng: SeededRNG) -> int:
    if role == Role.NOBLE_CHILD:
        return rng.range(6, 15)
    if "Elder" in title:
        return rng.range(60, 90)
    roll = rng.random()
    if roll < 0.6:
        return rng.range(18, 35)
    if roll < 0.9:
        return rng.range(36, 55)
    return rng.range(56, 75)


def _coins(role: Role, rng: SeededRNG) -> str:
    if role == Role.NOBLE_CHILD:
        return f"{rng.range(2, 10)} Silver Pieces (Allowance)"
    if role in (Role.NOBLE, Role.MERCHANT):
        return f"{rng.range(20, 100)} Gold Pieces"
    if role in (Role.GUARD, Role.TAVERN_KEEPER):
        return f"{rng.range(5, 20)} Silver Pieces"
    return f"{rng.range(2, 15)} Copper Pieces"


def _roll_inventory(definition: RoleDefinition, role: Role, rng: SeededRNG) -> list[str]:
    inventory = [
        rng.choice(entry) if isinstance(entry, tuple) else entry
        for entry in definition.inventory
    ]
    inventory.append(_coins(role, rng))
    if rng.random() < TRINKET_CHANCE:
        inventory.append(rng.choice(TRINKETS))
    return inventory


def generate_npc(options: NPCOptions | None = None) -> NPC:
    """Generate an NPC.

    The same options, seed included, always give the same NPC. Draw order
    is gender, role, title, age, name, stats, hit points, alignment, then
    inventory.

    Args:
        options: Fixed traits. A missing seed draws a fresh one, recorded on
            the NPC.

    Raises:
        UnknownRoleError: If ``options.role`` names no known role.
        InvalidSeedError: If the seed is not an integer.
    """
    options = options or NPCOptions()
    rng = SeededRNG(options.seed)

    gender = options.gender
    if gender is None:
        gender = Gender.MALE if rng.random() > 0.5 else Gender.FEMALE

    role = coerce_role(options.role) if options.role is not None else rng.choice(ALL_ROLES)
    definition = role_definition(role)

    title, title_index = _pick_title(options, definition, gender, rng)
    age = _roll_age(role, title, rng)

    first = options.first_name if options.first_name else _first_name(gender, rng)
    last_name = options.last_name if options.last_name else rng.choice(HUMAN_LAST_NAMES)

    stats = {
        name: max(1, score + rng.range(-1, 2))
        for name, score in definition.stats().items()
    }

    max_hp = max(
        1,
        rng.range(*definition.hp_range) + ability_modifier(stats["Constitution"]) * options.level,
    )

    alignments = ALIGNMENTS
    if options.no_evil:
        alignments = tuple(a for a in ALIGNMENTS if "Evil" not in a)
    alignment = rng.choice(alignments)

    inventory = _roll_inventory(definition, role, rng)

    return NPC(
        id=options.npc_id or f"npc_{rng.seed}",
        seed=rng.seed,
        name=f"{first} {last_name}",
        last_name=last_name,
        age=age,
        gender=gender,
        race=options.race,
        role=role,
        title=title,
        npc_class=definition.default_class,
        level=options.level,
        alignment=alignment,
        stats=stats,
        hp=HitPoints(current=max_hp, max=max_hp),
        inventory=inventory,
        selected_title_index=title_index,
    )
