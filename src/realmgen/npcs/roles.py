"""NPC occupation archetypes and their stat blocks."""

from enum import Enum

from pydantic import BaseModel

from ..exceptions import UnknownRoleError


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"

    @property
    def opposite(self) -> "Gender":
        return Gender.FEMALE if self == Gender.MALE else Gender.MALE


class Role(str, Enum):
    """Occupation archetype; the value is the display name."""

    VILLAGER = "Villager"
    GUARD = "Guard"
    MERCHANT = "Merchant"
    NOBLE = "Noble"
    NOBLE_CHILD = "Noble Child"
    CRIMINAL = "Criminal"
    TAVERN_KEEPER = "Tavern Keeper"
    TAVERN_WORKER = "Tavern Worker"
    GUILD_MASTER = "Guild Master"
    GUILD_MEMBER = "Guild Member"
    PRIEST = "Priest"
    ACOLYTE = "Acolyte"
    BLACKSMITH = "Blacksmith"
    FARMER = "Farmer"


STAT_NAMES: tuple[str, ...] = (
    "Strength", "Dexterity", "Constitution", "Intelligence", "Wisdom", "Charisma",
)

# An inventory entry is either a fixed item or a set to pick one from
InventoryEntry = str | tuple[str, ...]


class RoleDefinition(BaseModel, frozen=True):
    """Titles, class, base stats, kit, and hit points for one role.

    Titles are either one list for everyone or a list per gender. Gendered
    lists line up by index so a spouse can take the matching title.
    """

    titles: tuple[str, ...] = ()
    gendered_titles: dict[Gender, tuple[str, ...]] = {}
    default_class: str
    base_stats: tuple[int, int, int, int, int, int]
    inventory: tuple[InventoryEntry, ...]
    hp_range: tuple[int, int]

    def titles_for(self, gender: Gender) -> tuple[str, ...]:
        if self.gendered_titles:
            return self.gendered_titles.get(gender, self.gendered_titles[Gender.MALE])
        return self.titles

    def stats(self) -> dict[str, int]:
        return dict(zip(STAT_NAMES, self.base_stats))


def _gendered(male: tuple[str, ...], female: tuple[str, ...]) -> dict[Gender, tuple[str, ...]]:
    return {Gender.MALE: male, Gender.FEMALE: female}


_FINE_CLOTHES = "Fine Clothes"

_ROLES: dict[Role, RoleDefinition] = {
    Role.VILLAGER: RoleDefinition(
        titles=("Citizen", "Peasant", "Farmer", "Laborer", "Elder"),
        default_class="Commoner",
        base_stats=(10, 10, 10, 10, 10, 10),
        inventory=("Simple Clothes", "Bread"),
        hp_range=(4, 8),
    ),
    Role.GUARD: RoleDefinition(
        titles=("Sentry", "Watchman", "Constable", "Captain", "Sergeant", "Lieutenant"),
        default_class="Fighter",
        base_stats=(14, 12, 13, 10, 11, 10),
        inventory=("Chain Shirt", ("Spear", "Longsword", "Halberd"), "Shield", "Whistle"),
        hp_range=(12, 20),
    ),
    Role.MERCHANT: RoleDefinition(
        titles=("Shopkeeper", "Trader", "Vendor", "Master", "Supplier"),
        default_class="Expert",
        base_stats=(10, 11, 10, 13, 12, 14),
        inventory=(_FINE_CLOTHES, "Ledger", "Ink & Quill"),
        hp_range=(6, 10),
    ),
    Role.NOBLE: RoleDefinition(
        gendered_titles=_gendered(
            ("Lord", "Baron", "Duke", "Earl", "Count", "Viscount", "Sir"),
            ("Lady", "Baroness", "Duchess", "Countess", "Countess", "Viscountess", "Dame"),
        ),
        default_class="Aristocrat",
        base_stats=(9, 12, 9, 12, 11, 15),
        inventory=("Silk Clothes", "Signet Ring", "Jewelry"),
        hp_range=(6, 12),
    ),
    Role.NOBLE_CHILD: RoleDefinition(
        gendered_titles=_gendered(("Young Lord", "Master"), ("Young Lady", "Miss")),
        default_class="Aristocrat",
        base_stats=(6, 10, 8, 10, 8, 12),
        inventory=(_FINE_CLOTHES, "Toy Sword", "Doll"),
        hp_range=(4, 6),
    ),
    Role.CRIMINAL: RoleDefinition(
        titles=("Thief", "Bandit", "Cutpurse", "Thug", "Smuggler"),
        default_class="Rogue",
        base_stats=(12, 15, 12, 10, 10, 11),
        inventory=(
            ("Leather Armor", "Padded Armor"),
            ("Dagger", "Shortsword"),
            "Thieves' Tools",
            "Stolen Goods",
        ),
        hp_range=(10, 16),
    ),
    Role.TAVERN_KEEPER: RoleDefinition(
        gendered_titles=_gendered(
            ("Innkeeper", "Barkeep", "Owner", "Host"),
            ("Innkeeper", "Barkeep", "Owner", "Hostess"),
        ),
        default_class="Expert",
        base_stats=(10, 10, 10, 12, 13, 14),
        inventory=("Apron", "Keys to the Cellar", "Tankard", "Towel"),
        hp_range=(6, 12),
    ),
    Role.TAVERN_WORKER: RoleDefinition(
        gendered_titles=_gendered(
            ("Server", "Cook", "Stablehand", "Potboy"),
            ("Server", "Cook", "Maid", "Hostess"),
        ),
        default_class="Commoner",
        base_stats=(11, 12, 11, 9, 10, 10),
        inventory=("Simple Clothes", "Dirty Apron", ("Broom", "Tray", "Bucket")),
        hp_range=(4, 8),
    ),
    Role.GUILD_MASTER: RoleDefinition(
        titles=("Grandmaster", "High Artisan", "Guildmaster", "Director", "Foreman"),
        default_class="Expert",
        base_stats=(12, 12, 12, 14, 14, 14),
        inventory=("Guild Badge", "Masterwork Tool", _FINE_CLOTHES, "Ledger"),
        hp_range=(10, 20),
    ),
    Role.GUILD_MEMBER: RoleDefinition(
        titles=("Journeyman", "Apprentice", "Member", "Initiate", "Adept"),
        default_class="Expert",
        base_stats=(11, 12, 11, 12, 10, 10),
        inventory=("Guild Badge", "Tools", "Apron"),
        hp_range=(6, 12),
    ),
    Role.PRIEST: RoleDefinition(
        gendered_titles=_gendered(
            ("Father", "High Priest", "Curate", "Bishop", "Elder"),
            ("Mother", "High Priestess", "Bishop", "Elder"),
        ),
        default_class="Cleric",
        base_stats=(10, 10, 12, 12, 16, 14),
        inventory=("Holy Symbol", "Vestments", "Prayer Book", "Incense"),
        hp_range=(12, 24),
    ),
    Role.ACOLYTE: RoleDefinition(
        gendered_titles=_gendered(
            ("Brother", "Novice", "Initiate", "Deacon"),
            ("Sister", "Novice", "Initiate", "Deacon"),
        ),
        default_class="Adept",
        base_stats=(10, 10, 10, 11, 13, 12),
        inventory=("Holy Symbol", "Simple Robes", "Candle"),
        hp_range=(6, 12),
    ),
    Role.BLACKSMITH: RoleDefinition(
        titles=("Smith", "Blacksmith", "Armorer", "Ironwright", "Master Smith"),
        default_class="Expert",
        base_stats=(15, 10, 14, 10, 11, 10),
        inventory=("Leather Apron", "Hammer", "Tongs", "Iron Scraps"),
        hp_range=(10, 18),
    ),
    Role.FARMER: RoleDefinition(
        titles=("Farmer", "Crofter", "Husbandman", "Harvester", "Plowman"),
        default_class="Commoner",
        base_stats=(13, 11, 12, 10, 11, 10),
        inventory=("Rough Clothes", ("Pitchfork", "Scythe", "Sickle"), "Straw Hat"),
        hp_range=(6, 10),
    ),
}

ALL_ROLES: tuple[Role, ...] = tuple(Role)


def coerce_role(role: Role | str) -> Role:
    """Parse a role display name.

    Raises:
        UnknownRoleError: If no role has that name.
    """
    try:
        return Role(role)
    except ValueError:
        raise UnknownRoleError(role) from None


def role_definition(role: Role | str) -> RoleDefinition:
    """Look up the definition for a role.

    Raises:
        UnknownRoleError: If the role is not defined.
    """
    return _ROLES[coerce_role(role)]
