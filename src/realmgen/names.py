"""Name tables and table-driven name assembly.

Every generator takes the SeededRNG of the pipeline that calls it, so names
are part of the reproducible stream.
"""

from .rng import SeededRNG
from .tile_types import TownSize

HUMAN_NAMES_MALE: tuple[str, ...] = (
    "Aelar", "Albert", "Alfred", "Alexander", "Cael", "Darius", "Edgar",
    "Edward", "Finnian", "Gareth", "Joric", "Kaelen", "Marius", "Orion",
    "Peregrine", "Ronan", "Tavish", "Warrick", "Alden", "Bram", "Cedric",
    "Doran", "Adric", "Balin", "Corin", "Davik", "Eldrin", "Faelan",
    "Garrik", "Hadrian", "Ivar", "Kegan", "Lorien", "Mylo", "Osric",
    "Phelan", "Quinn", "Roric", "Silas", "Thoren", "Ulric", "Valen",
    "Wyatt", "Yoric",
)

HUMAN_NAMES_FEMALE: tuple[str, ...] = (
    "Brynn", "Elara", "Isolde", "Lyra", "Nadia", "Quilla", "Seraphina",
    "Vanya", "Xylia", "Yarrow", "Anya", "Fiona", "Genevieve", "Helena",
    "Rowan", "Adela", "Beatrix", "Cora", "Dahlia", "Elise", "Aria",
    "Bella", "Cassia", "Dora", "Elora", "Freya", "Gwen", "Hanna", "Iris",
    "Juna", "Kaia", "Lana", "Mira", "Nova", "Opal", "Piper", "Ria",
    "Selene", "Tessa", "Una", "Vera", "Willa", "Xena", "Yara", "Zara",
)

NOBLE_LAST_NAMES: tuple[str, ...] = (
    "Ashwood", "Blackwater", "Copperleaf", "Dawnbringer", "Evenfall",
    "Frostbeard", "Highwind", "Ironhand", "Jadefire", "Kingsley",
    "Lightfoot", "Moonwhisper", "Nightshade", "Oakenshield", "Pinecroft",
    "Quickfoot", "Redfern", "Shadowclaw", "Stormblade", "Thornwood",
    "Underhill", "Valerius", "Wolfsbane", "Stormwind", "Fireheart",
    "Winterbourne", "Summerfield", "Rosewood", "Hawthorne", "Ravenscroft",
    "Dragonbane", "Lionshield", "Bearclaw", "Eagleeye", "Foxglove",
)

COMMON_LAST_NAMES: tuple[str, ...] = (
    "Smith", "Miller", "Baker", "Carter", "Fisher", "Hunter", "Mason",
    "Potter", "Shepherd", "Tailor", "Weaver", "Crowley", "Darkmoor",
    "Ember", "Falconer", "Grimm", "Hawk", "Ivy", "Juniper", "Knight",
    "Lance", "Moss", "North", "Owl", "Pike", "Quarrel", "Raven", "Steel",
    "Torrent", "Vance", "West", "York", "Youngblood", "Zephyrson",
)

HUMAN_LAST_NAMES: tuple[str, ...] = NOBLE_LAST_NAMES + COMMON_LAST_NAMES

# Suffixes used both for noble-founded town names and for stripping them back off
NOBLE_TOWN_SUFFIXES: tuple[str, ...] = ("ton", "burg", "shire", "hold", "wick", "stead")

_TOWN_PREFIXES: tuple[str, ...] = (
    "Mill", "Stone", "River", "Oak", "Iron", "Gold", "Silver", "Green",
    "White", "Black", "Red", "Blue", "High", "Low", "North", "South",
    "East", "West", "Old", "New", "Fair", "Bright", "Dark", "Swift",
    "Deep", "Shallow", "Long", "Short", "Broad", "Narrow", "Wide",
    "Winter", "Summer", "Spring", "Autumn", "Frost", "Sun", "Moon", "Star",
    "Cloud", "Mist", "Fog", "Rain", "Storm", "Thunder", "Wind", "Snow",
    "Crystal", "Diamond", "Ruby", "Emerald", "Sapphire", "Amber", "Jade",
)

_HISTORICAL_SUFFIXES: dict[TownSize, tuple[str, ...]] = {
    TownSize.HAMLET: ("stead", "wick", "croft", "well", "hill", "side", "edge"),
    TownSize.VILLAGE: ("ton", "ham", "ley", "worth", "field", "wood", "burn"),
    TownSize.TOWN: ("market", "ford", "bridge", "haven", "shire", "mouth", "crossing"),
    TownSize.CITY: ("burg", "bury", "caster", "chester", "cester", "keep", "hold", "bastion"),
}

_GRAND_CITY_NAMES: tuple[str, ...] = (
    "Stronghold", "Fortress", "Citadel", "Bastion", "Rampart", "Bulwark",
    "Keep", "Castle", "Tower", "Spire", "Crown", "Throne", "Palace",
    "Capital", "Metropolis", "Sanctuary", "Dominion", "Empire",
)

# Regional (prefixes, suffixes) keyed by the biome a town sits on
_REGIONAL_NAMES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "plains": (
        ("Green", "Fair", "Golden", "Wheat", "Barley", "Corn", "Hay", "Meadow"),
        ("field", "meadow", "vale", "haven", "rest", "shire", "ton", "dale"),
    ),
    "forest": (
        ("Oak", "Pine", "Elder", "Willow", "Ash", "Birch", "Cedar", "Maple"),
        ("wood", "grove", "glen", "hollow", "shade", "leaf", "branch", "root"),
    ),
    "mountain": (
        ("Stone", "Iron", "High", "Peak", "Snow", "Granite", "Cliff", "Summit"),
        ("hold", "keep", "watch", "guard", "peak", "crest", "ridge", "point"),
    ),
    "water": (
        ("River", "Lake", "Bay", "Harbor", "Tide", "Wave", "Stream", "Current"),
        ("port", "haven", "bridge", "ford", "mouth", "bay", "cove", "landing"),
    ),
}


def generate_town_name(
    rng: SeededRNG,
    size: TownSize = TownSize.VILLAGE,
    biome: str = "plains",
) -> str:
    """Generate a town name from its size and the biome it sits on.

    Cities sometimes get a grand two-word name and towns or cities are
    sometimes named after a noble family. Otherwise the name is a prefix
    (regional when the biome is known) joined to a size-appropriate suffix.
    """
    size = TownSize(size)
    if size == TownSize.CITY and rng.random() < 0.3:
        return f"{rng.choice(_TOWN_PREFIXES)} {rng.choice(_GRAND_CITY_NAMES)}"

    if size in (TownSize.TOWN, TownSize.CITY) and rng.random() < 0.2:
        return f"{rng.choice(NOBLE_LAST_NAMES)}{rng.choice(NOBLE_TOWN_SUFFIXES)}"

    regional = _REGIONAL_NAMES.get(biome)
    if regional is not None and rng.random() < 0.7:
        prefixes = regional[0]
    else:
        prefixes = _TOWN_PREFIXES
    prefix = rng.choice(prefixes)
    suffix = rng.choice(_HISTORICAL_SUFFIXES[size])
    return f"{prefix}{suffix}"


def generate_unique_town_names(
    rng: SeededRNG,
    count: int,
    sizes: list[TownSize] | None = None,
    biome: str = "plains",
) -> list[str]:
    """Generate up to ``count`` distinct town names (10 attempts per name)."""
    sizes = sizes or []
    names: list[str] = []
    attempts = 0
    while len(names) < count and attempts < count * 10:
        size = sizes[len(names)] if len(names) < len(sizes) else TownSize.VILLAGE
        name = generate_town_name(rng, size, biome)
        if name not in names:
            names.append(name)
        attempts += 1
    return names


_TAVERN_ADJECTIVES: tuple[str, ...] = (
    "Prancing", "Golden", "Silver", "Drunken", "Rusty", "Broken", "Dancing",
    "Sleeping", "Laughing", "Singing", "Roaring", "Jolly", "Merry", "Red",
    "Green", "Blue", "Black", "White", "Iron", "Stone", "Wooden",
    "Crimson", "Azure", "Violet", "Amber", "Emerald", "Sapphire", "Ruby",
    "Lost", "Wandering", "Hidden", "Secret", "Silent", "Whispering", "Howling",
    "Flying", "Running", "Jumping", "Fighting", "Smiling", "Crying", "Blind",
)

_TAVERN_NOUNS: tuple[str, ...] = (
    "Pony", "Dragon", "Lion", "Bear", "Boar", "Stag", "Eagle", "Crow",
    "Tankard", "Barrel", "Flagon", "Mug", "Keg", "Bottle", "Goblet",
    "Sword", "Shield", "Hammer", "Axe", "Anchor", "Wheel", "Crown",
    "Goat", "Sheep", "Wolf", "Fox", "Cat", "Dog", "Horse", "Mare",
    "Wizard", "Knight", "King", "Queen", "Prince", "Princess", "Jester",
    "Ghost", "Spirit", "Soul", "Shadow", "Flame", "Fire", "Ice", "Frost",
)


def generate_tavern_name(rng: SeededRNG) -> str:
    return f"The {rng.choice(_TAVERN_ADJECTIVES)} {rng.choice(_TAVERN_NOUNS)}"


# (weight, guild trades)
_GUILD_CATEGORIES: tuple[tuple[int, tuple[str, ...]], ...] = (
    (60, ("Merchants", "Smiths", "Masons", "Bakers", "Brewers", "Weavers",
          "Carpenters", "Farmers", "Cobblers", "Tailors")),
    (25, ("Warriors", "Healers", "Alchemists", "Scribes", "Scholars",
          "Inventors", "Explorers", "Rangers")),
    (10, ("Thieves", "Assassins", "Spies", "Smugglers", "Bards", "Illusionists")),
    (5, ("Mages", "Wizards", "Sorcerers", "Necromancers", "Druids")),
)

_GUILD_DESCRIPTORS: tuple[str, ...] = (
    "Honorable", "Ancient", "Noble", "Royal", "Imperial", "Grand",
    "United", "Free", "Independent", "Loyal", "True", "Faithful",
    "Mystic", "Secret", "Hidden", "Golden", "Silver", "Iron",
)


def generate_guild_name(rng: SeededRNG) -> str:
    """Generate a guild name, with common trades far likelier than arcane ones."""
    total_weight = sum(weight for weight, _ in _GUILD_CATEGORIES)
    roll = rng.random() * total_weight
    trades = _GUILD_CATEGORIES[0][1]
    for weight, category in _GUILD_CATEGORIES:
        if roll < weight:
            trades = category
            break
        roll -= weight

    trade = rng.choice(trades)
    if rng.random() < 0.4:
        return f"{rng.choice(_GUILD_DESCRIPTORS)} Order of {trade}"
    if rng.random() < 0.8:
        return f"{trade} Guild"
    return f"The Order of {trade}"


_TEMPLE_DOMAINS: tuple[str, ...] = (
    "Light", "Life", "Nature", "War", "Peace", "Death", "Storms", "Seas",
    "Knowledge", "Trickery", "Love", "Justice", "Time", "Fate",
)
_TEMPLE_TITLES: tuple[str, ...] = (
    "Temple", "Shrine", "Sanctuary", "Cathedral", "Chapel", "Altar", "Hall",
)
_TEMPLE_ADJECTIVES: tuple[str, ...] = (
    "Holy", "Sacred", "Divine", "Eternal", "Blessed", "Hallowed", "Silent", "Golden",
)


def generate_temple_name(rng: SeededRNG) -> str:
    domain = rng.choice(_TEMPLE_DOMAINS)
    title = rng.choice(_TEMPLE_TITLES)
    if rng.random() < 0.5:
        return f"{title} of {domain}"
    return f"The {rng.choice(_TEMPLE_ADJECTIVES)} {title}"


_BANK_FOUNDERS: tuple[str, ...] = (
    "Goldsworth", "Silverton", "Ironvault", "Stonekeeper", "Coinmaster",
    "Wealthguard", "Treasurekeep", "Safehaven", "Vaultwright", "Gemhold",
    "Richman", "Moneychanger", "Goldkeeper", "Silversmith",
    "Profitmaker", "Loadstone", "Bullion", "Cache", "Hoard", "Stash",
)
_BANK_TYPES: tuple[str, ...] = (
    "Bank", "Trust", "Vault", "Treasury", "Reserve", "Exchange",
    "Counting House", "Money Lenders", "Financial House",
    "Coffers", "Depository", "Fund", "Investment", "Capital",
)


def generate_bank_name(rng: SeededRNG) -> str:
    founder = rng.choice(_BANK_FOUNDERS)
    kind = rng.choice(_BANK_TYPES)
    if rng.random() < 0.7:
        return f"{founder} & Co. {kind}"
    return f"{founder} {kind}"


_SHOP_ADJECTIVES: tuple[str, ...] = (
    "Lucky", "Golden", "Silver", "Honest", "Fair", "Quality", "Best",
    "Quick", "Strong", "Sturdy", "Fine", "Cheap", "Useful", "Magic",
    "Mystic", "Ancient", "Old", "New", "Bright", "Dark", "Shining",
    "Rusty", "Dusty", "Clean", "Dirty", "Broken", "Fixed",
)
_SHOP_NOUNS: tuple[str, ...] = (
    "Horseshoe", "Hammer", "Shield", "Sword", "Cloak", "Potion", "Scroll",
    "Backpack", "Boot", "Glove", "Gem", "Anvil", "Arrow", "Bow",
    "Lantern", "Compass", "Map", "Book", "Feather", "Quill", "Ink",
)
_SHOP_GOODS: tuple[str, ...] = (
    "Goods", "Supplies", "Wares", "Trade", "Emporium", "Exchange",
    "General Store", "Market", "Provisions", "Equipment",
    "Trinkets", "Treasures", "Oddities", "Curiosities", "Sundries",
)


def generate_shop_name(rng: SeededRNG) -> str:
    """Generate a shop name: "The Adjective Noun" or "Owner's Goods".

    The owner form names the proprietor, which the population step uses to
    pick the merchant who runs the shop.
    """
    if rng.random() < 0.6:
        return f"The {rng.choice(_SHOP_ADJECTIVES)} {rng.choice(_SHOP_NOUNS)}"
    owner = rng.choice(HUMAN_NAMES_MALE + HUMAN_NAMES_FEMALE)
    return f"{owner}'s {rng.choice(_SHOP_GOODS)}"


_MANOR_TYPES: tuple[str, ...] = (
    "Manor", "Hall", "Estate", "House", "Keep", "Lodge", "Chateau",
    "Villa", "Palace", "Castle",
)


def generate_manor_name(rng: SeededRNG) -> str:
    return f"{rng.choice(NOBLE_LAST_NAMES)} {rng.choice(_MANOR_TYPES)}"


_MOUNTAIN_PREFIXES: tuple[str, ...] = (
    "Iron", "Stone", "Thunder", "Storm", "Frost", "Fire", "Shadow", "Crystal",
    "Silver", "Gold", "Granite", "Obsidian", "Amber", "Crimson", "Azure",
    "White", "Black", "Grey", "Red", "Bone", "Cinder", "Ash", "Dusk", "Dawn",
    "Dragon", "Eagle", "Wolf", "Serpent", "Giant", "Titan", "Ancient", "Broken",
    "Jagged", "Shattered", "Frozen", "Burning", "Howling", "Silent", "Lonely",
)
_MOUNTAIN_SUFFIXES: tuple[str, ...] = (
    "Mountains", "Peaks", "Ridge", "Range", "Heights", "Spires", "Crags",
    "Pinnacles", "Summits", "Teeth", "Spine", "Crown", "Horns", "Cliffs",
)


def generate_mountain_name(rng: SeededRNG) -> str:
    return f"{rng.choice(_MOUNTAIN_PREFIXES)} {rng.choice(_MOUNTAIN_SUFFIXES)}"


BLACKSMITH_NAMES: tuple[str, ...] = (
    "Iron Anvil", "Heavy Hammer", "Strong Forge",
    "Dragon Sunder", "Steel Strike", "The Hearth Forge",
)


def generate_blacksmith_name(rng: SeededRNG) -> str:
    return rng.choice(BLACKSMITH_NAMES)
