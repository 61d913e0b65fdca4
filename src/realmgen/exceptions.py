"""Custom exceptions for world generation."""


class RealmgenError(Exception):
    """Base exception for generation errors."""

    pass


class InvalidSeedError(RealmgenError, ValueError):
    """Raised when a seed is not a usable integer."""

    pass


class InvalidGridError(RealmgenError):
    """Raised when a map's tiles don't match its dimensions."""

    pass


class GenerationError(RealmgenError):
    """Raised when generation cannot satisfy a hard invariant."""

    pass


class NoTownsError(GenerationError):
    """Raised when a world map contains no towns."""

    pass


class UnknownTownSizeError(RealmgenError, ValueError):
    """Raised when a town size has no layout."""

    pass


class UnknownRoleError(RealmgenError, KeyError):
    """Raised when an NPC role has no definition."""

    pass


class NotATownError(RealmgenError):
    """Raised when entering a world tile that holds no town."""

    pass
