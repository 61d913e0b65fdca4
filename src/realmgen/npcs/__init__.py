"""NPC generation and town population."""

from .generator import NPC, NPCLocation, NPCOptions, generate_name, generate_npc
from .population import populate_town
from .roles import Gender, Role, RoleDefinition, role_definition

__all__ = [
    "Gender",
    "NPC",
    "NPCLocation",
    "NPCOptions",
    "Role",
    "RoleDefinition",
    "generate_name",
    "generate_npc",
    "populate_town",
    "role_definition",
]
