"""Schema validation and skill-line analysis for Mythic YAML configurations."""

from mythic_analyzer.document import MythicDoc
from mythic_analyzer.settings import Settings
from mythic_analyzer.workspace import Workspace

__all__ = ["MythicDoc", "Settings", "Workspace"]
