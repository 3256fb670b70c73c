"""YAML parsing with source offsets for Mythic documents."""

from mythic_analyzer.parser.documentation import md_link_wiki, md_see_also, parse_documentation
from mythic_analyzer.parser.loader import TrackedLoader, YAMLSafetyError
from mythic_analyzer.parser.nodes import MapNode, Node, Pair, ScalarNode, SeqNode, iter_scalars

__all__ = [
    "MapNode",
    "Node",
    "Pair",
    "ScalarNode",
    "SeqNode",
    "TrackedLoader",
    "YAMLSafetyError",
    "iter_scalars",
    "md_link_wiki",
    "md_see_also",
    "parse_documentation",
]
