"""
Checklist Engine

Rule registry, matcher and pull request annotator.
"""

from .builtin import BUILTIN_CHECKLISTS
from .registry import ChecklistRegistry, RegistryFrozenError, build_registry
from .loader import RuleDefinitionError, load_checklists, parse_checklists
from .matcher import ChecklistMatcher, match
from .annotator import AnnotationResult, ChecklistAnnotator, annotate

__all__ = [
    "BUILTIN_CHECKLISTS",
    "ChecklistRegistry",
    "RegistryFrozenError",
    "build_registry",
    "RuleDefinitionError",
    "load_checklists",
    "parse_checklists",
    "ChecklistMatcher",
    "match",
    "AnnotationResult",
    "ChecklistAnnotator",
    "annotate",
]
