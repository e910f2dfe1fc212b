"""
Deploy Complexity

Release-engineering tools: deploy summaries for release notes, and
checklists added to pull requests based on the files they change.
"""

__version__ = "0.5.0"

from .models.checklist import ChecklistRule, PathPredicate, MatchResult
from .checklists import annotate, build_registry, match

__all__ = [
    "ChecklistRule",
    "PathPredicate",
    "MatchResult",
    "annotate",
    "build_registry",
    "match",
]
