"""
Deploy Summary

Summarizes what changed between two deploy points for release notes.
"""

from .changed_files import ChangedFiles
from .dependencies import (
    ChangedElmPackages,
    ChangedJavascriptPackages,
    ChangedRubyGems,
    DependencyChanges,
    DependencyParseError,
)
from .revision_comparator import RevisionComparator
from .summarizer import DeploySummarizer, parse_when, time_between_deploys

__all__ = [
    "ChangedFiles",
    "ChangedElmPackages",
    "ChangedJavascriptPackages",
    "ChangedRubyGems",
    "DependencyChanges",
    "DependencyParseError",
    "RevisionComparator",
    "DeploySummarizer",
    "parse_when",
    "time_between_deploys",
]
