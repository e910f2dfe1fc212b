"""
Data Models

Core data models for checklists, pull requests and deploy summaries.
"""

from .checklist import ChecklistRule, PathPredicate, ChecklistMatch, MatchResult
from .pull_request import PullRequestState
from .deploy import PullRequestRef, DependencySection, DeploySummary

__all__ = [
    "ChecklistRule",
    "PathPredicate",
    "ChecklistMatch",
    "MatchResult",
    "PullRequestState",
    "PullRequestRef",
    "DependencySection",
    "DeploySummary",
]
