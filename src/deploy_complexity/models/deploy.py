"""
Deploy Data Models

Structured view of the changes between two deploy points.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PullRequestRef:
    """A pull request recovered from a merge or squash commit subject."""
    number: int
    title: str
    squashed: bool = False

    def __post_init__(self):
        """Validate data"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    def format(self, gh_url: str) -> str:
        marker = "S" if self.squashed else "-"
        return f"{gh_url}/pull/{self.number} {marker} {self.title}"


@dataclass
class DependencySection:
    """Report section listing dependency changes for one ecosystem."""
    heading: str
    changes: List[str]


@dataclass
class DeploySummary:
    """Everything the deploy report prints for one base...to range."""
    base: str
    to: str
    revision: str
    time_delta: str
    commits: List[str] = field(default_factory=list)
    merges: List[str] = field(default_factory=list)
    pull_requests: List[str] = field(default_factory=list)
    shortstat: Optional[str] = None
    compare_url: str = ""
    migrations: List[str] = field(default_factory=list)
    dependency_sections: List[DependencySection] = field(default_factory=list)
    dirstat: Optional[str] = None
    stat: Optional[str] = None

    @property
    def is_redeploy(self) -> bool:
        return not self.commits
