"""
Pull Request Data Models

The slice of a GitHub pull request the checklist tool reads and writes.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PullRequestState:
    """Pull request as fetched from the issue tracker"""
    number: int
    body: str
    base_sha: Optional[str]
    head_sha: Optional[str]
    html_url: str = ""
    title: str = ""

    def __post_init__(self):
        """Validate data"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")
        if self.body is None:
            self.body = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PullRequestState":
        """Build from a GitHub pull request payload."""
        return cls(
            number=int(data["number"]),
            body=data.get("body") or "",
            base_sha=(data.get("base") or {}).get("sha"),
            head_sha=(data.get("head") or {}).get("sha"),
            html_url=data.get("html_url", ""),
            title=data.get("title", ""),
        )
