"""
Pull Request

Represents the open pull request for a branch for the purposes of adding
checklist items to it.
"""

import logging
from typing import List, Optional

from ..checklists.annotator import AnnotationResult, ChecklistAnnotator
from ..models.checklist import MatchResult
from ..models.pull_request import PullRequestState
from .client import GitHubClient


logger = logging.getLogger(__name__)


class PullRequest:
    """
    Open pull request whose head is ``<org>:<branch>``.

    The pull request is fetched lazily on first access and refetched after
    the body has been written.
    """

    def __init__(
        self,
        client: GitHubClient,
        org: str,
        repo: str,
        branch: str,
        web_url: str = "https://github.com",
        annotator: Optional[ChecklistAnnotator] = None
    ):
        self.client = client
        self.org = org
        self.repo = repo
        self.branch = branch
        self.web_url = web_url.rstrip('/')
        self.annotator = annotator or ChecklistAnnotator()
        self._state: Optional[PullRequestState] = None
        self._looked_up = False

    def __str__(self) -> str:
        return f"{self.web_url}/{self.org_and_repo}/pull/{self.number}"

    @property
    def org_and_repo(self) -> str:
        return f"{self.org}/{self.repo}"

    @property
    def state(self) -> Optional[PullRequestState]:
        if not self._looked_up:
            pulls = self.client.list_pull_requests(self.org, self.repo, head=f"{self.org}:{self.branch}")
            self._state = PullRequestState.from_api(pulls[0]) if pulls else None
            self._looked_up = True
        return self._state

    @property
    def present(self) -> bool:
        return self.state is not None

    @property
    def number(self) -> Optional[int]:
        return self.state.number if self.state else None

    @property
    def base(self) -> Optional[str]:
        return self.state.base_sha if self.state else None

    @property
    def head(self) -> Optional[str]:
        return self.state.head_sha if self.state else None

    @property
    def body(self) -> str:
        return self.state.body if self.state else ""

    def changed_files(self) -> List[str]:
        """File names changed by the pull request, as reported by the API."""
        if not self.present:
            return []
        files = self.client.get_pull_request_files(self.org, self.repo, self.number)
        return [f['filename'] for f in files]

    def update_with_checklists(self, checklists: MatchResult, dry_run: bool = False) -> AnnotationResult:
        """
        Add checklists that are not on the pull request yet.

        The body is written before the comment is posted, so a failed
        comment leaves markers behind and a rerun will not repeat it.

        Args:
            checklists: Matcher output for this pull request
            dry_run: Compute the result without writing anything

        Returns:
            AnnotationResult for the current body
        """
        if not self.present:
            return AnnotationResult(new_body="")

        result = self.annotator.annotate(self.body, checklists)

        if not result.changed:
            logger.info("No new checklists to add")
            return result

        if dry_run:
            logger.info(f"Dry run: would add {', '.join(result.newly_added.names)}")
            return result

        self.client.update_issue(self.org, self.repo, self.number, result.new_body)
        number = self.number
        self._state = None
        self._looked_up = False

        self.client.add_comment(self.org, self.repo, number, result.comment)
        return result
