"""
GitHub API Client

Handles GitHub API authentication, rate limiting, and communication.
Provides the pull request reads and writes the checklist tool needs.
"""

import time
import logging
from typing import Dict, List, Optional
from datetime import datetime
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class RateLimitExceeded(GitHubAPIError):
    """GitHub API rate limit exceeded"""
    def __init__(self, reset_time: datetime):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}", status_code=429)
        self.reset_time = reset_time


class GitHubClient:
    """
    GitHub API client with authentication, rate limiting, and error handling.

    Provides methods for:
    - Finding the open pull request for a branch
    - Listing a pull request's changed files
    - Updating a pull request body and commenting on it
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout_seconds: int = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout_seconds: Per-request timeout
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.session = self._create_session()
        self.rate_limit_remaining = 5000
        self.rate_limit_reset = datetime.now()

    def _create_session(self) -> requests.Session:
        """Create requests session with retry strategy and authentication."""
        session = requests.Session()

        # Only idempotent methods are retried; writes go out once
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'deploy-complexity'
        })

        return session

    def _check_rate_limit(self) -> None:
        """Check and handle GitHub API rate limits."""
        if self.rate_limit_remaining <= 0 and datetime.now() < self.rate_limit_reset:
            wait_time = (self.rate_limit_reset - datetime.now()).total_seconds()
            logger.warning(f"Rate limit exhausted, resets in {wait_time:.1f}s")
            raise RateLimitExceeded(self.rate_limit_reset)

    def _update_rate_limit(self, response: requests.Response) -> None:
        """Update rate limit information from response headers."""
        if 'X-RateLimit-Remaining' in response.headers:
            self.rate_limit_remaining = int(response.headers['X-RateLimit-Remaining'])

        if 'X-RateLimit-Reset' in response.headers:
            reset_timestamp = int(response.headers['X-RateLimit-Reset'])
            self.rate_limit_reset = datetime.fromtimestamp(reset_timestamp)

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API with rate limiting.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For API errors
            RateLimitExceeded: When rate limit is exceeded
        """
        self._check_rate_limit()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout_seconds)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        self._update_rate_limit(response)

        if response.status_code == 429 or (
            response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0'
        ):
            reset_time = datetime.fromtimestamp(int(response.headers.get('X-RateLimit-Reset', time.time() + 3600)))
            raise RateLimitExceeded(reset_time)

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {}
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {error_data.get('message', 'Unknown error')}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def list_pull_requests(
        self,
        owner: str,
        repo: str,
        head: Optional[str] = None,
        state: str = "open"
    ) -> List[Dict]:
        """
        List pull requests, optionally filtered by head branch.

        Args:
            owner: Repository owner
            repo: Repository name
            head: "<user or org>:<branch>" filter
            state: "open", "closed" or "all"

        Returns:
            Pull request data, newest first
        """
        params = {'state': state}
        if head:
            params['head'] = head

        logger.debug(f"Listing {state} PRs for {owner}/{repo} (head={head})")
        response = self._make_request('GET', f'/repos/{owner}/{repo}/pulls', params=params)
        return response.json()

    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Get files changed in a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number

        Returns:
            List of file change data
        """
        logger.info(f"Fetching PR files for {owner}/{repo}#{pr_number}")

        files = []
        page = 1
        per_page = 100

        while True:
            response = self._make_request(
                'GET',
                f'/repos/{owner}/{repo}/pulls/{pr_number}/files',
                params={'page': page, 'per_page': per_page}
            )

            page_files = response.json()
            if not page_files:
                break

            files.extend(page_files)

            if len(page_files) < per_page:
                break

            page += 1

        logger.info(f"Found {len(files)} changed files")
        return files

    def update_issue(self, owner: str, repo: str, number: int, body: str) -> Dict:
        """
        Replace the body of an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Issue or pull request number
            body: New body text

        Returns:
            Updated issue data
        """
        logger.info(f"Updating body of {owner}/{repo}#{number}")

        response = self._make_request('PATCH', f'/repos/{owner}/{repo}/issues/{number}', json={'body': body})
        return response.json()

    def add_comment(self, owner: str, repo: str, number: int, body: str) -> Dict:
        """
        Comment on an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Issue or pull request number
            body: Comment text

        Returns:
            Created comment data
        """
        logger.info(f"Commenting on {owner}/{repo}#{number}")

        response = self._make_request('POST', f'/repos/{owner}/{repo}/issues/{number}/comments', json={'body': body})
        return response.json()
