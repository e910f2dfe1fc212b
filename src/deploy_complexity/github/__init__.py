"""
GitHub Integration Layer

This module provides GitHub API access for finding a branch's pull request,
updating its body and commenting on it.
"""

from .client import GitHubClient, GitHubAPIError, RateLimitExceeded
from .pull_request import PullRequest

__all__ = ['GitHubClient', 'GitHubAPIError', 'RateLimitExceeded', 'PullRequest']
