"""
Deploy Summarizer

Summarizes the delta between two deploy points: commits, pull requests,
migrations and dependency changes.
"""

import logging
import re
from datetime import datetime
from typing import List, Optional

from ..git import Git
from ..models.deploy import DeploySummary, PullRequestRef
from .changed_files import ChangedFiles
from .dependencies import ChangedElmPackages, ChangedJavascriptPackages, ChangedRubyGems
from .revision_comparator import RevisionComparator


logger = logging.getLogger(__name__)

# production-2016-10-22-0103 or $ENV-YYYY-MM-DD-HHmm
TAG_TIME_PATTERN = re.compile(r"-(\d{4}-\d{2}-\d{2}-\d{4})")
MERGE_PATTERN = re.compile(r"Merges|#\d+")
MERGE_COMMIT_PATTERN = re.compile(r"pull request #(\d+) from (.*)$")
SQUASH_COMMIT_PATTERN = re.compile(r"(\w+)\s+(.*)\(#(\d+)\)")
REMOTE_PATTERN = re.compile(r"^(?:\w+://)?(?:[^@/]+@)?([^:/]+)[:/](.+?)(?:\.git)?/?$")


def parse_when(tag: str) -> Optional[datetime]:
    match = TAG_TIME_PATTERN.search(tag)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d-%H%M")
    except ValueError:
        return None


def time_between_deploys(base: str, to: str) -> str:
    deploy_time = parse_when(to)
    last_time = parse_when(base)

    if deploy_time is None or last_time is None:
        return "pending deploy"

    hours = (deploy_time - last_time).total_seconds() / 60 ** 2
    if hours < 24:
        return "after %2.1f %s" % (hours, "hours")
    return "after %2.1f %s" % (hours / 24, "days")


def short_name(name: str) -> str:
    """origin/master -> master"""
    return name.strip().split("/")[-1]


def github_url_from_remote(remote_url: str) -> Optional[str]:
    """Web URL for an ssh or https remote, e.g. git@github.com:org/repo.git."""
    match = REMOTE_PATTERN.match(remote_url.strip())
    if not match:
        return None
    return f"https://{match.group(1)}/{match.group(2)}"


def extract_pull_requests(merges: List[str]) -> List[PullRequestRef]:
    """Pull requests named by merge commits and squash-merge subjects."""
    pull_requests = []
    for line in merges:
        merge = MERGE_COMMIT_PATTERN.search(line)
        if merge:
            pull_requests.append(PullRequestRef(int(merge.group(1)), short_name(merge.group(2))))
            continue
        squash = SQUASH_COMMIT_PATTERN.search(line)
        if squash:
            pull_requests.append(PullRequestRef(int(squash.group(3)), squash.group(2).strip(), squashed=True))
    return pull_requests


class DeploySummarizer:
    """
    Builds DeploySummary objects for ranges of deploy tags.

    Deploys are the delta from base to ``to``: ``to`` contains the commits
    being added to base.
    """

    def __init__(self, git: Git, gh_url: str, dirstat: bool = False, stat: bool = False):
        self.git = git
        self.gh_url = gh_url.rstrip("/")
        self.dirstat = dirstat
        self.stat = stat

    def reference(self, name: str) -> str:
        """Closest tag for a branch name, falling back to the short SHA."""
        branch = short_name(name)
        tags = [tag for tag in self.git.tags_pointing_at(name) if branch in tag]
        if tags:
            return tags[0]
        return self.git.rev_parse_short(branch)

    def summarize(self, base: str, to: str) -> DeploySummary:
        revision_range = f"{base}...{to}"
        logger.info(f"Summarizing {revision_range}")

        commits = self.git.log_oneline(revision_range)
        summary = DeploySummary(
            base=base,
            to=to,
            revision=self.git.rev_list_abbrev(to),
            time_delta=time_between_deploys(short_name(base), short_name(to)),
            commits=commits,
        )
        if summary.is_redeploy:
            return summary

        summary.merges = [line for line in commits if MERGE_PATTERN.search(line)]
        summary.pull_requests = [pr.format(self.gh_url) for pr in extract_pull_requests(summary.merges)]

        shortstat = self.git.diff_shortstat_summary(revision_range)
        summary.shortstat = shortstat[0].strip() if shortstat else None
        summary.compare_url = f"{self.gh_url}/compare/{self.reference(base)}...{self.reference(to)}"

        changed_files = ChangedFiles(
            self.git.diff_name_only(revision_range),
            f"{self.gh_url}/blob/{short_name(to)}/",
        )
        summary.migrations = changed_files.migrations

        comparisons = [
            (ChangedElmPackages, changed_files.elm_packages, "Changed Elm packages:"),
            (ChangedJavascriptPackages, changed_files.javascript_dependencies, "Javascript Dependency Changes:"),
            (ChangedRubyGems, changed_files.ruby_dependencies, "Ruby dependency changes:"),
        ]
        for comparator, files, heading in comparisons:
            section = RevisionComparator(comparator, files, base, to, self.git).output(heading)
            if section:
                summary.dependency_sections.append(section)

        if self.dirstat:
            summary.dirstat = self.git.diff_dirstat(revision_range)
        if self.stat:
            summary.stat = self.git.diff_stat(revision_range)

        return summary

    def deploy_tags(self, branch: str) -> List[str]:
        # the oldest tag has no predecessor to compare against
        return self.git.tags(branch)[1:]

    def history(self, branch: str, last_n: Optional[int] = None) -> List[DeploySummary]:
        """Summaries of consecutive deploy tags; all of them when last_n is None."""
        deploys = self.deploy_tags(branch)
        if last_n:
            deploys = deploys[-(last_n + 1):]
        return [self.summarize(base, to) for base, to in zip(deploys, deploys[1:])]

    def promote(self) -> List[DeploySummary]:
        """What a staging -> production and master -> staging promotion would ship."""
        return [
            self.summarize("origin/production", "origin/staging"),
            self.summarize("origin/staging", "origin/master"),
        ]

    def diff(self, to: str, base: Optional[str] = None, branch: str = "production") -> DeploySummary:
        """Summary of to against base, or against the latest deploy tag of branch."""
        if base is None:
            deploys = self.deploy_tags(branch)
            if not deploys:
                raise ValueError(f"No deploy tags found for {branch}")
            base = deploys[-1]
        return self.summarize(base, to)
