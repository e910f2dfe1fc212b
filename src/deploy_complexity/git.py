"""
Git Command Layer

Runs the git queries both tools need. Every call shells out to ``git``
in the configured working directory.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union


logger = logging.getLogger(__name__)

REMOTE_PREFIX = "origin/"


class GitError(Exception):
    """A git command exited with a non-zero status"""
    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        super().__init__(f"{' '.join(command)} failed ({returncode}): {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def locate_git_dir(start: Union[str, Path]) -> Optional[Path]:
    """Nearest directory at or above start that contains a .git entry."""
    path = Path(start).resolve()
    for candidate in (path, *path.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


class Git:
    """git wrapper bound to one working directory."""

    def __init__(self, git_dir: Union[str, Path] = ".", timeout: int = 60):
        self.git_dir = Path(git_dir)
        self.timeout = timeout

    @staticmethod
    def safe_name(name: Optional[str]) -> Optional[str]:
        """origin/master and master both become master."""
        if name is None:
            return None
        name = name.strip()
        if name.startswith(REMOTE_PREFIX):
            return name[len(REMOTE_PREFIX):]
        return name

    def run(self, *args: str) -> str:
        """
        Run a git subcommand and return its stdout.

        Raises:
            GitError: If git exits non-zero or is not installed
        """
        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} in {self.git_dir}")
        try:
            result = subprocess.run(
                command,
                cwd=self.git_dir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise GitError(command, 127, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise GitError(command, -1, f"timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise GitError(command, result.returncode, result.stderr)
        return result.stdout

    def _lines(self, *args: str) -> List[str]:
        return [line for line in self.run(*args).splitlines() if line]

    def tags(self, pattern: Optional[str] = None) -> List[str]:
        """All tags, optionally only those containing pattern."""
        tags = self._lines("tag", "-l")
        if pattern:
            tags = [tag for tag in tags if pattern in tag]
        return tags

    def tags_pointing_at(self, name: str) -> List[str]:
        return self._lines("tag", "--points-at", name)

    def rev_parse_short(self, name: str) -> str:
        return self.run("rev-parse", "--short", name).strip()

    def rev_list_abbrev(self, name: str) -> str:
        return self.run("rev-list", "--abbrev-commit", "-n1", name).strip()

    def log_oneline(self, revision_range: str) -> List[str]:
        return self._lines("log", "--oneline", revision_range)

    def diff_shortstat_summary(self, revision_range: str) -> List[str]:
        return self._lines("diff", "--shortstat", "--summary", revision_range)

    def diff_name_only(self, revision_range: str) -> str:
        return self.run("diff", "--name-only", revision_range)

    def diff_dirstat(self, revision_range: str) -> str:
        return self.run("diff", "--dirstat=lines,cumulative", revision_range)

    def diff_stat(self, revision_range: str) -> str:
        return self.run("diff", "--stat", revision_range)

    def show_file(self, revision: str, path: str) -> Optional[str]:
        """Contents of path at revision, or None if it does not exist there."""
        try:
            return self.run("show", f"{revision}:{path}")
        except GitError as e:
            if e.returncode == 128:
                logger.debug(f"{path} does not exist at {revision}")
                return None
            raise

    def merge_base(self, base: str, head: str) -> str:
        return self.run("merge-base", base, head).strip()

    def changed_files(self, base: str, head: str) -> List[str]:
        """Paths changed on head since it diverged from base."""
        ancestor = self.merge_base(base, head)
        return self._lines("diff", "--name-only", ancestor, head)

    def remote_url(self, remote: str = "origin") -> str:
        return self.run("config", "--get", f"remote.{remote}.url").strip()
