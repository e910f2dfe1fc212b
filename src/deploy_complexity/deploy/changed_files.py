"""
Changed Files

Classifies the paths changed between two deploys.
"""

from typing import List


MIGRATIONS_DIR = "db/migrate/"
ELM_MANIFESTS = ("elm.json", "elm-package.json")
JAVASCRIPT_MANIFESTS = ("package.json",)
RUBY_LOCKFILES = ("Gemfile.lock",)


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


class ChangedFiles:
    """
    Output of ``git diff --name-only`` grouped by what the deploy report
    cares about.
    """

    def __init__(self, names_only: str, versioned_url: str):
        """
        Args:
            names_only: Newline separated paths
            versioned_url: Blob URL prefix pinned to the deployed revision
        """
        self.paths = [line.strip() for line in names_only.splitlines() if line.strip()]
        self.versioned_url = versioned_url

    def __len__(self) -> int:
        return len(self.paths)

    def _named(self, names) -> List[str]:
        return [path for path in self.paths if _basename(path) in names]

    @property
    def migrations(self) -> List[str]:
        """Links to migration files at the deployed revision."""
        return [self.versioned_url + path for path in self.paths if path.startswith(MIGRATIONS_DIR)]

    @property
    def elm_packages(self) -> List[str]:
        return self._named(ELM_MANIFESTS)

    @property
    def javascript_dependencies(self) -> List[str]:
        return self._named(JAVASCRIPT_MANIFESTS)

    @property
    def ruby_dependencies(self) -> List[str]:
        return self._named(RUBY_LOCKFILES)
