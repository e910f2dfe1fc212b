"""
Dependency Changes

Compares two versions of a dependency manifest or lockfile and describes
what was added, removed or updated.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional


logger = logging.getLogger(__name__)


class DependencyParseError(ValueError):
    """A manifest could not be parsed"""
    def __init__(self, file: str, message: str):
        super().__init__(f"{file}: {message}")
        self.file = file


@dataclass(frozen=True)
class DependencyVersion:
    """Resolved version of one dependency and where it comes from."""
    version: str
    source: Optional[str] = None

    def __str__(self) -> str:
        if self.source:
            return f"{self.version} ({self.source})"
        return self.version


class DependencyChanges:
    """
    Base comparator. Subclasses implement parse() for one file format.

    Either side may be None when the file did not exist at that revision.
    """

    def __init__(self, file: str, old: Optional[str], new: Optional[str]):
        self.file = file
        self.old = old
        self.new = new

    def parse(self, content: str) -> Dict[str, DependencyVersion]:
        raise NotImplementedError

    def _parse(self, content: Optional[str]) -> Dict[str, DependencyVersion]:
        if content is None or not content.strip():
            return {}
        return self.parse(content)

    def changes(self) -> List[str]:
        """
        Describe differences between the old and new file.

        Returns:
            Added, then removed, then updated lines, each sorted by name
        """
        old = self._parse(self.old)
        new = self._parse(self.new)

        added = [f"Added {name}: {new[name]} ({self.file})" for name in sorted(new.keys() - old.keys())]
        removed = [f"Removed {name}: {old[name]} ({self.file})" for name in sorted(old.keys() - new.keys())]
        updated = [
            f"Updated {name}: {old[name].version} -> {new[name]} ({self.file})"
            for name in sorted(old.keys() & new.keys())
            if old[name] != new[name]
        ]

        return added + removed + updated


class ChangedRubyGems(DependencyChanges):
    """Gemfile.lock comparison (GEM, GIT and PATH sections)."""

    SPEC_PATTERN = re.compile(r"^    (\S+) \((.+)\)$")
    SOURCE_SECTIONS = {"GEM", "GIT", "PATH"}

    def parse(self, content: str) -> Dict[str, DependencyVersion]:
        gems: Dict[str, DependencyVersion] = {}
        section = None
        remote = None
        revision = None

        for line in content.splitlines():
            if line and not line[0].isspace():
                section = line.strip()
                remote = None
                revision = None
                continue

            if section not in self.SOURCE_SECTIONS:
                continue

            stripped = line.strip()
            if line.startswith("  remote: "):
                remote = stripped[len("remote: "):]
            elif line.startswith("  revision: "):
                revision = stripped[len("revision: "):]
            else:
                spec = self.SPEC_PATTERN.match(line)
                if spec:
                    gems[spec.group(1)] = DependencyVersion(spec.group(2), self._source(section, remote, revision))

        if not gems and "specs:" not in content:
            raise DependencyParseError(self.file, "no gem specs found")
        return gems

    @staticmethod
    def _source(section: Optional[str], remote: Optional[str], revision: Optional[str]) -> Optional[str]:
        if section == "GIT":
            return " ".join(part for part in ("GIT", remote, revision) if part)
        if section == "PATH":
            return " ".join(part for part in ("PATH", remote) if part)
        return None


class _JsonManifest(DependencyChanges):
    """Shared JSON loading for package.json and elm.json."""

    def _load(self, content: str) -> Dict:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DependencyParseError(self.file, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise DependencyParseError(self.file, "expected a JSON object")
        return data

    @staticmethod
    def _versions(section) -> Dict[str, DependencyVersion]:
        if not isinstance(section, dict):
            return {}
        return {
            name: DependencyVersion(str(version))
            for name, version in section.items()
            if not isinstance(version, dict)
        }


class ChangedJavascriptPackages(_JsonManifest):
    """package.json comparison across all dependency groups."""

    GROUPS = ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies")

    def parse(self, content: str) -> Dict[str, DependencyVersion]:
        data = self._load(content)
        packages: Dict[str, DependencyVersion] = {}
        for group in self.GROUPS:
            packages.update(self._versions(data.get(group)))
        return packages


class ChangedElmPackages(_JsonManifest):
    """elm.json (direct/indirect) and legacy elm-package.json comparison."""

    def parse(self, content: str) -> Dict[str, DependencyVersion]:
        data = self._load(content)
        dependencies = data.get("dependencies", {})
        packages: Dict[str, DependencyVersion] = {}

        if isinstance(dependencies, dict) and ("direct" in dependencies or "indirect" in dependencies):
            packages.update(self._versions(dependencies.get("indirect")))
            packages.update(self._versions(dependencies.get("direct")))
        else:
            packages.update(self._versions(dependencies))

        return packages
