"""
Revision Comparator

Runs a dependency comparator over every changed manifest between two
revisions.
"""

import logging
from typing import Iterable, List, Optional, Type

from ..git import Git
from ..models.deploy import DependencySection
from .dependencies import DependencyChanges, DependencyParseError


logger = logging.getLogger(__name__)


class RevisionComparator:
    """Old vs. new contents of a group of files, via ``git show``."""

    def __init__(
        self,
        comparator: Type[DependencyChanges],
        files: Iterable[str],
        base: str,
        to: str,
        git: Git
    ):
        self.comparator = comparator
        self.files = list(files)
        self.base = base
        self.to = to
        self.git = git

    def changes(self) -> List[str]:
        changes: List[str] = []
        for file in self.files:
            old = self.git.show_file(self.base, file)
            new = self.git.show_file(self.to, file)
            try:
                changes.extend(self.comparator(file=file, old=old, new=new).changes())
            except DependencyParseError as e:
                logger.warning(f"Could not compare {file} between {self.base} and {self.to}: {e}")
                changes.append(f"Unable to compare {file}: {e}")
        return changes

    def output(self, heading: str) -> Optional[DependencySection]:
        """Report section for these files, or None when nothing changed."""
        changes = self.changes()
        if not changes:
            return None
        return DependencySection(heading=heading, changes=changes)
