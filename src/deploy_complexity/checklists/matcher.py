"""
Checklist Matcher

Decides which checklists apply to a set of changed files.
"""

import logging
from typing import Iterable, Sequence

from ..models.checklist import ChecklistMatch, ChecklistRule, MatchResult


logger = logging.getLogger(__name__)


def match(files: Iterable[str], rules: Sequence[ChecklistRule]) -> MatchResult:
    """
    Match changed files against checklist rules.

    Every rule is evaluated against every file. Files keep their input
    order and duplicates are kept as given.

    Args:
        files: Repository-relative paths of changed files
        rules: Rules in registry order

    Returns:
        MatchResult with one entry per rule that matched at least one file
    """
    files = list(files)
    matches = []

    for rule in rules:
        relevant = rule.relevant_for(files)
        if relevant:
            logger.debug(f"{rule.name} matched {len(relevant)} files")
            matches.append(ChecklistMatch(rule=rule, files=relevant))

    return MatchResult(matches=matches)


class ChecklistMatcher:
    """Matcher bound to a frozen rule registry."""

    def __init__(self, rules: Sequence[ChecklistRule]):
        """
        Initialize checklist matcher.

        Args:
            rules: Frozen registry from build_registry()
        """
        self.rules = tuple(rules)

    def for_files(self, files: Iterable[str]) -> MatchResult:
        result = match(files, self.rules)
        logger.info(f"{len(result)} of {len(self.rules)} checklists apply")
        return result
