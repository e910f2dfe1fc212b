"""
Checklist Registry

Collects built-in and externally defined checklist rules at startup and
freezes them into the ordered tuple handed to the matcher.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from ..models.checklist import ChecklistRule
from .builtin import BUILTIN_CHECKLISTS
from .loader import load_checklists


logger = logging.getLogger(__name__)


class RegistryFrozenError(RuntimeError):
    """Raised when a rule is registered after matching has started."""


class ChecklistRegistry:
    """
    Ordered, name-unique set of checklist rules.

    Registering a rule under an existing name replaces the earlier rule
    in place, so registry order and identity markers stay stable.
    """

    def __init__(self, rules: Iterable[ChecklistRule] = ()):
        self._rules: List[ChecklistRule] = []
        self._frozen = False
        for rule in rules:
            self.register(rule)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self._rules)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def names(self) -> List[str]:
        return [rule.name for rule in self._rules]

    def register(self, rule: ChecklistRule) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {rule.name}: registry is frozen")

        for index, existing in enumerate(self._rules):
            if existing.name == rule.name:
                logger.info(f"Replacing checklist {rule.name} with an external definition")
                self._rules[index] = rule
                return

        self._rules.append(rule)

    def register_all(self, rules: Iterable[ChecklistRule]) -> None:
        for rule in rules:
            self.register(rule)

    def load(self, path: Union[str, Path]) -> None:
        """Register every checklist defined in an external YAML file."""
        logger.info(f"Loading external configuration from {path}")
        self.register_all(load_checklists(path))

    def freeze(self) -> Tuple[ChecklistRule, ...]:
        self._frozen = True
        return tuple(self._rules)


def build_registry(extra_paths: Sequence[Union[str, Path]] = ()) -> Tuple[ChecklistRule, ...]:
    """
    Build the frozen rule registry for one run.

    Args:
        extra_paths: External checklist definition files, loaded in order

    Returns:
        Rules in registry order

    Raises:
        RuleDefinitionError: If an external file is malformed
    """
    registry = ChecklistRegistry(BUILTIN_CHECKLISTS)
    for path in extra_paths:
        registry.load(path)

    rules = registry.freeze()
    logger.debug(f"Checklist registry: {', '.join(rule.name for rule in rules)}")
    return rules
