"""
Checklist Data Models

Checklist rules, the path predicates that select them, and match results.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class PathPredicate:
    """
    Declarative test over a repository-relative path.

    A path matches when any one of the configured primitives holds.
    Patterns are searched anywhere in the path, not anchored.
    """
    starts_with: Tuple[str, ...] = ()
    equals: Tuple[str, ...] = ()
    contains: Tuple[str, ...] = ()
    ends_with: Tuple[str, ...] = ()
    patterns: Tuple[str, ...] = ()
    _compiled: Tuple["re.Pattern[str]", ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        """Normalize lists to tuples and compile patterns once."""
        for name in ("starts_with", "equals", "contains", "ends_with", "patterns"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "_compiled", tuple(re.compile(p) for p in self.patterns))

    def __call__(self, path: str) -> bool:
        return (
            any(path.startswith(prefix) for prefix in self.starts_with)
            or any(path == literal for literal in self.equals)
            or any(substr in path for substr in self.contains)
            or any(path.endswith(suffix) for suffix in self.ends_with)
            or any(pattern.search(path) is not None for pattern in self._compiled)
        )

    @property
    def is_empty(self) -> bool:
        return not (self.starts_with or self.equals or self.contains or self.ends_with or self.patterns)


@dataclass(frozen=True)
class ChecklistRule:
    """A named checklist and the predicate that decides which paths need it."""
    name: str
    human_name: str
    checklist: str
    predicate: Callable[[str], bool] = field(compare=False)

    def __post_init__(self):
        """Validate the fields the identity marker is built from."""
        if not self.name or any(c.isspace() for c in self.name):
            raise ValueError(f"Checklist name must be a single word: {self.name!r}")
        if "-->" in self.name:
            raise ValueError(f"Checklist name cannot contain '-->': {self.name!r}")
        if not self.human_name.strip():
            raise ValueError("Checklist human_name cannot be empty")

    def __str__(self) -> str:
        return self.name

    @property
    def id(self) -> str:
        """Identity token embedded in pull request bodies."""
        return f"checklist:{self.name}"

    @property
    def marker(self) -> str:
        return f"<!-- {self.id} -->"

    @property
    def title(self) -> str:
        return f"**{self.human_name} Checklist**"

    def matches(self, path: str) -> bool:
        return bool(self.predicate(path))

    def relevant_for(self, files: Iterable[str]) -> List[str]:
        """Files that trigger this checklist, in input order, duplicates kept."""
        return [path for path in files if self.matches(path)]

    def for_pr_body(self) -> str:
        """Block appended to a pull request body."""
        return f"\n\n{self.marker}\n{self.title}\n\n{self.checklist}"


@dataclass
class ChecklistMatch:
    """A rule together with the changed files that triggered it."""
    rule: ChecklistRule
    files: List[str]

    def __post_init__(self):
        if not self.files:
            raise ValueError(f"{self.rule.name} matched no files")

    @property
    def name(self) -> str:
        return self.rule.name


@dataclass
class MatchResult:
    """Matched checklists in registry order."""
    matches: List[ChecklistMatch] = field(default_factory=list)

    def __iter__(self) -> Iterator[ChecklistMatch]:
        return iter(self.matches)

    def __len__(self) -> int:
        return len(self.matches)

    def __bool__(self) -> bool:
        return bool(self.matches)

    def __contains__(self, name: object) -> bool:
        return any(m.name == name for m in self.matches)

    @property
    def rules(self) -> List[ChecklistRule]:
        return [m.rule for m in self.matches]

    @property
    def names(self) -> List[str]:
        return [m.name for m in self.matches]

    def get(self, name: str) -> Optional[ChecklistMatch]:
        for match in self.matches:
            if match.name == name:
                return match
        return None

    def files_for(self, name: str) -> List[str]:
        match = self.get(name)
        return list(match.files) if match else []
