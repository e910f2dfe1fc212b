"""
External Checklist Definitions

Loads project-specific checklists from a YAML file. Definitions are
validated before any matching happens; a malformed file fails the run.

Example::

    checklists:
      - name: TranslationsChecklist
        human_name: Translations
        checklist: |
          - [ ] Strings are added to every locale
        paths:
          starts_with: [config/locales/]
          patterns: ['(^|/)i18n/']
"""

import logging
import re
from pathlib import Path
from typing import List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..models.checklist import ChecklistRule, PathPredicate


logger = logging.getLogger(__name__)


class RuleDefinitionError(Exception):
    """Malformed external checklist definition."""
    def __init__(self, path: Union[str, Path], message: str):
        super().__init__(f"{path}: {message}")
        self.path = str(path)


class PathRules(BaseModel):
    """Path primitives for one checklist"""
    model_config = ConfigDict(extra="forbid")

    starts_with: List[str] = Field(default_factory=list)
    equals: List[str] = Field(default_factory=list)
    contains: List[str] = Field(default_factory=list)
    ends_with: List[str] = Field(default_factory=list)
    patterns: List[str] = Field(default_factory=list)

    @field_validator('patterns')
    @classmethod
    def validate_patterns(cls, v):
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}")
        return v

    @model_validator(mode="after")
    def validate_not_empty(self):
        if not (self.starts_with or self.equals or self.contains or self.ends_with or self.patterns):
            raise ValueError("paths must define at least one rule")
        return self


class ChecklistDefinition(BaseModel):
    """One checklist in an external definition file"""
    model_config = ConfigDict(extra="forbid")

    name: str
    human_name: str
    checklist: str
    paths: PathRules

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or any(c.isspace() for c in v):
            raise ValueError('name must be a single word')
        if '-->' in v:
            raise ValueError("name cannot contain '-->'")
        return v

    @field_validator('human_name', 'checklist')
    @classmethod
    def validate_text(cls, v):
        if not v.strip():
            raise ValueError('must not be empty')
        return v

    def to_rule(self) -> ChecklistRule:
        return ChecklistRule(
            name=self.name,
            human_name=self.human_name.strip(),
            checklist=self.checklist.strip(),
            predicate=PathPredicate(
                starts_with=tuple(self.paths.starts_with),
                equals=tuple(self.paths.equals),
                contains=tuple(self.paths.contains),
                ends_with=tuple(self.paths.ends_with),
                patterns=tuple(self.paths.patterns),
            ),
        )


class ChecklistFile(BaseModel):
    """Top level of an external definition file"""
    model_config = ConfigDict(extra="forbid")

    checklists: List[ChecklistDefinition]

    @field_validator('checklists')
    @classmethod
    def validate_unique_names(cls, v):
        seen = set()
        for definition in v:
            if definition.name in seen:
                raise ValueError(f"duplicate checklist name: {definition.name}")
            seen.add(definition.name)
        return v


def parse_checklists(text: str, source: Union[str, Path] = "<string>") -> List[ChecklistRule]:
    """
    Parse checklist definitions from YAML text.

    Args:
        text: YAML document
        source: Name used in error messages

    Returns:
        Rules in file order

    Raises:
        RuleDefinitionError: For YAML or schema errors
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RuleDefinitionError(source, f"invalid YAML: {e}") from e

    if raw is None:
        raise RuleDefinitionError(source, "file is empty")

    try:
        parsed = ChecklistFile.model_validate(raw)
    except ValidationError as e:
        raise RuleDefinitionError(source, str(e)) from e

    rules = [definition.to_rule() for definition in parsed.checklists]
    logger.debug(f"Parsed {len(rules)} checklists from {source}")
    return rules


def load_checklists(path: Union[str, Path]) -> List[ChecklistRule]:
    """Read and parse an external checklist definition file."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RuleDefinitionError(path, f"cannot read file: {e}") from e

    return parse_checklists(text, source=path)
