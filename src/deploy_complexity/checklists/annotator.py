"""
Pull Request Annotator

Adds checklists to a pull request body exactly once. The only record of
a previous run is the identity marker embedded in the body text.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models.checklist import MatchResult
from ..formatting.checklist import body_with_checklists, render_checklist_comment


logger = logging.getLogger(__name__)


@dataclass
class AnnotationResult:
    """Outcome of annotating one pull request body."""
    new_body: str
    newly_added: MatchResult = field(default_factory=MatchResult)
    already_present: MatchResult = field(default_factory=MatchResult)
    comment: Optional[str] = None

    @property
    def changed(self) -> bool:
        return bool(self.newly_added)


def has_checklist(body: Optional[str], rule) -> bool:
    """Whether the rule's marker line already appears in the body."""
    return rule.marker in (body or "")


def annotate(current_body: Optional[str], match_result: MatchResult) -> AnnotationResult:
    """
    Compute the annotated pull request body.

    Args:
        current_body: Body text as currently stored on the pull request
        match_result: Output of the matcher for this run

    Returns:
        AnnotationResult; new_body equals current_body and comment is None
        when every matched checklist is already present
    """
    body = current_body or ""

    new_checklists = MatchResult()
    existing_checklists = MatchResult()
    for checklist in match_result:
        if has_checklist(body, checklist.rule):
            existing_checklists.matches.append(checklist)
        else:
            new_checklists.matches.append(checklist)

    if existing_checklists:
        logger.debug(f"Already present: {', '.join(existing_checklists.names)}")

    if not new_checklists:
        return AnnotationResult(new_body=body, already_present=existing_checklists)

    logger.debug(f"Adding: {', '.join(new_checklists.names)}")
    return AnnotationResult(
        new_body=body_with_checklists(body, new_checklists.rules),
        newly_added=new_checklists,
        already_present=existing_checklists,
        comment=render_checklist_comment(new_checklists),
    )


class ChecklistAnnotator:
    """Thin object wrapper around annotate() for dependency injection."""

    def annotate(self, current_body: Optional[str], match_result: MatchResult) -> AnnotationResult:
        return annotate(current_body, match_result)
