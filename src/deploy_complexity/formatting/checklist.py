"""
Checklist Formatter

Renders checklist blocks for pull request bodies and the summary comment
explaining why they were added.
"""

from typing import Iterable

from ..models.checklist import ChecklistRule, MatchResult


COMMENT_HEADER = "| I added this checklist | because these files changed |\n|---|---|\n"
COMMENT_FOOTER = (
    "\nPlease take a look at the updated pull request body and make sure you check off any new items. Thanks!"
)


def body_with_checklists(body: str, rules: Iterable[ChecklistRule]) -> str:
    """Append each rule's marker, title and checklist to the body."""
    for rule in rules:
        body += rule.for_pr_body()
    return body


def format_file_list(files: Iterable[str]) -> str:
    return ", ".join(f"`{path}`" for path in files)


def render_checklist_comment(checklists: MatchResult) -> str:
    """
    Render one comment covering every newly added checklist.

    Args:
        checklists: Newly added checklists and the files behind them

    Returns:
        Markdown comment body
    """
    checklist_str = "a checklist" if len(checklists) == 1 else "some checklists"
    comment = f"🤖 Beep boop! I added {checklist_str}! Why?\n\n" + COMMENT_HEADER
    for checklist in checklists:
        comment += f"| {checklist.rule.human_name} | {format_file_list(checklist.files)} |\n"
    comment += COMMENT_FOOTER
    return comment
