"""
Formatting Layer

Markdown for pull request bodies and comments, plain text for deploy reports.
"""

from .checklist import body_with_checklists, render_checklist_comment
from .report import render_deploy_report

__all__ = ['body_with_checklists', 'render_checklist_comment', 'render_deploy_report']
