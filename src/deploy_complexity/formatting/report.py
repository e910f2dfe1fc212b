"""
Deploy Report Formatter

Plain-text report for one deploy summary, suitable for pasting into
release notes.
"""

from typing import List

from ..models.deploy import DeploySummary


def render_deploy_report(summary: DeploySummary) -> str:
    """
    Render a deploy summary.

    Args:
        summary: DeploySummary from DeploySummarizer

    Returns:
        Report text ending with a blank line
    """
    lines: List[str] = [f"Deploy tag {summary.to} [{summary.revision}]"]

    if summary.is_redeploy:
        lines.append(f"redeployed {summary.base} {summary.time_delta}")
        lines.append("")
        return "\n".join(lines) + "\n"

    lines.append(
        "%d pull requests of %d merges, %d commits %s"
        % (len(summary.pull_requests), len(summary.merges), len(summary.commits), summary.time_delta)
    )
    if summary.shortstat:
        lines.append(summary.shortstat)
    lines.append(summary.compare_url)
    lines.append("")

    if summary.migrations:
        lines.append("Migrations:")
        lines.extend(summary.migrations)
        lines.append("")

    for section in summary.dependency_sections:
        lines.append(section.heading)
        lines.extend(section.changes)
        lines.append("")

    # commits outside of any pull request are only listed when there are no PRs
    if summary.pull_requests:
        lines.append("Pull Requests:")
        lines.extend(summary.pull_requests)
    else:
        lines.append("Commits:")
        lines.extend(summary.commits)

    if summary.dirstat:
        lines.append("Dirstats:")
        lines.append(summary.dirstat.rstrip("\n"))
    if summary.stat:
        lines.append("Stats:")
        lines.append(summary.stat.rstrip("\n"))

    lines.append("")
    return "\n".join(lines) + "\n"
