"""
Command-line Interface

Entry points for the two tools:

    deploy-complexity [[BASE] TO]   summarize deploys for release notes
    pr-checklist --branch BRANCH    add matching checklists to a branch's PR
"""

import logging
import os
from typing import Optional, Tuple

import click

from . import __version__
from .checklists.loader import RuleDefinitionError
from .checklists.matcher import ChecklistMatcher
from .checklists.registry import build_registry
from .config import AppConfig, ConfigurationError, setup_logging
from .deploy.summarizer import DeploySummarizer, github_url_from_remote, short_name
from .formatting.report import render_deploy_report
from .git import Git, GitError, locate_git_dir
from .github.client import GitHubAPIError, GitHubClient
from .github.pull_request import PullRequest


logger = logging.getLogger(__name__)

LOG_LEVELS = click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False)


def _load_config(config_path: Optional[str]) -> AppConfig:
    try:
        return AppConfig.load(config_path)
    except (FileNotFoundError, ConfigurationError) as e:
        raise click.UsageError(str(e))


def _configure_logging(config: AppConfig, log_level: Optional[str]) -> None:
    if log_level:
        config.logging.level = log_level.upper()
    try:
        config.validate()
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    setup_logging(config.logging)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--git-dir", default=None, help="Project directory to run git commands from.")
@click.option("-b", "--branch", default=None, help="Which branch should we examine? (default: $GIT_BRANCH)")
@click.option("-t", "--token", default=None, help="Github access token (default: $GITHUB_TOKEN)")
@click.option("-o", "--org", default=None, help="Github organization to query for PRs (default: NoRedInk)")
@click.option("-r", "--repo", default=None, help="Github repository to query for PRs (default: NoRedInk)")
@click.option("-n", "--dry-run", is_flag=True, default=False, help="Check things, but do not make any edits or comments.")
@click.option(
    "-c", "--custom-checklist", "custom_checklists", multiple=True,
    help="YAML file to load additional checklists from. Repeatable."
)
@click.option("--api-files", is_flag=True, default=False, help="Read changed files from the GitHub API instead of git.")
@click.option("--config", "config_path", default=None, help="YAML settings file.")
@click.option("--log-level", type=LOG_LEVELS, default=None, help="Logging level.")
@click.version_option(version=__version__, prog_name="pr-checklist")
def pr_checklist(
    git_dir: Optional[str],
    branch: Optional[str],
    token: Optional[str],
    org: Optional[str],
    repo: Optional[str],
    dry_run: bool,
    custom_checklists: Tuple[str, ...],
    api_files: bool,
    config_path: Optional[str],
    log_level: Optional[str],
):
    """Add checklists to the open pull request for a branch based on the files it changes."""
    config = _load_config(config_path)
    _configure_logging(config, log_level)

    settings = config.checklist
    settings.branch = Git.safe_name(branch or settings.branch)
    settings.org = org or settings.org
    settings.repo = repo or settings.repo
    settings.git_dir = git_dir or settings.git_dir
    settings.dry_run = dry_run or settings.dry_run
    settings.use_api_files = api_files or settings.use_api_files
    if custom_checklists:
        settings.custom_checklists = list(custom_checklists)
    config.github.token = token or config.github.token

    try:
        config.validate_for_checklist()
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    try:
        rules = build_registry(settings.custom_checklists)
    except RuleDefinitionError as e:
        raise click.ClickException(f"Invalid checklist definition: {e}")

    click.echo(f"Checking branch {settings.branch}...")
    client = GitHubClient(config.github.token, config.github.api_base_url, config.github.timeout_seconds)
    pr = PullRequest(client, settings.org, settings.repo, settings.branch, web_url=config.github.web_url)

    if settings.dry_run:
        click.echo("!!! IN DRY RUN MODE, NOT DOING ANY OF THESE THINGS !!!")

    try:
        if not pr.present:
            click.echo("Could not find pull request!")
            return

        click.echo(f"Found pull request {pr}")

        if settings.use_api_files:
            files = pr.changed_files()
        else:
            repo_dir = settings.git_dir or locate_git_dir(os.getcwd()) or "."
            files = Git(repo_dir).changed_files(pr.base, pr.head)

        checklists = ChecklistMatcher(rules).for_files(files)
        result = pr.update_with_checklists(checklists, settings.dry_run)
    except (GitHubAPIError, GitError) as e:
        logger.error(f"pr-checklist failed: {e}")
        raise click.ClickException(str(e))

    for checklist in result.newly_added:
        click.echo(
            f"Added the {checklist.name} checklist to this PR since these files changed: "
            f"{', '.join(checklist.files)}"
        )

    for checklist in result.already_present:
        click.echo(
            f"Already added the {checklist.name} checklist to this PR since these files changed: "
            f"{', '.join(checklist.files)}"
        )

    if not result.newly_added:
        click.echo("Didn't need to add any checklists on this PR.")
    else:
        click.echo("Left a comment about the new checklists.")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("revisions", nargs=-1)
@click.option("-b", "--branch", default=None, help="Specify the base branch.")
@click.option(
    "-d", "--deploys", type=int, is_flag=False, flag_value=0, default=None,
    help="Show historical deploys, shows all if N is not specified."
)
@click.option("--dirstat", is_flag=True, default=False, help="Statistics on directory changes.")
@click.option("--stat", is_flag=True, default=False, help="Statistics on file changes.")
@click.option("--git-dir", default=None, help="Project directory to run git commands from.")
@click.option("--gh-url", default=None, help="Github project url to construct links from.")
@click.option("--config", "config_path", default=None, help="YAML settings file.")
@click.option("--log-level", type=LOG_LEVELS, default=None, help="Logging level.")
@click.version_option(
    version=__version__,
    prog_name="deploy-complexity",
    message="%(prog)s %(version)s\nCopyright (C) 2016 NoRedInk (MIT License)",
)
def deploy_complexity(
    revisions: Tuple[str, ...],
    branch: Optional[str],
    deploys: Optional[int],
    dirstat: bool,
    stat: bool,
    git_dir: Optional[str],
    gh_url: Optional[str],
    config_path: Optional[str],
    log_level: Optional[str],
):
    """Summarize deploys: [[BASE] TO], the last N deploys, or a pending promotion."""
    if len(revisions) > 2:
        raise click.UsageError("Expected at most two revisions: [BASE] TO")

    config = _load_config(config_path)
    _configure_logging(config, log_level)

    settings = config.deploy
    settings.branch = short_name(branch) if branch else settings.branch
    settings.git_dir = git_dir or settings.git_dir
    settings.dirstat = dirstat or settings.dirstat
    settings.stat = stat or settings.stat

    git = Git(settings.git_dir or ".")

    try:
        settings.gh_url = gh_url or settings.gh_url or github_url_from_remote(git.remote_url())
        if not settings.gh_url:
            raise click.UsageError("Could not determine the Github url, pass --gh-url")

        summarizer = DeploySummarizer(git, settings.gh_url, dirstat=settings.dirstat, stat=settings.stat)

        if deploys is not None:
            summaries = summarizer.history(settings.branch, deploys or None)
        elif not revisions:
            summaries = summarizer.promote()
        else:
            to = revisions[-1]
            base = revisions[0] if len(revisions) == 2 else None
            summaries = [summarizer.diff(to, base=base, branch=settings.branch)]
    except GitError as e:
        logger.error(f"deploy-complexity failed: {e}")
        raise click.ClickException(str(e))
    except ValueError as e:
        raise click.ClickException(str(e))

    for summary in summaries:
        click.echo(render_deploy_report(summary), nl=False)

