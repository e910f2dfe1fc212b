"""
Integration tests for the git command layer against a real repository.
"""

import os
import shutil
import subprocess

import pytest

from deploy_complexity.deploy.summarizer import DeploySummarizer
from deploy_complexity.git import Git, GitError


pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Deployer",
    "GIT_AUTHOR_EMAIL": "deployer@example.com",
    "GIT_COMMITTER_NAME": "Deployer",
    "GIT_COMMITTER_EMAIL": "deployer@example.com",
}


def git(repo, *args):
    subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, env={**os.environ, **GIT_ENV}
    )


def commit(repo, path, content, message):
    target = repo / path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    git(repo, "add", path)
    git(repo, "commit", "-q", "-m", message)


@pytest.fixture
def repo(tmp_path):
    git(tmp_path, "init", "-q")
    commit(tmp_path, "README.md", "hello\n", "Initial commit")
    git(tmp_path, "tag", "production-2024-01-01-1200")
    commit(tmp_path, "package.json", '{"dependencies": {"react": "16"}}\n', "Add package.json (#1)")
    git(tmp_path, "tag", "production-2024-01-02-1200")
    commit(tmp_path, "db/migrate/2024_add_x.rb", "class AddX; end\n", "Add migration (#2)")
    commit(tmp_path, "package.json", '{"dependencies": {"react": "17"}}\n', "Bump react (#3)")
    git(tmp_path, "tag", "production-2024-01-02-1800")
    return tmp_path


class TestGitRepository:
    """Integration tests for Git against a scratch repository."""

    def test_tags(self, repo):
        assert Git(repo).tags("production") == [
            "production-2024-01-01-1200",
            "production-2024-01-02-1200",
            "production-2024-01-02-1800",
        ]

    def test_show_file(self, repo):
        git_repo = Git(repo)

        assert git_repo.show_file("production-2024-01-02-1200", "package.json") == '{"dependencies": {"react": "16"}}\n'
        assert git_repo.show_file("production-2024-01-01-1200", "package.json") is None

    def test_changed_files(self, repo):
        changed = Git(repo).changed_files("production-2024-01-02-1200", "production-2024-01-02-1800")

        assert sorted(changed) == ["db/migrate/2024_add_x.rb", "package.json"]

    def test_bad_revision(self, repo):
        with pytest.raises(GitError):
            Git(repo).rev_parse_short("no-such-branch")

    def test_summarize(self, repo):
        summarizer = DeploySummarizer(Git(repo), "https://github.com/acme/web")

        summary = summarizer.summarize("production-2024-01-02-1200", "production-2024-01-02-1800")

        assert summary.time_delta == "after 6.0 hours"
        assert len(summary.commits) == 2
        assert summary.migrations == [
            "https://github.com/acme/web/blob/production-2024-01-02-1800/db/migrate/2024_add_x.rb"
        ]
        assert summary.dependency_sections[0].changes == ["Updated react: 16 -> 17 (package.json)"]
