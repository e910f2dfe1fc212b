"""
Unit tests for dependency manifest comparison.
"""

import json
from unittest.mock import Mock

import pytest

from deploy_complexity.deploy.changed_files import ChangedFiles
from deploy_complexity.deploy.dependencies import (
    ChangedElmPackages,
    ChangedJavascriptPackages,
    ChangedRubyGems,
    DependencyParseError,
    DependencyVersion,
)
from deploy_complexity.deploy.revision_comparator import RevisionComparator


OLD_GEMFILE_LOCK = """GIT
  remote: https://github.com/notrubygems.git
  revision: aaaa
  specs:
    babadook (1.0.0)

GEM
  remote: https://rubygems.org/
  specs:
    coderay (1.1.2)
    method_source (0.9.2)
    pry (0.12.2)
      coderay (~> 1.1.0)
      method_source (~> 0.9.0)
    pry-doc (0.13.5)
      pry (~> 0.11)
      yard (~> 0.9.11)
    yard (0.9.20)

PLATFORMS
  ruby

DEPENDENCIES
  babadook!
  pry
  pry-doc

BUNDLED WITH
   1.17.3
"""

NEW_GEMFILE_LOCK = """GIT
  remote: https://github.com/notrubygems.git
  revision: bbbb
  specs:
    babadook (1.0.0)

GEM
  remote: https://rubygems.org/
  specs:
    coderay (1.1.2)
    deploy-complexity (0.4.0)
    method_source (0.9.2)
    pry (0.12.3)
      coderay (~> 1.1.0)
      method_source (~> 0.9.0)
    rake (10.5.0)
    yard (0.9.20)

PLATFORMS
  ruby

DEPENDENCIES
  babadook!
  deploy-complexity
  pry
  rake

BUNDLED WITH
   1.17.3
"""


class TestChangedRubyGems:
    """Unit tests for Gemfile.lock comparison."""

    def test_no_changes(self):
        changes = ChangedRubyGems(file="file_path", old=OLD_GEMFILE_LOCK, new=OLD_GEMFILE_LOCK).changes()

        assert changes == []

    def test_formats_changes(self):
        changes = ChangedRubyGems(file="file_path", old=OLD_GEMFILE_LOCK, new=NEW_GEMFILE_LOCK).changes()

        assert changes == [
            "Added deploy-complexity: 0.4.0 (file_path)",
            "Added rake: 10.5.0 (file_path)",
            "Removed pry-doc: 0.13.5 (file_path)",
            "Updated babadook: 1.0.0 -> 1.0.0 (GIT https://github.com/notrubygems.git bbbb) (file_path)",
            "Updated pry: 0.12.2 -> 0.12.3 (file_path)",
        ]

    def test_nested_requirements_are_not_gems(self):
        gems = ChangedRubyGems("Gemfile.lock", None, None).parse(OLD_GEMFILE_LOCK)

        assert set(gems) == {"babadook", "coderay", "method_source", "pry", "pry-doc", "yard"}
        assert gems["pry"] == DependencyVersion("0.12.2")

    def test_path_source(self):
        new = "PATH\n  remote: .\n  specs:\n    mygem (0.1.0)\n"

        changes = ChangedRubyGems("Gemfile.lock", None, new).changes()

        assert changes == ["Added mygem: 0.1.0 (PATH .) (Gemfile.lock)"]

    def test_file_removed(self):
        changes = ChangedRubyGems("Gemfile.lock", "GEM\n  specs:\n    rake (10.5.0)\n", None).changes()

        assert changes == ["Removed rake: 10.5.0 (Gemfile.lock)"]

    def test_unparseable_lockfile(self):
        with pytest.raises(DependencyParseError, match="no gem specs found"):
            ChangedRubyGems("Gemfile.lock", "hello", OLD_GEMFILE_LOCK).changes()


class TestChangedJavascriptPackages:
    """Unit tests for package.json comparison."""

    def test_all_groups_are_compared(self):
        old = json.dumps({
            "dependencies": {"react": "^16.0.0", "lodash": "4.17.0"},
            "devDependencies": {"jest": "24"},
        })
        new = json.dumps({
            "dependencies": {"react": "^17.0.0"},
            "devDependencies": {"jest": "24", "eslint": "7"},
        })

        changes = ChangedJavascriptPackages("package.json", old, new).changes()

        assert changes == [
            "Added eslint: 7 (package.json)",
            "Removed lodash: 4.17.0 (package.json)",
            "Updated react: ^16.0.0 -> ^17.0.0 (package.json)",
        ]

    def test_new_manifest(self):
        new = json.dumps({"name": "app", "dependencies": {"b": "2", "a": "1"}})

        changes = ChangedJavascriptPackages("ui/package.json", None, new).changes()

        assert changes == ["Added a: 1 (ui/package.json)", "Added b: 2 (ui/package.json)"]

    def test_invalid_json(self):
        with pytest.raises(DependencyParseError, match="invalid JSON"):
            ChangedJavascriptPackages("package.json", "{", "{}").changes()


class TestChangedElmPackages:
    """Unit tests for elm.json comparison."""

    def test_application_manifest(self):
        old = json.dumps({"dependencies": {"direct": {"elm/core": "1.0.2"}, "indirect": {"elm/json": "1.1.2"}}})
        new = json.dumps({"dependencies": {"direct": {"elm/core": "1.0.5"}, "indirect": {}}})

        changes = ChangedElmPackages("elm.json", old, new).changes()

        assert changes == [
            "Removed elm/json: 1.1.2 (elm.json)",
            "Updated elm/core: 1.0.2 -> 1.0.5 (elm.json)",
        ]

    def test_legacy_manifest(self):
        old = json.dumps({"dependencies": {"elm-lang/core": "5.0.0 <= v < 6.0.0"}})
        new = json.dumps({"dependencies": {"elm-lang/core": "5.1.1 <= v < 6.0.0"}})

        changes = ChangedElmPackages("elm-package.json", old, new).changes()

        assert changes == ["Updated elm-lang/core: 5.0.0 <= v < 6.0.0 -> 5.1.1 <= v < 6.0.0 (elm-package.json)"]

    def test_non_object_manifest(self):
        with pytest.raises(DependencyParseError):
            ChangedElmPackages("elm.json", "[]", "{}").changes()


class TestChangedFiles:
    """Unit tests for ChangedFiles."""

    def setup_method(self):
        names = "db/migrate/2024_add_x.rb\nui/elm.json\npackage.json\nGemfile.lock\napp/models/user.rb\n\n"
        self.changed = ChangedFiles(names, "https://github.com/acme/web/blob/production-2024-01-02-0300/")

    def test_paths(self):
        assert len(self.changed) == 5

    def test_migrations_link_to_deployed_revision(self):
        assert self.changed.migrations == [
            "https://github.com/acme/web/blob/production-2024-01-02-0300/db/migrate/2024_add_x.rb"
        ]

    def test_manifest_groups(self):
        assert self.changed.elm_packages == ["ui/elm.json"]
        assert self.changed.javascript_dependencies == ["package.json"]
        assert self.changed.ruby_dependencies == ["Gemfile.lock"]


class TestRevisionComparator:
    """Unit tests for RevisionComparator."""

    def test_reads_both_revisions(self):
        git = Mock()
        contents = {"old": OLD_GEMFILE_LOCK, "new": NEW_GEMFILE_LOCK}
        git.show_file.side_effect = lambda revision, path: contents[revision]

        section = RevisionComparator(ChangedRubyGems, ["Gemfile.lock"], "old", "new", git).output("Ruby:")

        assert section.heading == "Ruby:"
        assert "Added rake: 10.5.0 (Gemfile.lock)" in section.changes
        git.show_file.assert_any_call("old", "Gemfile.lock")
        git.show_file.assert_any_call("new", "Gemfile.lock")

    def test_no_changes_gives_no_section(self):
        git = Mock()
        git.show_file.return_value = OLD_GEMFILE_LOCK

        assert RevisionComparator(ChangedRubyGems, ["Gemfile.lock"], "a", "b", git).output("Ruby:") is None

    def test_parse_errors_are_reported_inline(self):
        git = Mock()
        git.show_file.side_effect = ["garbage", OLD_GEMFILE_LOCK]

        changes = RevisionComparator(ChangedRubyGems, ["Gemfile.lock"], "a", "b", git).changes()

        assert len(changes) == 1
        assert changes[0].startswith("Unable to compare Gemfile.lock:")
