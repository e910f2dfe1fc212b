"""
Unit tests for the checklist matcher.
"""

from deploy_complexity.checklists.builtin import BUILTIN_CHECKLISTS
from deploy_complexity.checklists.matcher import ChecklistMatcher, match
from deploy_complexity.models.checklist import ChecklistRule, PathPredicate


class TestMatch:
    """Unit tests for match()."""

    def test_migration_only(self):
        result = match(["db/migrate/2024_add_x.rb"], BUILTIN_CHECKLISTS)

        assert result.names == ["MigrationChecklist"]
        assert result.files_for("MigrationChecklist") == ["db/migrate/2024_add_x.rb"]

    def test_dockerfile_and_resque(self):
        result = match(["Dockerfile", "app/jobs/foo.rb"], BUILTIN_CHECKLISTS)

        assert result.names == ["ResqueChecklist", "DockerfileChecklist"]
        assert result.files_for("DockerfileChecklist") == ["Dockerfile"]
        assert result.files_for("ResqueChecklist") == ["app/jobs/foo.rb"]
        for absent in ("CapistranoChecklist", "RoutesChecklist", "NixChecklist"):
            assert absent not in result

    def test_no_files(self):
        assert not match([], BUILTIN_CHECKLISTS)

    def test_no_rules(self):
        assert not match(["Dockerfile"], [])

    def test_registry_order_not_file_order(self):
        files = ["package.json", "config/routes.rb", "spec/factories/users.rb"]
        result = match(files, BUILTIN_CHECKLISTS)

        assert result.names == ["RubyFactoriesChecklist", "RoutesChecklist", "NixChecklist"]

    def test_one_file_can_trigger_several_rules(self):
        result = match(["Gemfile"], BUILTIN_CHECKLISTS)

        assert result.names == ["CapistranoChecklist", "NixChecklist"]
        assert result.files_for("CapistranoChecklist") == ["Gemfile"]
        assert result.files_for("NixChecklist") == ["Gemfile"]

    def test_duplicate_paths_are_kept(self):
        result = match(["db/migrate/1.rb", "db/migrate/1.rb"], BUILTIN_CHECKLISTS)

        assert result.files_for("MigrationChecklist") == ["db/migrate/1.rb", "db/migrate/1.rb"]

    def test_accepts_generators(self):
        result = match((path for path in ["Dockerfile"]), BUILTIN_CHECKLISTS)

        assert result.names == ["DockerfileChecklist"]

    def test_custom_rules(self):
        rule = ChecklistRule("DocsChecklist", "Docs", "- [ ] Proofread", PathPredicate(ends_with=(".md",)))

        result = match(["README.md", "src/app.py", "docs/intro.md"], [rule])

        assert result.files_for("DocsChecklist") == ["README.md", "docs/intro.md"]


class TestChecklistMatcher:
    """Unit tests for ChecklistMatcher."""

    def test_for_files_uses_bound_rules(self):
        matcher = ChecklistMatcher(BUILTIN_CHECKLISTS)

        result = matcher.for_files(["config/routes.rb"])

        assert result.names == ["RoutesChecklist"]
        assert matcher.rules == BUILTIN_CHECKLISTS
