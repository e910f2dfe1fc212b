"""
Built-in Checklists

Checklists added to pull requests automatically, in registry order.
GitHub-flavored Markdown renders line breaks literally, so checklist items
stay on one line each. Every body is stored without surrounding whitespace,
the Nix body included, so Nix blocks end without a trailing newline.
"""

from typing import Tuple

from ..models.checklist import ChecklistRule, PathPredicate


RUBY_FACTORIES = ChecklistRule(
    name="RubyFactoriesChecklist",
    human_name="Ruby Factories",
    checklist=(
        "- [ ] RSpec: use [traits](https://robots.thoughtbot.com/remove-duplication-with-factorygirls-traits) "
        "to make the default case fast"
    ),
    predicate=PathPredicate(starts_with=("spec/factories",)),
)

ELM_FACTORIES = ChecklistRule(
    name="ElmFactoriesChecklist",
    human_name="Elm Factories",
    checklist=(
        "- [ ] Elm fuzz tests: use [shortList](https://github.com/NoRedInk/NoRedInk/blob/"
        "72626abf20e44eb339dd60ebb716e9447910127f/ui/tests/SpecHelpers.elm#L59) "
        "when a list fuzzer is generating too many cases"
    ),
    predicate=PathPredicate(starts_with=("ui/tests/",)),
)

CAPISTRANO = ChecklistRule(
    name="CapistranoChecklist",
    human_name="Capistrano",
    checklist="\n".join([
        "The process for testing capistrano is to deploy the capistrano changes branch to staging "
        "prior to merging to master and verify the deploy doesn't explode.",
        "",
        "- [ ] Make a branch with capistrano changes",
        "- [ ] Wait for free time to test staging",
        "- [ ] Reset/deploy that branch to staging using the normal jenkins deploy process",
        "- [ ] Verify the deploy passes",
        "  - If it doesn't, fix the branch and redeploy until it works",
        "  - [ ] If it does, reset back to origin/master and request review of the PR",
    ]),
    predicate=PathPredicate(
        equals=("Capfile", "Gemfile"),
        starts_with=("lib/capistrano/", "lib/deploy/", "config/deploy"),
        # "cap" as its own path segment; \b in a character class is a backspace
        patterns=(r"[\b_./]cap[\b_./]",),
    ),
)

OPSWORKS = ChecklistRule(
    name="OpsWorksChecklist",
    human_name="OpsWorks",
    checklist="\n".join([
        "- [ ] Change the source code branch for staging to the branch being tested in the opsworks UI",
        "- [ ] Rebase your code over `origin/staging` to prevent a successful deploy of your changes "
        "from making staging run possibly outdated code",
        "- [ ] Turn on an additional time-based instance in the layer ([see instructions]"
        "(https://github.com/NoRedInk/wiki/blob/1f618042ed1d6b7c7297ec2672ae568e57944fde/ops-playbook/"
        "ops-plays.md#using-opsworks-to-bring-up-an-additional-time-based-instance))",
        "- [ ] Verify that the instances passes setup to online and doesn't fail",
    ]),
    predicate=PathPredicate(
        starts_with=("config/deploy", "deploy/", "lib/deploy/"),
        contains=("opsworks",),
    ),
)

ROUTES = ChecklistRule(
    name="RoutesChecklist",
    human_name="Routes",
    checklist="- [ ] Retired routes are redirected",
    predicate=PathPredicate(equals=("config/routes.rb",)),
)

RESQUE = ChecklistRule(
    name="ResqueChecklist",
    human_name="Resque",
    checklist=(
        "- [ ] Resque jobs should not be allowed to change their `.perform` signature. "
        "Rather, create a new resque job and retire the old one post-deploy after the queue is empty"
    ),
    predicate=PathPredicate(starts_with=("app/jobs",)),
)

MIGRATIONS = ChecklistRule(
    name="MigrationChecklist",
    human_name="Migrations",
    checklist="\n".join([
        "- [ ] If there are any potential [Slow Migrations]"
        "(https://github.com/NoRedInk/wiki/blob/master/Slow-Migrations.md), make sure that:",
        "  - [ ] They are in separate PRs so each can be run independently",
        "  - [ ] There is a deployment plan where the resulting code on prod will support the db schema "
        "both before and after the migration",
        "- [ ] If migrations include dropping a column, modifying a column, or adding a non-nullable column, "
        "ensure the previously deployed model is prepared to handle both the previous schema and the new schema. "
        "([See \"Rails Migrations with Zero Downtime](https://blog.codeship.com/rails-migrations-zero-downtime/)\")",
    ]),
    predicate=PathPredicate(starts_with=("db/migrate/",)),
)

DOCKERFILE = ChecklistRule(
    name="DockerfileChecklist",
    human_name="Dockerfile",
    checklist="\n".join([
        "- [ ] If you added a dependency to the Dockerfile for a script that will be called during both "
        "CI builds **and** Deploy builds then you should also add that dependency to the chef recipe for "
        "[jenkins_common](https://github.com/NoRedInk/NoRedInk-chef/blob/master/site-cookbooks/noredink/"
        "recipes/jenkins_common.rb).",
        "  - consequence of not doing this: deploys will break!",
    ]),
    predicate=PathPredicate(contains=("Dockerfile",)),
)

NIX = ChecklistRule(
    name="NixChecklist",
    human_name="Nix",
    checklist="\n".join([
        "- [Instructions on how to use Nix](https://github.com/NoRedInk/wiki/blob/master/engineering/using-nix.md)",
        "- [ ] changes build successfully with Nix (`nix-shell --pure` to check)",
        "- [ ] once approved, but before merging, make sure to update the Nix cache so that other people "
        "don't have to rebuild all changes. Run `script/cache_nix_shell.sh`.",
    ]),
    predicate=PathPredicate(
        starts_with=("nix",),
        ends_with=("nix", "package.json", "package-lock.json"),
        equals=("Gemfile", "Gemfile.lock", "requirements.txt"),
    ),
)


BUILTIN_CHECKLISTS: Tuple[ChecklistRule, ...] = (
    RUBY_FACTORIES,
    ELM_FACTORIES,
    CAPISTRANO,
    OPSWORKS,
    ROUTES,
    RESQUE,
    MIGRATIONS,
    DOCKERFILE,
    NIX,
)
