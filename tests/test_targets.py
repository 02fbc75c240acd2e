import pytest

from docspipe.services.targets import (
    can_deploy,
    can_update_index,
    concurrency_key,
    environment_label,
    resolve_target,
)
from model import BuildContext


@pytest.mark.parametrize("branch", ["master", "feature/x", "docs/release-2024-01-01-abcdef012345"])
def test_tag_without_pr_is_production(branch):
    target = resolve_target(BuildContext(branch=branch, tag="docs/release-1"))

    assert target.is_production
    assert target.replica_count == 2
    assert target.environment_name == "production"
    assert target.public_hostname == "docs.expo.io"
    assert target.concurrency_scope == "prod"


@pytest.mark.parametrize(
    "ctx",
    [
        BuildContext(branch="feature/x", pr=42),
        BuildContext(branch="master", pr=42),
        BuildContext(branch="master", tag="docs/release-1", pr=42),
    ],
)
def test_pull_request_gets_preview_environment(ctx):
    target = resolve_target(ctx)

    assert target.environment_name == "docs-pr-42"
    assert target.public_hostname == "docs-pr-42.pr.exp.host"
    assert target.concurrency_scope == "pr-42"
    assert target.replica_count == 1
    assert not target.is_production


def test_everything_else_is_staging():
    target = resolve_target(BuildContext(branch="master"))

    assert target.environment_name == "staging"
    assert target.public_hostname == "staging.docs.expo.io"
    assert target.deployment_url == "https://staging.docs.expo.io"
    assert target.concurrency_scope == "staging"
    assert target.replica_count == 1


def test_production_only_without_pr_and_with_tag():
    for ctx in (
        BuildContext(branch="master"),
        BuildContext(branch="master", pr=7),
        BuildContext(branch="master", tag="t", pr=7),
    ):
        assert not resolve_target(ctx).is_production


def test_deploy_guard():
    assert can_deploy(BuildContext(branch="master"))
    assert can_deploy(BuildContext(branch="feature/x", pr=3))
    assert can_deploy(BuildContext(branch="feature/x", tag="docs/release-1"))
    assert not can_deploy(BuildContext(branch="feature/x"))


def test_index_guard():
    assert can_update_index(BuildContext(branch="master"))
    assert can_update_index(BuildContext(branch="feature/x", tag="docs/release-1"))
    assert not can_update_index(BuildContext(branch="feature/x", pr=3))


def test_labels_and_concurrency_keys():
    assert environment_label(BuildContext(branch="master", tag="t")) == "Production"
    assert environment_label(BuildContext(branch="x", pr=5)) == "Dev"
    assert environment_label(BuildContext(branch="master")) == "Staging"

    assert concurrency_key(BuildContext(branch="master", tag="t")) == "docs/prod/deploy"
    assert concurrency_key(BuildContext(branch="x", pr=5)) == "docs/pr-5/deploy"
    assert concurrency_key(BuildContext(branch="master")) == "docs/staging/deploy"
