import shutil

import pytest
import yaml

from docspipe.renders import buildkite
from docspipe.services.builders.pipeline import build_steps
from docspipe.services.collaborators import PipelineError
from model import BuildContext


def test_render_branch_pipeline():
    document = yaml.safe_load(buildkite.render(build_steps(BuildContext(branch="master"))))

    assert document["steps"] == [
        {
            "label": ":hammer: Build",
            "command": "docspipe step build --branch master",
            "agents": {"queue": "builder"},
        },
        "wait",
        {
            "label": ":rocket: Deploy to Staging",
            "command": "docspipe step deploy --branch master",
            "concurrency": 1,
            "concurrency_group": "docs/staging/deploy",
        },
        {"block": ":shipit: Deploy to Production?"},
        {
            "label": ":git: Tag Release",
            "command": "docspipe step tag-release --branch master",
        },
    ]


def test_render_release_pipeline():
    ctx = BuildContext(branch="master", tag="docs/release-2024-01-01-abcdef012345")
    document = yaml.safe_load(buildkite.render(build_steps(ctx)))

    deploy, wait, index = document["steps"]
    assert deploy["command"] == (
        "docspipe step deploy --branch master --tag docs/release-2024-01-01-abcdef012345"
    )
    assert deploy["concurrency_group"] == "docs/prod/deploy"
    assert wait == "wait"
    assert index["label"] == ":feelsgood: Update Search Index"


def test_step_command_with_pull_request():
    deploy = build_steps(BuildContext(branch="feature/x", pr=42))[2]

    assert buildkite.step_command(deploy) == "docspipe step deploy --branch feature/x --pr 42"


@pytest.mark.parametrize(
    "env, expected",
    [
        (
            {"BUILDKITE_BRANCH": "master", "BUILDKITE_PULL_REQUEST": "false"},
            BuildContext(branch="master"),
        ),
        (
            {"BUILDKITE_BRANCH": "feature/x", "BUILDKITE_PULL_REQUEST": "42"},
            BuildContext(branch="feature/x", pr=42),
        ),
        (
            {"BUILDKITE_BRANCH": "master", "BUILDKITE_TAG": "docs/release-1"},
            BuildContext(branch="master", tag="docs/release-1"),
        ),
        ({}, BuildContext(branch="")),
    ],
)
def test_context_from_env(env, expected):
    assert buildkite.context_from_env(env) == expected


@pytest.mark.skipif(shutil.which("true") is None, reason="posix utilities not found")
@pytest.mark.asyncio
async def test_upload_steps_through_agent():
    steps = build_steps(BuildContext(branch="master"))

    await buildkite.BuildkitePipeline(agent="true").upload_steps(steps)

    with pytest.raises(PipelineError):
        await buildkite.BuildkitePipeline(agent="false").upload_steps(steps)


def test_context_from_env_rejects_malformed_pull_request():
    with pytest.raises(PipelineError) as info:
        buildkite.context_from_env({"BUILDKITE_BRANCH": "feature/x", "BUILDKITE_PULL_REQUEST": "abc"})

    assert "BUILDKITE_PULL_REQUEST" in info.value.description
