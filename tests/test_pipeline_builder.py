from docspipe.services.builders.pipeline import (
    build_pipeline,
    build_steps,
    summarize_pipeline,
)
from model import BuildContext, StepAction


def _actions(steps):
    return [s.action for s in steps]


def test_pull_request_has_no_gate_or_release():
    steps = build_steps(BuildContext(branch="feature/x", pr=42))

    assert _actions(steps) == [StepAction.BUILD, StepAction.WAIT, StepAction.DEPLOY]
    assert steps[2].name == ":rocket: Deploy to Dev"


def test_branch_push_ends_with_gate_and_release():
    steps = build_steps(BuildContext(branch="master"))

    assert _actions(steps) == [
        StepAction.BUILD,
        StepAction.WAIT,
        StepAction.DEPLOY,
        StepAction.MANUAL_GATE,
        StepAction.TAG_RELEASE,
    ]
    assert steps[3].name == ":shipit: Deploy to Production?"
    assert steps[4].name == ":git: Tag Release"


def test_tagged_run_only_deploys_and_updates_index():
    ctx = BuildContext(branch="master", tag="docs/release-2024-01-01-abcdef012345")
    steps = build_steps(ctx)

    assert _actions(steps) == [StepAction.DEPLOY, StepAction.WAIT, StepAction.UPDATE_INDEX]
    assert steps[0].name == ":rocket: Deploy to Production"
    assert all(s.context == ctx for s in steps)


def test_scheduling_hints():
    steps = build_steps(BuildContext(branch="master"))
    build, _, deploy = steps[:3]

    assert build.hints.agent_pool == "builder"
    assert build.hints.concurrency_key is None
    assert deploy.hints.concurrency_key == "docs/staging/deploy"
    assert deploy.hints.concurrency_limit == 1


def test_control_markers():
    steps = build_steps(BuildContext(branch="master"))

    assert [s.is_control for s in steps] == [False, True, False, True, False]


def test_build_pipeline_warns_about_skipped_deploy():
    pipeline, logs, warnings = build_pipeline(BuildContext(branch="feature/x"))

    assert len(pipeline.steps) == 5
    assert logs
    assert any("деплоя будет пропущен" in w for w in warnings)


def test_build_pipeline_mainline_has_no_warnings():
    _, _, warnings = build_pipeline(BuildContext(branch="master"))

    assert warnings == []


def test_summary():
    pipeline, _, _ = build_pipeline(BuildContext(branch="master"))
    summary = summarize_pipeline(pipeline)

    assert summary.steps_count == 5
    assert summary.gated
    assert summary.actions[0] == "build"
    assert "ручного подтверждения" in summary.description
