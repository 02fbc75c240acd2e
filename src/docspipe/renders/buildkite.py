from typing import Any, Dict, List

import click
import yaml

from docspipe.services.collaborators import PipelineError
from model import BuildContext, StepAction, StepDescriptor
from utils import run_process, tail


def step_command(step: StepDescriptor, executable: str = "docspipe") -> str:
    """
    Команда, которой агент Buildkite выполнит шаг: `docspipe step <action> ...`.
    """
    ctx = step.context
    parts = [executable, "step", step.action.value, "--branch", ctx.branch]
    if ctx.tag:
        parts += ["--tag", ctx.tag]
    if ctx.pr is not None:
        parts += ["--pr", str(ctx.pr)]
    return " ".join(parts)


def render_step(step: StepDescriptor) -> Any:
    if step.action == StepAction.WAIT:
        return "wait"
    if step.action == StepAction.MANUAL_GATE:
        return {"block": step.name}

    rendered: Dict[str, Any] = {
        "label": step.name,
        "command": step_command(step),
    }
    if step.hints.agent_pool:
        rendered["agents"] = {"queue": step.hints.agent_pool}
    if step.hints.concurrency_key:
        rendered["concurrency"] = step.hints.concurrency_limit or 1
        rendered["concurrency_group"] = step.hints.concurrency_key
    return rendered


def render(steps: List[StepDescriptor]) -> str:
    return yaml.safe_dump(
        {"steps": [render_step(step) for step in steps]},
        sort_keys=False,
        allow_unicode=True,
        width=1000,
    )


class BuildkitePipeline:
    """
    Ручка пайплайна поверх buildkite-agent: дописывает шаги в текущую сборку.
    """

    def __init__(self, agent: str = "buildkite-agent") -> None:
        self.agent = agent

    async def upload_steps(self, steps: List[StepDescriptor]) -> None:
        """
        :raises PipelineError: если buildkite-agent не принял пайплайн.
        """
        document = render(steps)
        click.echo(document)
        returncode, output = await run_process(
            [self.agent, "pipeline", "upload"],
            stdin=document.encode("utf-8"),
        )
        if returncode != 0:
            raise PipelineError(
                description=f"buildkite-agent pipeline upload failed (exit code {returncode})",
                logs=tail(output),
            )


def context_from_env(env: Dict[str, str]) -> BuildContext:
    """
    Контекст из переменных окружения агента Buildkite.
    BUILDKITE_PULL_REQUEST равен "false", если сборка не из PR.
    """
    pr_raw = env.get("BUILDKITE_PULL_REQUEST", "false")
    pr = None
    if pr_raw and pr_raw != "false":
        try:
            pr = int(pr_raw)
        except ValueError as e:
            raise PipelineError(
                description=f"BUILDKITE_PULL_REQUEST must be a number or \"false\", got {pr_raw!r}"
            ) from e
    return BuildContext(
        branch=env.get("BUILDKITE_BRANCH", ""),
        tag=env.get("BUILDKITE_TAG") or None,
        pr=pr,
    )
