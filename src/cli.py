import asyncio
import json
import os
from pathlib import Path

import click

import settings
from docspipe import config
from docspipe.core import DocsPipelineCore
from docspipe.renders import buildkite
from docspipe.services.actions import Toolkit
from docspipe.services.targets import is_tracked_branch
from exception import CLIException
from model import BuildContext, StepAction, StepDescriptor
from utils import async_click


def _context(branch, tag, pr) -> BuildContext:
    # Не заданные опции берём из окружения агента Buildkite
    try:
        env_ctx = buildkite.context_from_env(dict(os.environ))
    except CLIException as e:
        raise click.UsageError(e.description)
    ctx = BuildContext(
        branch=branch if branch is not None else env_ctx.branch,
        tag=tag if tag is not None else env_ctx.tag,
        pr=pr if pr is not None else env_ctx.pr,
    )
    if not ctx.branch:
        raise click.UsageError("Branch is not set: pass --branch or export BUILDKITE_BRANCH")
    if ctx.pr is not None and not settings.ALLOW_PRS:
        raise click.UsageError(f"{settings.NAME} does not build pull requests")
    if ctx.pr is None and not ctx.tag and not is_tracked_branch(ctx):
        raise click.UsageError(
            f"Branch {ctx.branch!r} is not tracked by {settings.NAME} "
            f"(tracked: {', '.join(config.TRACKED_BRANCHES)}); push a tag or open a pull request"
        )
    return ctx


def context_options(func):
    func = click.option("--pr", type=int, default=None, help="Номер pull request'а")(func)
    func = click.option("--tag", default=None, help="Релизный тег")(func)
    func = click.option("--branch", default=None, help="Ветка сборки")(func)
    return func


@click.group(help=f"{settings.NAME}: {settings.DESCRIPTION}")
@click.option(
    "--repo-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    help="Корень репозитория с документацией",
)
@click.pass_context
def main(click_ctx: click.Context, repo_root: Path):
    click_ctx.obj = DocsPipelineCore(Toolkit.default(repo_root))


@main.command(help="Показать граф шагов для контекста")
@context_options
@click.option("--format", "fmt", type=click.Choice(["yaml", "json"]), default="yaml")
@click.pass_obj
def steps(core: DocsPipelineCore, branch, tag, pr, fmt):
    pipeline = core.plan(_context(branch, tag, pr))
    if fmt == "json":
        click.echo(json.dumps(pipeline.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        click.echo(buildkite.render(pipeline.steps))

    for warning in core.warnings:
        click.echo(warning, err=True)


@main.command(help="Загрузить граф шагов в текущую сборку Buildkite")
@context_options
@click.pass_obj
@async_click
async def upload(core: DocsPipelineCore, branch, tag, pr):
    click.echo(settings.LOGO + "\n")
    pipeline = core.plan(_context(branch, tag, pr))
    try:
        await buildkite.BuildkitePipeline().upload_steps(pipeline.steps)
    except CLIException as e:
        raise click.ClickException(e.description)


@main.command(help="Выполнить один шаг (так его запускает агент CI)")
@click.argument("action", type=click.Choice([a.value for a in StepAction]))
@context_options
@click.pass_obj
@async_click
async def step(core: DocsPipelineCore, action, branch, tag, pr):
    ctx = _context(branch, tag, pr)
    try:
        result = await core.run_step(ctx, StepAction(action), buildkite.BuildkitePipeline())
    except CLIException as e:
        for line in e.logs:
            click.echo(line, err=True)
        raise click.ClickException(e.description)

    click.echo(f"{result.name}: {result.status.value}" + (f" ({result.reason})" if result.reason else ""))


async def _confirm(marker: StepDescriptor) -> bool:
    return await asyncio.to_thread(click.confirm, marker.name, default=False)


@main.command(help="Прогнать весь граф шагов локально")
@context_options
@click.option(
    "--approve/--no-approve",
    default=None,
    help="Ответ на ручное подтверждение; по умолчанию спросить интерактивно",
)
@click.pass_obj
@async_click
async def run(core: DocsPipelineCore, branch, tag, pr, approve):
    click.echo(settings.LOGO + "\n")

    if approve is None:
        approver = _confirm
    else:
        async def approver(marker: StepDescriptor) -> bool:
            return approve

    response = await core.run(_context(branch, tag, pr), approve=approver)

    for result in response.results:
        line = f"{result.status.value:>9}  {result.name}"
        if result.reason:
            line += f"  ({result.reason})"
        click.echo(line)

    if response.pipeline_summary:
        click.echo(response.pipeline_summary.description)
    for warning in response.warnings:
        click.echo(warning, err=True)

    if response.status == "error":
        raise click.ClickException("Pipeline failed")


if __name__ == "__main__":
    main()
