import click

from docspipe import config
from docspipe.services.builders.pipeline import build_steps
from docspipe.services.targets import can_release
from docspipe.services.version import make_release_tag, make_version_name
from model import ActionOutcome, BuildContext
from utils import log_collapsed

from .toolkit import PipelineHandle, Toolkit


async def tag_release(
    ctx: BuildContext, kit: Toolkit, pipeline: PipelineHandle
) -> ActionOutcome:
    """
    Ставит релизный тег на текущий коммит, пушит его и дописывает в текущий прогон
    шаги для нового контекста (деплой в production и обновление индекса).

    :raises VCSLookupError: если коммит не найден.
    :raises VCSPushError: если remote отклонил тег (локальный тег остаётся).
    """
    if not can_release(ctx):
        return ActionOutcome.skipped(
            f"releases are only cut from {', '.join(config.TRACKED_BRANCHES)} without a pull request"
        )

    log_collapsed(":git: Tagging Release...")
    tag = make_release_tag(await make_version_name(kit.git))
    await kit.git.tag(tag)

    log_collapsed(":github: Pushing Release...")
    await kit.git.push(config.GIT_REMOTE, tag)

    release_ctx = ctx.for_release(tag)
    steps = build_steps(release_ctx)
    click.echo(f"Релиз {tag}: добавляем {len(steps)} шагов в текущий прогон")
    await pipeline.upload_steps(steps)
    return ActionOutcome.done()
