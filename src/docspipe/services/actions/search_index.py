from docspipe import config
from docspipe.services.targets import can_update_index
from model import ActionOutcome, BuildContext
from utils import log_collapsed

from .toolkit import Toolkit


async def update_search_index(ctx: BuildContext, kit: Toolkit) -> ActionOutcome:
    """
    Переиндексирует production-сайт документации.

    :raises IndexUpdateError: если скрипт индексации вернул ненулевой код.
    """
    if not can_update_index(ctx):
        return ActionOutcome.skipped(
            f"search index is only updated from mainline or tagged runs, got {ctx.branch!r}"
        )

    log_collapsed(":open_mouth: Updating search index...")
    await kit.indexer.update(config.PRODUCTION_HOST, cwd=kit.repo_root)
    return ActionOutcome.done()
