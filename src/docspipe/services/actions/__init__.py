from typing import Optional

from model import ActionOutcome, StepAction, StepDescriptor

from .build import build, image_coordinates
from .deploy import chart_values, deploy
from .release import tag_release
from .search_index import update_search_index
from .toolkit import PipelineHandle, Toolkit


async def execute(
    step: StepDescriptor,
    kit: Toolkit,
    pipeline: Optional[PipelineHandle] = None,
) -> ActionOutcome:
    """
    Выполняет действие шага. Управляющие шаги (wait, manual gate) сюда не попадают,
    их обрабатывает исполнитель.
    """
    ctx = step.context

    if step.action == StepAction.BUILD:
        return await build(ctx, kit)
    if step.action == StepAction.DEPLOY:
        return await deploy(ctx, kit)
    if step.action == StepAction.UPDATE_INDEX:
        return await update_search_index(ctx, kit)
    if step.action == StepAction.TAG_RELEASE:
        if pipeline is None:
            raise ValueError("tag-release step needs a pipeline handle to upload steps")
        return await tag_release(ctx, kit, pipeline)

    raise ValueError(f"Step {step.name!r} has no executable action ({step.action.value})")


__all__ = [
    "execute",
    "build",
    "deploy",
    "update_search_index",
    "tag_release",
    "image_coordinates",
    "chart_values",
    "PipelineHandle",
    "Toolkit",
]
