import click

from typing import List, Tuple

from docspipe import config
from docspipe.models import PipelineSummary
from docspipe.services.targets import (
    can_deploy,
    concurrency_key,
    environment_label,
)
from model import (
    BuildContext,
    Pipeline,
    SchedulingHints,
    StepAction,
    StepDescriptor,
)


GATE_PROMPT = ":shipit: Deploy to Production?"


def _build_step(ctx: BuildContext) -> StepDescriptor:
    return StepDescriptor(
        name=":hammer: Build",
        action=StepAction.BUILD,
        context=ctx,
        hints=SchedulingHints(agent_pool=config.BUILDER_QUEUE),
    )


def _deploy_step(ctx: BuildContext) -> StepDescriptor:
    # Один деплой на окружение за раз: иначе два helm upgrade перетрут друг друга
    return StepDescriptor(
        name=f":rocket: Deploy to {environment_label(ctx)}",
        action=StepAction.DEPLOY,
        context=ctx,
        hints=SchedulingHints(
            concurrency_key=concurrency_key(ctx),
            concurrency_limit=1,
        ),
    )


def _update_index_step(ctx: BuildContext) -> StepDescriptor:
    return StepDescriptor(
        name=":feelsgood: Update Search Index",
        action=StepAction.UPDATE_INDEX,
        context=ctx,
    )


def _tag_release_step(ctx: BuildContext) -> StepDescriptor:
    return StepDescriptor(
        name=":git: Tag Release",
        action=StepAction.TAG_RELEASE,
        context=ctx,
    )


def wait_step(ctx: BuildContext) -> StepDescriptor:
    return StepDescriptor(name="wait", action=StepAction.WAIT, context=ctx)


def gate_step(ctx: BuildContext, prompt: str = GATE_PROMPT) -> StepDescriptor:
    return StepDescriptor(name=prompt, action=StepAction.MANUAL_GATE, context=ctx)


def build_steps(ctx: BuildContext) -> List[StepDescriptor]:
    """
    Граф шагов для контекста прогона.

    - есть тег: релиз уже собран, только деплой -> wait -> обновление индекса;
    - иначе: сборка -> wait -> деплой, а для прямого пуша в ветку (не PR) ещё
      ручное подтверждение -> тег релиза.
    """
    if ctx.tag:
        return [
            _deploy_step(ctx),
            wait_step(ctx),
            _update_index_step(ctx),
        ]

    steps = [
        _build_step(ctx),
        wait_step(ctx),
        _deploy_step(ctx),
    ]
    if ctx.pr is None:
        steps += [gate_step(ctx), _tag_release_step(ctx)]
    return steps


def build_pipeline(ctx: BuildContext) -> Tuple[Pipeline, List[str], List[str]]:
    """
    Строим пайплайн для контекста и собираем логи/предупреждения для CLI.

    Возвращает (Pipeline, logs, warnings).
    """
    logs: List[str] = []
    warnings: List[str] = []

    logs.append(f"Строим пайплайн по контексту: {ctx.model_dump()}")
    click.echo(f"Строим пайплайн по контексту: {ctx.model_dump()}", err=True)

    steps = build_steps(ctx)

    if not can_deploy(ctx):
        warnings.append(
            f"Ветка {ctx.branch!r} не {config.MAINLINE_BRANCH!r}, нет ни тега, ни PR: "
            "шаг деплоя будет пропущен."
        )

    pipeline = Pipeline(context=ctx, steps=steps)
    logs.append(f"Пайплайн сформирован: {len(steps)} шагов.")
    click.echo(f"Пайплайн сформирован: {len(steps)} шагов.", err=True)

    return pipeline, logs, warnings


def summarize_pipeline(pipeline: Pipeline) -> PipelineSummary:
    """
    Строит краткое резюме пайплайна для ответа CLI.
    """
    step_names = [step.name for step in pipeline.steps]
    actions = [step.action.value for step in pipeline.steps]
    steps_count = len(step_names)
    gated = StepAction.MANUAL_GATE.value in actions

    if steps_count == 0:
        description = "Пайплайн пустой."
    else:
        description = (
            f"Сгенерирован пайплайн из {steps_count} шагов: {' -> '.join(actions)}"
            + (" (релиз после ручного подтверждения)." if gated else ".")
        )

    return PipelineSummary(
        steps_count=steps_count,
        step_names=step_names,
        actions=actions,
        gated=gated,
        description=description,
    )
