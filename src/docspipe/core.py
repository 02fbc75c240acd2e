from typing import Optional

from .engine import Approver, PipelineRunner, ScopeLimiter, reject_all
from .models import RunResponse
from .services import actions
from .services.actions import PipelineHandle, Toolkit
from .services.builders import pipeline as builder
from .services.collaborators import PipelineError
from model import BuildContext, Pipeline, StepAction, StepResult, StepStatus


class DocsPipelineCore:
    def __init__(
        self,
        kit: Optional[Toolkit] = None,
        limiter: Optional[ScopeLimiter] = None,
    ):
        self.kit = kit or Toolkit.default()
        self.limiter = limiter or ScopeLimiter()
        self.logs: list[str] = []
        self.warnings: list[str] = []

    def plan(self, ctx: BuildContext) -> Pipeline:
        pipeline, pipeline_logs, pipeline_warnings = builder.build_pipeline(ctx)
        self.logs.extend(pipeline_logs)
        self.warnings.extend(pipeline_warnings)
        return pipeline

    async def run(self, ctx: BuildContext, approve: Approver = reject_all) -> RunResponse:
        """
        Прогоняет весь граф шагов для контекста внутри процесса.
        Шаги релиза, добавленные через upload_steps, выполняются в том же прогоне.
        """
        pipeline = self.plan(ctx)
        pipeline_summary = builder.summarize_pipeline(pipeline)

        runner = PipelineRunner(self.kit, approve=approve, limiter=self.limiter)
        results = await runner.run(pipeline.steps)
        self.logs.extend(runner.logs)

        statuses = {r.status for r in results}
        if StepStatus.FAILED in statuses:
            status = "error"
            self.warnings.extend(
                f"{r.name}: {r.reason}" for r in results if r.status == StepStatus.FAILED
            )
        elif StepStatus.CANCELLED in statuses:
            status = "cancelled"
        else:
            status = "ok"

        return RunResponse(
            status=status,
            context=ctx,
            results=results,
            warnings=self.warnings,
            logs=self.logs,
            pipeline_summary=pipeline_summary,
        )

    async def run_step(
        self,
        ctx: BuildContext,
        action: StepAction,
        pipeline: Optional[PipelineHandle] = None,
    ) -> StepResult:
        """
        Выполняет один шаг графа (так его вызывает агент CI). Ошибки не перехватываются:
        агент должен увидеть ненулевой код выхода.

        :raises PipelineError: если для контекста в графе нет такого шага.
        """
        step = next((s for s in builder.build_steps(ctx) if s.action == action), None)
        if step is None or step.is_control:
            raise PipelineError(
                description=f"Step {action.value!r} is not part of the pipeline for {ctx.model_dump()}"
            )

        async with self.limiter.hold(step.hints):
            outcome = await actions.execute(step, self.kit, pipeline)

        return StepResult(
            name=step.name,
            action=step.action,
            status=outcome.status,
            reason=outcome.reason,
        )
