import asyncio
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, Dict, List, Optional

import click

from docspipe.services import actions
from docspipe.services.actions import Toolkit
from model import SchedulingHints, StepAction, StepDescriptor, StepResult, StepStatus
from utils import log_collapsed


Approver = Callable[[StepDescriptor], Awaitable[bool]]


async def reject_all(step: StepDescriptor) -> bool:
    return False


class ScopeLimiter:
    """
    Ограничение параллельности по ключу (concurrency_key шага).

    Один экземпляр должен быть общим для всех прогонов в процессе, иначе два прогона
    смогут одновременно деплоить в одно окружение.
    """

    def __init__(self) -> None:
        self._semaphores: Dict[str, asyncio.Semaphore] = {}
        self._limits: Dict[str, int] = {}

    def _semaphore(self, key: str, limit: int) -> asyncio.Semaphore:
        if key not in self._semaphores:
            self._semaphores[key] = asyncio.Semaphore(limit)
            self._limits[key] = limit
        elif self._limits[key] != limit:
            raise ValueError(
                f"Concurrency key {key!r} already registered with limit {self._limits[key]}, "
                f"got {limit}"
            )
        return self._semaphores[key]

    @asynccontextmanager
    async def hold(self, hints: SchedulingHints):
        if not hints.concurrency_key:
            yield
            return

        semaphore = self._semaphore(hints.concurrency_key, hints.concurrency_limit or 1)
        async with semaphore:
            yield


class PipelineRunner:
    """
    Исполнитель шагов внутри процесса.

    Шаги между управляющими маркерами идут параллельно; wait ждёт, пока все шаги
    до него завершатся успешно; manual gate дополнительно спрашивает approver.
    Сам исполнитель служит ручкой пайплайна для шага релиза (upload_steps).
    """

    def __init__(
        self,
        kit: Toolkit,
        approve: Approver = reject_all,
        limiter: Optional[ScopeLimiter] = None,
    ) -> None:
        self.kit = kit
        self.approve = approve
        self.limiter = limiter or ScopeLimiter()
        self.logs: List[str] = []
        self._queue: List[StepDescriptor] = []

    async def upload_steps(self, steps: List[StepDescriptor]) -> None:
        self.logs.append(f"В прогон добавлено шагов: {len(steps)}")
        self._queue.extend(steps)

    async def run_step(self, step: StepDescriptor) -> StepResult:
        async with self.limiter.hold(step.hints):
            log_collapsed(step.name)
            try:
                outcome = await actions.execute(step, self.kit, self)
            except Exception as e:
                click.echo(f"Шаг {step.name!r} завершился ошибкой: {e}", err=True)
                self.logs.append(f"{step.name}: {e}")
                return StepResult(
                    name=step.name,
                    action=step.action,
                    status=StepStatus.FAILED,
                    reason=str(e),
                )

        if outcome.status == StepStatus.SKIPPED:
            click.echo(f"Шаг {step.name!r} пропущен: {outcome.reason}")
        self.logs.append(f"{step.name}: {outcome.status.value}")
        return StepResult(
            name=step.name,
            action=step.action,
            status=outcome.status,
            reason=outcome.reason,
        )

    def _abandon(self, status: StepStatus, reason: str) -> List[StepResult]:
        abandoned = [
            StepResult(name=s.name, action=s.action, status=status, reason=reason)
            for s in self._queue
        ]
        self._queue = []
        return abandoned

    async def run(self, steps: List[StepDescriptor]) -> List[StepResult]:
        self._queue = list(steps)
        results: List[StepResult] = []

        while self._queue:
            group: List[StepDescriptor] = []
            while self._queue and not self._queue[0].is_control:
                group.append(self._queue.pop(0))

            if group:
                group_results = await asyncio.gather(*(self.run_step(s) for s in group))
                results.extend(group_results)
                failed = [r.name for r in group_results if not r.ok]
                if failed:
                    results.extend(
                        self._abandon(StepStatus.NOT_RUN, f"blocked by failed {', '.join(failed)}")
                    )
                    break

            if not self._queue:
                break
            # Шаг релиза мог дописать в очередь обычные шаги
            if not self._queue[0].is_control:
                continue

            marker = self._queue.pop(0)
            if marker.action == StepAction.WAIT:
                results.append(
                    StepResult(name=marker.name, action=marker.action, status=StepStatus.SUCCEEDED)
                )
                continue

            log_collapsed(marker.name)
            if await self.approve(marker):
                results.append(
                    StepResult(name=marker.name, action=marker.action, status=StepStatus.SUCCEEDED)
                )
                continue

            results.append(
                StepResult(
                    name=marker.name,
                    action=marker.action,
                    status=StepStatus.CANCELLED,
                    reason="not approved",
                )
            )
            results.extend(self._abandon(StepStatus.NOT_RUN, "run abandoned at manual gate"))

        return results
