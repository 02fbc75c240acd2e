from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class BuildContext(BaseModel):
    """
    Что запустило прогон пайплайна: ветка, тег и номер pull request'а.
    Неизменяемый: на каждый прогон ровно один контекст.
    """

    model_config = ConfigDict(frozen=True)

    branch: str
    tag: Optional[str] = None
    pr: Optional[int] = None

    def for_release(self, tag: str) -> "BuildContext":
        """Контекст для повторного входа в пайплайн с только что созданным тегом."""
        return BuildContext(branch=self.branch, tag=tag, pr=None)


class StepAction(str, Enum):
    BUILD = "build"
    DEPLOY = "deploy"
    UPDATE_INDEX = "update-index"
    TAG_RELEASE = "tag-release"
    WAIT = "wait"
    MANUAL_GATE = "manual-gate"


# Маркеры без действия: барьер ожидания и ручное подтверждение
CONTROL_ACTIONS = (StepAction.WAIT, StepAction.MANUAL_GATE)


class SchedulingHints(BaseModel):
    model_config = ConfigDict(frozen=True)

    agent_pool: Optional[str] = None
    concurrency_key: Optional[str] = None
    concurrency_limit: Optional[int] = None


class StepDescriptor(BaseModel):
    """
    Один шаг пайплайна. Порядок шагов в списке значим и сохраняется исполнителем.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    action: StepAction
    context: BuildContext
    hints: SchedulingHints = SchedulingHints()

    @property
    def is_control(self) -> bool:
        return self.action in CONTROL_ACTIONS


class DeploymentTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment_name: str
    public_hostname: str
    concurrency_scope: str
    replica_count: int
    is_production: bool = False

    @property
    def deployment_url(self) -> str:
        return f"https://{self.public_hostname}"


class ImageCoordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    repository: str
    tag: str


class StepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"
    NOT_RUN = "not_run"
    CANCELLED = "cancelled"


class StepResult(BaseModel):
    name: str
    action: StepAction
    status: StepStatus
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (StepStatus.SUCCEEDED, StepStatus.SKIPPED)


class Pipeline(BaseModel):
    """
    Упорядоченный набор шагов одного прогона вместе с контекстом, из которого он построен.
    """

    context: BuildContext
    steps: List[StepDescriptor]


class ActionOutcome(BaseModel):
    """
    Итог выполнения действия шага. Пропуск (SKIPPED) не ошибка, но и не успех:
    дашборды должны их различать.
    """

    status: StepStatus = StepStatus.SUCCEEDED
    reason: Optional[str] = None

    @classmethod
    def done(cls) -> "ActionOutcome":
        return cls(status=StepStatus.SUCCEEDED)

    @classmethod
    def skipped(cls, reason: str) -> "ActionOutcome":
        return cls(status=StepStatus.SKIPPED, reason=reason)
