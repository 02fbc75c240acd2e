from typing import List, Optional

from exception import CLIException


class PipelineError(CLIException):
    """
    Базовое исключение для шагов пайплайна. Все наследники фатальны для своего шага
    и без повторов уходят в движок CI.
    """

    def __init__(
        self,
        *args,
        description: str = "Something happend when run pipeline step",
        logs: Optional[List[str]] = None,
    ) -> None:
        super().__init__(*args, description=description, logs=logs)


class BuildError(PipelineError):
    def __init__(
        self,
        image: str,
        returncode: int,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to build image {image} (exit code {returncode})"
        super().__init__(*args, description=description, logs=logs)
        self.image = image
        self.returncode = returncode


class DeployError(PipelineError):
    def __init__(
        self,
        release: str,
        namespace: str,
        returncode: int,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = (
            f"Error to deploy release {release} to namespace {namespace} "
            f"(exit code {returncode})"
        )
        super().__init__(*args, description=description, logs=logs)
        self.release = release
        self.namespace = namespace
        self.returncode = returncode


class IndexUpdateError(PipelineError):
    def __init__(
        self,
        hostname: str,
        returncode: int,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to update search index for {hostname} (exit code {returncode})"
        super().__init__(*args, description=description, logs=logs)
        self.hostname = hostname
        self.returncode = returncode


class StatusTrackerError(PipelineError):
    """
    Сервис статусов деплоя не принял запрос (создание записи или смена состояния).
    """

    def __init__(
        self,
        environment: str,
        message: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to report deployment status for {environment}: {message}"
        super().__init__(*args, description=description, logs=logs)
        self.environment = environment
