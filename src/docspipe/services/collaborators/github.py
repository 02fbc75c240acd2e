import asyncio
import os
from typing import Any, Awaitable, Callable, Dict, List, Optional

import click
import requests
from pydantic import BaseModel

from docspipe import config

from .exceptions import StatusTrackerError


class DeploymentRequest(BaseModel):
    project_name: str
    environment: str
    deployment_url: str
    deployment_type: str
    pr_number: Optional[int] = None
    ref: str = ""


class DeploymentRecord(BaseModel):
    id: int
    environment: str


class DeploymentStatusTracker:
    """
    Жизненный цикл записи о деплое: pending -> success | failure.

    Наследники реализуют только транспорт (create/set_state).
    """

    async def create(self, request: DeploymentRequest) -> DeploymentRecord:
        raise NotImplementedError

    async def set_state(
        self, record: DeploymentRecord, request: DeploymentRequest, state: str
    ) -> None:
        raise NotImplementedError

    async def perform_deployment(
        self,
        request: DeploymentRequest,
        deploy_fn: Callable[[], Awaitable[None]],
    ) -> None:
        """
        Открывает запись в состоянии pending, вызывает deploy_fn и фиксирует результат.
        Исключение из deploy_fn пробрасывается дальше уже после перевода записи в failure.
        """
        record = await self.create(request)
        await self.set_state(record, request, "pending")
        try:
            await deploy_fn()
        except Exception:
            click.echo(f"Деплой в {request.environment} упал, статус -> failure", err=True)
            try:
                await self.set_state(record, request, "failure")
            except StatusTrackerError as tracker_error:
                # Наружу уходит ошибка деплоя, а не трекера
                click.echo(f"Не удалось выставить статус failure: {tracker_error}", err=True)
            raise
        await self.set_state(record, request, "success")


class GithubDeployments(DeploymentStatusTracker):
    """
    Статусы деплоя через GitHub Deployments API.
    """

    def __init__(
        self,
        repository: str = config.GITHUB_REPOSITORY,
        token: str = config.GITHUB_TOKEN,
        api_url: str = config.GITHUB_API_URL,
        timeout: float = config.HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github+json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _post(self, path: str, payload: Dict[str, Any], environment: str) -> Dict[str, Any]:
        url = f"{self.api_url}/repos/{self.repository}/{path}"
        logs: List[str] = [f"POST {url}"]
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logs.append(str(e))
            raise StatusTrackerError(environment=environment, message=str(e), logs=logs) from e
        return response.json()

    async def create(self, request: DeploymentRequest) -> DeploymentRecord:
        payload = {
            "ref": request.ref or config.current_commit(),
            "environment": request.environment,
            "description": f"{request.project_name} -> {request.environment}",
            "auto_merge": False,
            "required_contexts": [],
            "transient_environment": request.pr_number is not None,
            "production_environment": request.environment == "production",
            "payload": {
                "project_name": request.project_name,
                "deployment_type": request.deployment_type,
                "pr_number": request.pr_number,
            },
        }
        data = await asyncio.to_thread(
            self._post, "deployments", payload, request.environment
        )
        return DeploymentRecord(id=data["id"], environment=request.environment)

    async def set_state(
        self, record: DeploymentRecord, request: DeploymentRequest, state: str
    ) -> None:
        payload = {
            "state": state,
            "environment": record.environment,
            "environment_url": request.deployment_url,
        }
        build_url = os.getenv("BUILDKITE_BUILD_URL")
        if build_url:
            payload["log_url"] = build_url

        await asyncio.to_thread(
            self._post, f"deployments/{record.id}/statuses", payload, record.environment
        )
