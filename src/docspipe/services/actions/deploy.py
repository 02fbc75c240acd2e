from typing import Any, Dict

from docspipe import config
from docspipe.services.collaborators import DeploymentRequest
from docspipe.services.targets import can_deploy, resolve_target
from model import ActionOutcome, BuildContext, DeploymentTarget, ImageCoordinates
from utils import log_collapsed

from .build import image_coordinates
from .toolkit import Toolkit


def chart_values(target: DeploymentTarget, image: ImageCoordinates) -> Dict[str, Any]:
    return {
        "image": {
            "repository": image.repository,
            "tag": image.tag,
        },
        "replicaCount": target.replica_count,
        "ingress": [
            {"host": target.public_hostname},
        ],
    }


async def deploy(ctx: BuildContext, kit: Toolkit) -> ActionOutcome:
    """
    Деплой в окружение, выбранное по контексту, с отчётом о статусе в трекер.

    Если контексту деплой не разрешён, внешние системы не трогаем вообще.
    Сериализация деплоев в одно окружение остаётся за исполнителем (concurrency_key шага).

    :raises DeployError: после того как запись в трекере переведена в failure.
    """
    if not can_deploy(ctx):
        return ActionOutcome.skipped(
            f"branch {ctx.branch!r} is not deployable without a tag or pull request"
        )

    target = resolve_target(ctx)
    image = image_coordinates()

    log_collapsed(":gcloud: Deploy to K8s...")

    request = DeploymentRequest(
        project_name=config.PROJECT_NAME,
        environment=target.environment_name,
        deployment_url=target.deployment_url,
        deployment_type=config.DEPLOYMENT_TYPE,
        pr_number=ctx.pr,
        ref=image.tag,
    )

    async def deploy_chart() -> None:
        await kit.deployer.deploy_chart(
            cluster_name=config.CLUSTER_NAME,
            chart_path=config.CHART_PATH,
            namespace=target.environment_name,
            release_name=f"{config.PROJECT_NAME}-{target.environment_name}",
            values=chart_values(target, image),
            cwd=kit.repo_root,
        )

    await kit.tracker.perform_deployment(request, deploy_chart)
    return ActionOutcome.done()
