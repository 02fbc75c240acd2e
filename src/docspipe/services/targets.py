from docspipe import config
from model import BuildContext, DeploymentTarget


def is_production(ctx: BuildContext) -> bool:
    return bool(ctx.tag) and ctx.pr is None


def resolve_target(ctx: BuildContext) -> DeploymentTarget:
    """
    Куда деплоить по контексту прогона. Правила по приоритету:

    1. есть тег и нет PR       -> production;
    2. есть PR                 -> превью-окружение docs-pr-{pr};
    3. всё остальное           -> staging.
    """
    if is_production(ctx):
        return DeploymentTarget(
            environment_name="production",
            public_hostname=config.PRODUCTION_HOST,
            concurrency_scope="prod",
            replica_count=config.PRODUCTION_REPLICAS,
            is_production=True,
        )

    if ctx.pr is not None:
        environment = f"docs-pr-{ctx.pr}"
        return DeploymentTarget(
            environment_name=environment,
            public_hostname=f"{environment}.{config.PREVIEW_DOMAIN}",
            concurrency_scope=f"pr-{ctx.pr}",
            replica_count=config.DEFAULT_REPLICAS,
        )

    return DeploymentTarget(
        environment_name="staging",
        public_hostname=config.STAGING_HOST,
        concurrency_scope="staging",
        replica_count=config.DEFAULT_REPLICAS,
    )


def can_deploy(ctx: BuildContext) -> bool:
    """
    Деплой разрешён для PR, для основной ветки и для тегов.
    Для прочих веток шаг деплоя ничего не делает.
    """
    return ctx.pr is not None or ctx.branch == config.MAINLINE_BRANCH or bool(ctx.tag)


def can_update_index(ctx: BuildContext) -> bool:
    return ctx.branch == config.MAINLINE_BRANCH or bool(ctx.tag)


def environment_label(ctx: BuildContext) -> str:
    """Человекочитаемое имя окружения для названия шага."""
    if is_production(ctx):
        return "Production"
    if ctx.pr is not None:
        return "Dev"
    return "Staging"


def concurrency_key(ctx: BuildContext) -> str:
    return f"{config.PROJECT_NAME}/{resolve_target(ctx).concurrency_scope}/deploy"


def is_tracked_branch(ctx: BuildContext) -> bool:
    return ctx.branch in config.TRACKED_BRANCHES


def can_release(ctx: BuildContext) -> bool:
    """Релиз режется только с отслеживаемой ветки и никогда из PR."""
    return ctx.pr is None and not ctx.tag and is_tracked_branch(ctx)
