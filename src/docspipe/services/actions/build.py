import json
import shutil
from pathlib import Path
from typing import Optional

import click

from docspipe import config
from docspipe.services.collaborators import PipelineError
from model import ActionOutcome, BuildContext, ImageCoordinates
from utils import log_collapsed

from .toolkit import Toolkit


def image_coordinates(commit: Optional[str] = None) -> ImageCoordinates:
    if commit is None:
        commit = config.current_commit()
    if not commit:
        raise PipelineError(
            description="Commit sha is not set: export CURRENT_COMMIT_SHA or BUILDKITE_COMMIT"
        )
    return ImageCoordinates(repository=config.IMAGE_REPOSITORY, tag=commit)


def docs_version(repo_root: Path) -> str:
    package_json = repo_root / config.PACKAGE_JSON
    with open(package_json, encoding="utf-8") as f:
        return f"v{json.load(f)['version']}"


def clear_stale_cache(repo_root: Path) -> None:
    # gatsby иногда не пересобирает разделы из старого кеша, и они молча пропадают
    for relative in config.STALE_CACHE_DIRS:
        target = repo_root / relative
        if target.exists():
            click.echo(f"Удаляем кеш сборки: {target}")
            shutil.rmtree(target)


async def build(ctx: BuildContext, kit: Toolkit) -> ActionOutcome:
    """
    Собирает и пушит образ документации для текущего коммита.

    :raises BuildError: если сборщик упал. Повторов нет.
    """
    image = image_coordinates()

    log_collapsed(":hammer: Building Docs...")
    clear_stale_cache(kit.repo_root)

    await kit.builder.build(
        rockerfile=config.ROCKERFILE,
        context=config.BUILD_CONTEXT,
        vars={
            "ImageName": image.repository,
            "ImageTag": image.tag,
            "DocsVersion": docs_version(kit.repo_root),
        },
        pull=True,
        push=True,
        cwd=kit.repo_root,
    )
    return ActionOutcome.done()
