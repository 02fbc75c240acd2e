from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol

from docspipe.services.collaborators import (
    DeploymentStatusTracker,
    GithubDeployments,
    HelmDeployer,
    RockerBuilder,
    SearchIndexUpdater,
)
from docspipe.services.git_module import GitClient
from model import StepDescriptor


class PipelineHandle(Protocol):
    """
    Ручка текущего прогона: единственное, что разрешено делать шагу с пайплайном:
    дописать в него новые шаги.
    """

    async def upload_steps(self, steps: List[StepDescriptor]) -> None:
        ...


@dataclass
class Toolkit:
    """
    Внешние системы, с которыми работают шаги.

    repo_root: корень репозитория с документацией (контекст сборки, package.json,
                кеши gatsby).
    """

    git: GitClient
    builder: RockerBuilder
    deployer: HelmDeployer
    tracker: DeploymentStatusTracker
    indexer: SearchIndexUpdater
    repo_root: Path = field(default_factory=lambda: Path("."))

    @classmethod
    def default(cls, repo_root: Path = Path(".")) -> "Toolkit":
        return cls(
            git=GitClient(repo_root),
            builder=RockerBuilder(),
            deployer=HelmDeployer(),
            tracker=GithubDeployments(),
            indexer=SearchIndexUpdater(),
            repo_root=repo_root,
        )
