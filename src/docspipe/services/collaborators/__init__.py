from .rocker import RockerBuilder
from .helm import HelmDeployer
from .github import (
    DeploymentRecord,
    DeploymentRequest,
    DeploymentStatusTracker,
    GithubDeployments,
)
from .search_index import SearchIndexUpdater

from .exceptions import (
    PipelineError,
    BuildError,
    DeployError,
    IndexUpdateError,
    StatusTrackerError,
)

__all__ = [
    "RockerBuilder",
    "HelmDeployer",
    "DeploymentRecord",
    "DeploymentRequest",
    "DeploymentStatusTracker",
    "GithubDeployments",
    "SearchIndexUpdater",
    "PipelineError",
    "BuildError",
    "DeployError",
    "IndexUpdateError",
    "StatusTrackerError",
]
