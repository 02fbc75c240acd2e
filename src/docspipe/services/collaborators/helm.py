import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml

from utils import PathLike, run_process, tail

from .exceptions import DeployError


class HelmDeployer:
    """
    Деплой helm-чарта в кластер: `helm upgrade --install` с values из временного файла.
    """

    def __init__(self, executable: str = "helm") -> None:
        self.executable = executable

    def command(
        self,
        cluster_name: str,
        chart_path: str,
        namespace: str,
        release_name: str,
        values_file: str,
    ) -> List[str]:
        return [
            self.executable,
            "upgrade",
            "--install",
            release_name,
            chart_path,
            "--kube-context", cluster_name,
            "--namespace", namespace,
            "--create-namespace",
            "--values", values_file,
            "--wait",
        ]

    async def deploy_chart(
        self,
        cluster_name: str,
        chart_path: str,
        namespace: str,
        release_name: str,
        values: Dict[str, Any],
        cwd: Optional[PathLike] = None,
    ) -> None:
        """
        chart_path считается от cwd (корень репозитория).

        :raises DeployError: если helm завершился с ненулевым кодом.
        """
        with tempfile.TemporaryDirectory(prefix="docspipe_") as tmp:
            values_file = Path(tmp) / "values.yaml"
            values_file.write_text(
                yaml.safe_dump(values, default_flow_style=False), encoding="utf-8"
            )

            args = self.command(
                cluster_name, chart_path, namespace, release_name, str(values_file)
            )
            click.echo(" ".join(args))
            returncode, output = await run_process(args, cwd=cwd)

        if returncode != 0:
            raise DeployError(
                release=release_name,
                namespace=namespace,
                returncode=returncode,
                logs=tail(output),
            )
