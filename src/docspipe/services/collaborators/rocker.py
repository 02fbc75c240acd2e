from typing import Dict, List, Optional

import click

from utils import PathLike, run_process, tail

from .exceptions import BuildError


class RockerBuilder:
    """
    Сборка образа через rocker (Dockerfile с шаблонами и переменными).
    """

    def __init__(self, executable: str = "rocker") -> None:
        self.executable = executable

    def command(
        self,
        rockerfile: str,
        context: str,
        vars: Dict[str, str],
        pull: bool = False,
        push: bool = False,
    ) -> List[str]:
        args = [self.executable, "build", "-f", rockerfile]
        for key, value in vars.items():
            args += ["--var", f"{key}={value}"]
        if pull:
            args.append("--pull")
        if push:
            args.append("--push")
        args.append(context)
        return args

    async def build(
        self,
        rockerfile: str,
        context: str,
        vars: Dict[str, str],
        pull: bool = False,
        push: bool = False,
        cwd: Optional[PathLike] = None,
    ) -> None:
        """
        Пути rockerfile и context считаются от cwd (корень репозитория).

        :raises BuildError: если rocker завершился с ненулевым кодом.
        """
        args = self.command(rockerfile, context, vars, pull=pull, push=push)
        click.echo(" ".join(args))

        returncode, output = await run_process(args, cwd=cwd)
        if returncode != 0:
            image = f"{vars.get('ImageName', '?')}:{vars.get('ImageTag', '?')}"
            raise BuildError(image=image, returncode=returncode, logs=tail(output))
