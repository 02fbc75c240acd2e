from typing import List, Optional

import click

from docspipe import config
from utils import PathLike, run_process

from .exceptions import IndexUpdateError


class SearchIndexUpdater:
    """
    Обновление поискового индекса внешним скриптом. Потоки ввода-вывода наследуются,
    успех определяется только кодом возврата.
    """

    def __init__(self, command: Optional[List[str]] = None) -> None:
        self.command = list(command or config.SEARCH_INDEX_COMMAND)

    async def update(self, hostname: str, cwd: Optional[PathLike] = None) -> None:
        """
        :raises IndexUpdateError: при ненулевом коде возврата.
        """
        args = [*self.command, hostname]
        click.echo(" ".join(args))
        returncode, _ = await run_process(args, cwd=cwd, inherit_stdio=True)
        if returncode != 0:
            raise IndexUpdateError(hostname=hostname, returncode=returncode)
