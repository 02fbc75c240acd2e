from typing import List, Optional

import click


class CLIException(Exception):
    def __init__(
        self,
        *args,
        description: str = "Something happend...",
        logs: Optional[List[str]] = None,
    ):
        click.echo(description, err=True)
        super().__init__(description, *args)
        self.description = description
        self.logs: List[str] = logs or []
