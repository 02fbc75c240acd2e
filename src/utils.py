import asyncio
import functools
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import click


PathLike = Union[str, Path]


def async_click(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))
    return wrapper


def log_collapsed(text: str) -> None:
    """
    Заголовок свёрнутой секции в логе CI (Buildkite понимает префикс `--- `).
    """
    click.echo(f"--- {text}")


async def run_process(
    args: Sequence[str],
    cwd: Optional[PathLike] = None,
    inherit_stdio: bool = False,
    stdin: Optional[bytes] = None,
) -> Tuple[int, str]:
    """
    Запускает внешний процесс и дожидается его завершения.

    При inherit_stdio=True вывод идёт прямо в наш stdout/stderr и не захватывается,
    иначе возвращается склеенный stdout+stderr.
    """
    pipe = None if inherit_stdio else asyncio.subprocess.PIPE

    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=str(cwd) if cwd is not None else None,
        stdin=asyncio.subprocess.PIPE if stdin is not None else None,
        stdout=pipe,
        stderr=asyncio.subprocess.STDOUT if pipe else None,
    )
    stdout, _ = await process.communicate(input=stdin)

    output = stdout.decode("utf-8", errors="replace") if stdout else ""
    return process.returncode, output


def tail(output: str, lines: int = 20) -> List[str]:
    return output.strip().splitlines()[-lines:]
