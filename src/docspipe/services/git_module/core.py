import asyncio

from git import (
    Repo as GitRepo,
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from pathlib import Path
from typing import List

from utils import PathLike

from .exceptions import GitExceptions, VCSLookupError, VCSTagError, VCSPushError


class GitClient:
    """
    Тонкая обёртка над GitPython для трёх операций, нужных релизу:

    - rev_parse(short_len, ref): короткий хеш коммита;
    - tag(name)                : локальный тег на текущем коммите;
    - push(remote, name)       : отправка тега в удалённый репозиторий.

    GitPython синхронный, поэтому каждый вызов уходит в отдельный поток.
    """

    def __init__(self, path: PathLike = ".") -> None:
        self.path = Path(path)

    def _open(self, logs: List[str]) -> GitRepo:
        try:
            return GitRepo(self.path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            logs.append(f"GitPython: {self.path} не является git-репозиторием.")
            raise GitExceptions(
                description=f"Not a git repository: {self.path}", logs=logs
            ) from e

    def _rev_parse(self, short_len: int, ref: str) -> str:
        logs: List[str] = [f"rev-parse --short={short_len} {ref}"]
        repo = self._open(logs)
        try:
            return repo.git.rev_parse(
                f"--short={short_len}", "--verify", f"{ref}^{{commit}}"
            ).strip()
        except GitCommandError as e:
            logs.append(str(e))
            raise VCSLookupError(ref=ref, logs=logs) from e
        finally:
            repo.close()

    def _tag(self, name: str) -> None:
        logs: List[str] = [f"tag {name}"]
        repo = self._open(logs)
        try:
            repo.create_tag(name)
        except GitCommandError as e:
            logs.append(str(e))
            raise VCSTagError(tag=name, logs=logs) from e
        finally:
            repo.close()

    def _push(self, remote: str, name: str) -> None:
        logs: List[str] = [f"push {remote} {name}"]
        repo = self._open(logs)
        try:
            repo.git.push(remote, name)
        except GitCommandError as e:
            logs.append(str(e))
            raise VCSPushError(remote=remote, tag=name, logs=logs) from e
        finally:
            repo.close()

    async def rev_parse(self, short_len: int, ref: str) -> str:
        """
        :raises VCSLookupError: если коммит не найден в локальной истории.
        """
        return await asyncio.to_thread(self._rev_parse, short_len, ref)

    async def tag(self, name: str) -> None:
        await asyncio.to_thread(self._tag, name)

    async def push(self, remote: str, name: str) -> None:
        """
        :raises VCSPushError: если remote отклонил push.
        """
        await asyncio.to_thread(self._push, remote, name)
