from typing import List, Optional

from exception import CLIException


class GitExceptions(CLIException):
    """
    Базовое исключение для работы с Git/репозиториями.

    Дополнительно хранит логи (steps), накопленные во время операции.
    """

    def __init__(
        self,
        *args,
        description: str = "Something happend when work with Git",
        logs: Optional[List[str]] = None,
    ) -> None:
        super().__init__(*args, description=description, logs=logs)


class VCSLookupError(GitExceptions):
    """
    Коммит не удалось разрешить (например, shallow clone без нужного объекта).
    """

    def __init__(
        self,
        ref: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to resolve commit {ref!r}"
        super().__init__(*args, description=description, logs=logs)
        self.ref = ref


class VCSTagError(GitExceptions):
    """
    Ошибка при создании локального тега.
    """

    def __init__(
        self,
        tag: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = f"Error to create tag {tag}"
        super().__init__(*args, description=description, logs=logs)
        self.tag = tag


class VCSPushError(GitExceptions):
    """
    Удалённый репозиторий отклонил push тега. Локальный тег при этом остаётся.
    """

    def __init__(
        self,
        remote: str,
        tag: str,
        logs: Optional[List[str]] = None,
        *args,
    ) -> None:
        description = (
            f"Error to push tag {tag} to {remote}; "
            f"local tag {tag} may still exist"
        )
        super().__init__(*args, description=description, logs=logs)
        self.remote = remote
        self.tag = tag
