from datetime import date
from typing import Optional

from docspipe import config
from docspipe.services.git_module import GitClient, VCSLookupError


async def make_version_name(
    git: GitClient,
    commit: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Имя релиза вида YYYY-MM-DD-<12 hex>.

    Дата идёт первой, поэтому лексикографический порядок совпадает с хронологическим.
    Для одной пары (дата, коммит) результат всегда одинаковый.

    :raises VCSLookupError: если коммит не найден.
    """
    if commit is None:
        commit = config.current_commit()
    if not commit:
        raise VCSLookupError(ref="", logs=["Commit sha is not set in environment"])
    if today is None:
        today = date.today()

    short_hash = (await git.rev_parse(config.VERSION_HASH_LENGTH, commit)).strip()
    return f"{today.year}-{today.month:02d}-{today.day:02d}-{short_hash}"


def make_release_tag(version_name: str) -> str:
    return f"{config.RELEASE_TAG_PREFIX}{version_name}"
