import shutil
import subprocess
from pathlib import Path

import pytest

from docspipe.services.git_module import (
    GitClient,
    GitExceptions,
    VCSLookupError,
    VCSPushError,
)


pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not found")


def _run_git(args, cwd: Path) -> str:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    origin = tmp_path / "origin.git"
    _run_git(["init", "--bare", str(origin)], tmp_path)

    work = tmp_path / "work"
    work.mkdir()
    _run_git(["init"], work)
    _run_git(["config", "user.email", "bot@example.com"], work)
    _run_git(["config", "user.name", "Docs Bot"], work)
    (work / "README.md").write_text("docs", encoding="utf-8")
    _run_git(["add", "README.md"], work)
    _run_git(["commit", "-m", "initial"], work)
    _run_git(["remote", "add", "origin", str(origin)], work)
    return work


@pytest.mark.asyncio
async def test_rev_parse_short_hash(repo):
    sha = _run_git(["rev-parse", "HEAD"], repo)

    short = await GitClient(repo).rev_parse(12, sha)

    assert short == sha[:12]


@pytest.mark.asyncio
async def test_rev_parse_unknown_commit(repo):
    with pytest.raises(VCSLookupError) as info:
        await GitClient(repo).rev_parse(12, "0" * 40)

    assert info.value.ref == "0" * 40
    assert info.value.logs


@pytest.mark.asyncio
async def test_tag_and_push(repo):
    client = GitClient(repo)

    await client.tag("docs/release-2024-01-01-abcdef012345")
    await client.push("origin", "docs/release-2024-01-01-abcdef012345")

    origin = repo.parent / "origin.git"
    assert _run_git(["tag", "--list"], origin) == "docs/release-2024-01-01-abcdef012345"


@pytest.mark.asyncio
async def test_push_to_missing_remote(repo):
    client = GitClient(repo)
    await client.tag("docs/release-x")

    with pytest.raises(VCSPushError) as info:
        await client.push("nowhere", "docs/release-x")

    assert info.value.remote == "nowhere"
    assert _run_git(["tag", "--list"], repo) == "docs/release-x"


@pytest.mark.asyncio
async def test_not_a_repository(tmp_path):
    with pytest.raises(GitExceptions):
        await GitClient(tmp_path / "missing").rev_parse(12, "HEAD")
