import json
from pathlib import Path

import pytest

from docspipe.services.actions import Toolkit

from fakes import (
    COMMIT,
    FakeBuilder,
    FakeDeployer,
    FakeGit,
    FakeIndexer,
    RecordingTracker,
)


@pytest.fixture
def commit(monkeypatch):
    monkeypatch.setenv("CURRENT_COMMIT_SHA", COMMIT)
    return COMMIT


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(
        json.dumps({"name": "expo-docs", "version": "30.0.0"}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def kit(repo_root: Path, commit) -> Toolkit:
    return Toolkit(
        git=FakeGit(),
        builder=FakeBuilder(),
        deployer=FakeDeployer(),
        tracker=RecordingTracker(),
        indexer=FakeIndexer(),
        repo_root=repo_root,
    )
