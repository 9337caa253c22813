"""Shared test fixtures for mmpolicy."""

import logging
import os
from pathlib import Path

import pytest

from mmpolicy.policy import (
    DirectoriesPlus,
    Exec,
    ExternalList,
    List,
    Name,
    Policy,
    Rule,
    Show,
)


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the example policies directory."""
    return Path(__file__).parent.parent / "examples" / "policies"


@pytest.fixture
def size_policy() -> Policy:
    """Policy with an external list and a named list rule."""
    return Policy(
        name=Name("size"),
        rules=[
            Rule(ExternalList(Name("size"), Exec(""))),
            Rule(
                List(Name("size"), DirectoriesPlus(True), (Show.KB_ALLOCATED,)),
                name=Name("size"),
            ),
        ],
    )


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config lookup at an empty directory and clear MMPOLICY_* vars."""
    for var in list(os.environ):
        if var.startswith("MMPOLICY_"):
            monkeypatch.delenv(var)
    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("MMPOLICY_CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def reset_root_logger():
    """Save and restore root logger state around a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers[:] = original_handlers
    root.setLevel(original_level)


FAKE_ENGINE = """#!/bin/sh
# Fake mmapplypolicy: find the -f argument and create one list file.
while [ $# -gt 0 ]; do
    if [ "$1" = "-f" ]; then
        echo "/data/file1" > "$2/list.size"
    fi
    shift
done
echo "policy applied"
exit ${FAKE_EXIT:-0}
"""


@pytest.fixture
def fake_engine(tmp_path: Path) -> Path:
    """Executable shell script standing in for mmapplypolicy."""
    path = tmp_path / "bin" / "mmapplypolicy"
    path.parent.mkdir()
    path.write_text(FAKE_ENGINE)
    path.chmod(0o755)
    return path
