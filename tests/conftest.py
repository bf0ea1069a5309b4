"""Shared fixtures for the aliasgate test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from aliasgate.lib import config
from aliasgate.lib.models import Directive, Location


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PASSING_DIR = FIXTURES_DIR / "passing"
FAILING_DIR = FIXTURES_DIR / "failing"
DIRECTIVES_DIR = FIXTURES_DIR / "directives"


def make_directive(
    alias: Optional[str],
    target: str,
    is_static: bool = False,
    line: int = 1,
) -> Directive:
    """Build a directive from the ``(alias_or_none, target, is_static)`` shorthand."""
    return Directive(
        target_name=target,
        alias_name=alias,
        is_static=is_static,
        location=Location("Example.cs", line, 0),
    )


def make_directives(*specs: tuple) -> list[Directive]:
    """Build directives numbered by line in the order given."""
    return [make_directive(*spec, line=i + 1) for i, spec in enumerate(specs)]


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests independent of any project config in the environment."""
    monkeypatch.delenv("ALIASGATE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    config.reset()


@pytest.fixture()
def write_project_config(tmp_path: Path):
    """Return a helper that writes ``.aliasgate.yaml`` and returns its path."""

    def _write(data: Any) -> Path:
        path = tmp_path / ".aliasgate.yaml"
        with open(path, "w", encoding="utf-8") as fh:
            yaml.dump(data, fh, default_flow_style=False)
        return path

    return _write


@pytest.fixture()
def passing_source() -> str:
    """Return a Python source whose aliases all follow plain imports."""
    return (PASSING_DIR / "aliases_last.py").read_text(encoding="utf-8")


@pytest.fixture()
def failing_source() -> str:
    """Return a Python source with aliases placed before plain imports."""
    return (FAILING_DIR / "alias_before_plain.py").read_text(encoding="utf-8")


@pytest.fixture()
def failing_document() -> str:
    """Return a directive document with violations at file and namespace level."""
    return (DIRECTIVES_DIR / "nested_violations.yaml").read_text(encoding="utf-8")
