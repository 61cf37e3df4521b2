"""Shared fixtures and helpers for tests."""

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from go_include.formatter import IdentityFormatter
from go_include.models import Options

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def go_parser() -> Parser:
    """Return a tree-sitter parser for Go."""
    return get_parser("go")


@pytest.fixture
def identity_formatter() -> IdentityFormatter:
    return IdentityFormatter()


@pytest.fixture
def options(tmp_path: Path) -> Options:
    """Options resolving included files against ``tmp_path``."""
    return Options(working_dir=str(tmp_path))


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    def _write(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def example_dir(tmp_path: Path) -> Path:
    """Copy of the example Go package (stub source plus index.html)."""
    target = tmp_path / "example"
    shutil.copytree(_REPO_ROOT / "tests" / "fixtures" / "example", target)
    return target
