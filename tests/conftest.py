"""Pytest configuration & custom summary hook.

Also ensures the project root is on sys.path so 'import schedlab' works
without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

DATA_DIR = _root / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append pass/fail counts per test module."""
    stats = terminalreporter.stats
    per_module: dict[str, list[int]] = {}
    for outcome, column in (("passed", 0), ("failed", 1), ("error", 1), ("skipped", 2)):
        for rep in stats.get(outcome, []):
            if not hasattr(rep, "nodeid"):
                continue
            module = rep.nodeid.split("::", 1)[0].rsplit("/", 1)[-1]
            per_module.setdefault(module, [0, 0, 0])[column] += 1

    terminalreporter.section("schedlab summary", sep="=")
    for module in sorted(per_module):
        passed, failed, skipped = per_module[module]
        terminalreporter.write_line(
            f"{module:<24} passed={passed:<4} failed={failed:<4} skipped={skipped}"
        )
    broken = stats.get("failed", []) + stats.get("error", [])
    if broken:
        terminalreporter.write_line("Failing:")
        for rep in broken:
            terminalreporter.write_line(f"  - {getattr(rep, 'nodeid', rep)}")
