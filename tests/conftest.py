import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from codemetrics.result_store import LastResultCell  # noqa: E402

FIXED_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def result_cell() -> LastResultCell:
    return LastResultCell()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_TIME


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
