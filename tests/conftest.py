from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from visitorlog.models import VisitorRecord
from visitorlog.store import RecordStore

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "dataFolder"


@pytest.fixture
def store(data_dir: Path) -> RecordStore:
    return RecordStore(data_dir)


@pytest.fixture
def jane() -> VisitorRecord:
    return VisitorRecord("Jane Doe", 25, "2023-10-27", "11:00", "Comment", "Bob Smith")
