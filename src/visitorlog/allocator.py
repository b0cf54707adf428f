"""Identifier allocation for new records.

RecordStore only talks to the IdAllocator protocol, so the scan-based default
can be swapped for the counter-file allocator (or anything else with a
``next_id``) without touching validation or persistence.

DirectoryScanAllocator
    max(visitor_<n>.json) + 1. No locking: two processes scanning the same
    directory at once may be handed the same id.

CounterFileAllocator
    Last issued id kept in <data_dir>/.visitor_counter.json, incremented under
    flock(LOCK_EX). Seeded from a directory scan when the file is missing.
"""

from __future__ import annotations

import fcntl
import json
import logging
from pathlib import Path
from typing import Protocol

from visitorlog.models import parse_record_id

logger = logging.getLogger("visitorlog.allocator")

COUNTER_FILENAME = ".visitor_counter.json"


class IdAllocator(Protocol):
    def next_id(self) -> int: ...


def scan_max_id(data_dir: Path) -> int:
    """Highest id among visitor_<n>.json files in data_dir, or 0."""
    ids = [
        record_id
        for record_id in (parse_record_id(p.name) for p in data_dir.iterdir())
        if record_id is not None
    ]
    return max(ids, default=0)


class DirectoryScanAllocator:
    """Next id = highest stored id + 1."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def next_id(self) -> int:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        record_id = scan_max_id(self.data_dir) + 1
        logger.debug("scan allocator: next id %d in %s", record_id, self.data_dir)
        return record_id


class CounterFileAllocator:
    """Monotonic counter persisted next to the records."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    @property
    def counter_path(self) -> Path:
        return self.data_dir / COUNTER_FILENAME

    def next_id(self) -> int:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.counter_path.touch(exist_ok=True)
        with self.counter_path.open("r+") as f:
            fcntl.flock(f, fcntl.LOCK_EX)
            raw = f.read().strip()
            if raw:
                current = int(json.loads(raw)["current_id"])
            else:
                current = scan_max_id(self.data_dir)
                logger.info("counter allocator: seeded at %d from %s", current, self.data_dir)
            # Never fall behind records written by another allocator.
            record_id = max(current, scan_max_id(self.data_dir)) + 1
            f.seek(0)
            f.write(json.dumps({"current_id": record_id}))
            f.truncate()
        logger.debug("counter allocator: issued id %d", record_id)
        return record_id


def make_allocator(kind: str, data_dir: Path | str) -> IdAllocator:
    """Build the allocator named in config: "scan" or "counter"."""
    if kind == "scan":
        return DirectoryScanAllocator(data_dir)
    if kind == "counter":
        return CounterFileAllocator(data_dir)
    msg = f"Unknown allocator: {kind!r} (expected 'scan' or 'counter')"
    raise ValueError(msg)
