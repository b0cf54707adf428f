"""Read and write visitor_<id>.json files.

RecordStore is the public API:
    store = RecordStore("./dataFolder")
    record = VisitorRecord("Jane Doe", 25, "2023-10-27", "11:00", "Comment", "Bob Smith")
    store.save(record)        # "Visitor data saved to visitor_1.json."
    store.save(record)        # "Visitor data for visitor_1.json has been updated."
    store.load(1)

One record per file, overwritten in place on update. Nothing here locks the
directory; callers serialise access themselves.
"""

from __future__ import annotations

import contextlib
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from visitorlog.allocator import DirectoryScanAllocator
from visitorlog.errors import ErrorKind, VisitorLogError
from visitorlog.models import VisitorRecord, parse_record_id, record_filename

if TYPE_CHECKING:
    from collections.abc import Iterator

    from visitorlog.allocator import IdAllocator

logger = logging.getLogger("visitorlog.store")


class RecordStore:
    """JSON-file-backed visitor record store."""

    def __init__(self, data_dir: Path | str, allocator: IdAllocator | None = None) -> None:
        self.data_dir = Path(data_dir)
        self.allocator = allocator or DirectoryScanAllocator(self.data_dir)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_for(self, record_id: int) -> Path:
        return self.data_dir / record_filename(record_id)

    def exists(self, record_id: int) -> bool:
        return self.path_for(record_id).exists()

    def generate_id(self) -> int:
        return self.allocator.next_id()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self, record_id: Any) -> VisitorRecord:
        """Rebuild a validated record from visitor_<id>.json."""
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise VisitorLogError(ErrorKind.INVALID_ID)

        path = self.path_for(record_id)
        if not path.exists():
            raise VisitorLogError(ErrorKind.RECORD_NOT_FOUND, id=record_id)

        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            msg = f"{path.name} does not hold a JSON object"
            raise ValueError(msg)
        if data.get("id") is None:
            data["id"] = record_id
        return VisitorRecord.from_dict(data)

    def list_ids(self) -> list[int]:
        """Ids of all stored records, ascending."""
        if not self.data_dir.exists():
            return []
        ids = (parse_record_id(p.name) for p in self.data_dir.iterdir())
        return sorted(record_id for record_id in ids if record_id is not None)

    def iter_records(self) -> Iterator[VisitorRecord]:
        for record_id in self.list_ids():
            yield self.load(record_id)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, record: VisitorRecord) -> str:
        """Create or overwrite the record's file and return a status line.

        A record without an id gets one from the allocator. A record whose id
        has no file on disk is refused: only previously saved records can be
        updated.
        """
        record.validate()

        is_new = record.id is None
        record_id = self.generate_id() if record.id is None else record.id

        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(record_id)
        if not is_new and not path.exists():
            raise VisitorLogError(ErrorKind.CANNOT_UPDATE, id=record_id)
        if is_new and path.exists():
            msg = f"Allocator returned ID {record_id}, but {path.name} already exists"
            raise FileExistsError(msg)

        self._write_json(path, {**record.to_dict(), "id": record_id})
        record.assign_id(record_id)

        if is_new:
            logger.info("saved new record %d to %s", record_id, path)
            return f"Visitor data saved to {path.name}."
        logger.info("updated record %d at %s", record_id, path)
        return f"Visitor data for {path.name} has been updated."

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        """Write to a temp sibling then rename over the target."""
        tmp = path.with_suffix(".json.tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            tmp.replace(path)
        except BaseException:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
