"""File-based visitor sign-in log: one JSON file per record.

Layout:
    dataFolder/
        visitor_1.json
        visitor_2.json

visitor_<id>.json:
    {"fullName": "Jane Doe", "age": 25, "date": "2023-10-27", "time": "11:00",
     "comments": "Comment", "assistant": "Bob Smith", "id": 1}

Ids are allocated by scanning existing file names (max + 1). No locking:
concurrent writers to one directory must be serialised by the caller, or use
the counter allocator (allocator = "counter" in visitorlog.toml).
"""

from visitorlog.allocator import CounterFileAllocator, DirectoryScanAllocator, IdAllocator
from visitorlog.config import VisitorLogConfig, init_config, load_config
from visitorlog.errors import ErrorKind, VisitorLogError
from visitorlog.models import VisitorRecord, parse_record_id, record_filename
from visitorlog.store import RecordStore
from visitorlog.validation import validate_fields

__all__ = [
    "CounterFileAllocator",
    "DirectoryScanAllocator",
    "ErrorKind",
    "IdAllocator",
    "RecordStore",
    "VisitorLogConfig",
    "VisitorLogError",
    "VisitorRecord",
    "init_config",
    "load_config",
    "parse_record_id",
    "record_filename",
    "validate_fields",
]
