"""VisitorLogConfig: project-local config for the visitor log.

Default layout (relative to the project root):

    visitorlog.toml       # optional project config
    dataFolder/
        visitor_1.json
        visitor_2.json
        .visitor_counter.json   # only with allocator = "counter"

visitorlog.toml example:

    [visitorlog]
    data_dir = "dataFolder"
    allocator = "scan"        # scan | counter
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from visitorlog.allocator import make_allocator
from visitorlog.store import RecordStore

_CONFIG_FILENAME = "visitorlog.toml"
_DEFAULT_DATA_DIR = "dataFolder"
_DEFAULT_ALLOCATOR = "scan"


@dataclass
class VisitorLogConfig:
    """Resolved configuration for a visitor log project."""

    root: Path                      # directory that contains visitorlog.toml
    data_dir: Path = field(default_factory=Path)
    allocator: str = _DEFAULT_ALLOCATOR

    @property
    def config_path(self) -> Path:
        return self.root / _CONFIG_FILENAME

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def open_store(self) -> RecordStore:
        return RecordStore(self.data_dir, allocator=make_allocator(self.allocator, self.data_dir))


def load_config(root: Path | str | None = None) -> VisitorLogConfig:
    """Load visitorlog.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    section = raw.get("visitorlog", {})
    allocator = str(section.get("allocator", _DEFAULT_ALLOCATOR))
    if allocator not in ("scan", "counter"):
        msg = f"{config_path}: allocator must be 'scan' or 'counter', got {allocator!r}"
        raise ValueError(msg)

    return VisitorLogConfig(
        root=root_path,
        data_dir=root_path / section.get("data_dir", _DEFAULT_DATA_DIR),
        allocator=allocator,
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for visitorlog.toml."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists():
            return directory
    return start


def init_config(root: Path) -> Path:
    """Write a default visitorlog.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"visitorlog.toml already exists at {config_path}"
        raise FileExistsError(msg)

    content = f"""\
[visitorlog]
data_dir = "{_DEFAULT_DATA_DIR}"
# allocator = "scan"   # "counter" keeps a locked id counter in data_dir
"""
    config_path.write_text(content)
    return config_path
