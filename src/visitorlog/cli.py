"""visitorlog CLI: visitor sign-in records stored as JSON files.

Commands:
    visitorlog init                    create visitorlog.toml + data dir
    visitorlog add --name ... --age …  sign a visitor in
    visitorlog update ID [--field …]   change fields of a stored record
    visitorlog show ID                 print one record
    visitorlog list                    print every stored record
    visitorlog next-id                 id the next new record would get
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from visitorlog.config import VisitorLogConfig, init_config, load_config
from visitorlog.errors import VisitorLogError
from visitorlog.models import VisitorRecord
from visitorlog.store import RecordStore

# Domain errors plus malformed files (ValueError) and refused overwrites.
_RECORD_ERRORS = (VisitorLogError, ValueError, FileExistsError)
# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg(data_dir: str | None) -> VisitorLogConfig:
    try:
        cfg = load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc
    if data_dir:
        cfg.data_dir = Path(data_dir)
    return cfg


def _store(ctx: click.Context) -> RecordStore:
    cfg: VisitorLogConfig = ctx.obj
    return cfg.open_store()


def _format_record(record: VisitorRecord) -> str:
    lines = [
        f"#{record.id}  {record.full_name} (age {record.age})",
        f"  visited : {record.date} {record.time}",
        f"  with    : {record.assistant}",
    ]
    if record.comments:
        lines.append(f"  comments: {record.comments}")
    return "\n".join(lines)


def _save(store: RecordStore, record: VisitorRecord) -> None:
    try:
        click.echo(store.save(record))
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="visitorlog")
@click.option("--data-dir", default=None, help="Record directory (overrides visitorlog.toml)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, verbose: bool) -> None:
    """visitorlog — visitor sign-in records."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
    )
    ctx.obj = _load_cfg(data_dir)


# ---------------------------------------------------------------------------
# visitorlog init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(root: str) -> None:
    """Create visitorlog.toml and the record directory."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("visitorlog.toml already exists — skipping init")

    cfg = load_config(root_path)
    cfg.ensure_dirs()
    click.echo(f"Data dir : {cfg.data_dir}")


# ---------------------------------------------------------------------------
# visitorlog add / update
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--name", "full_name", required=True, help='Visitor full name, e.g. "Jane Doe"')
@click.option("--age", type=int, required=True)
@click.option("--date", required=True, help="YYYY-MM-DD")
@click.option("--time", "visit_time", required=True, help="HH:MM")
@click.option("--assistant", required=True, help="Staff member who assisted")
@click.option("--comments", default="", help="Free-text comments")
@click.pass_context
def add(
    ctx: click.Context,
    full_name: str,
    age: int,
    date: str,
    visit_time: str,
    assistant: str,
    comments: str,
) -> None:
    """Sign a visitor in and store the record."""
    try:
        record = VisitorRecord(full_name, age, date, visit_time, comments, assistant)
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    _save(_store(ctx), record)


@cli.command()
@click.argument("record_id", type=int)
@click.option("--name", "full_name", default=None)
@click.option("--age", type=int, default=None)
@click.option("--date", default=None)
@click.option("--time", "visit_time", default=None)
@click.option("--assistant", default=None)
@click.option("--comments", default=None)
@click.pass_context
def update(ctx: click.Context, record_id: int, **fields: Any) -> None:
    """Change fields of a stored record."""
    store = _store(ctx)
    changes = {
        attr: fields[opt]
        for opt, attr in (
            ("full_name", "full_name"),
            ("age", "age"),
            ("date", "date"),
            ("visit_time", "time"),
            ("assistant", "assistant"),
            ("comments", "comments"),
        )
        if fields[opt] is not None
    }
    if not changes:
        raise click.UsageError("Nothing to update: pass at least one field option")
    try:
        record = store.load(record_id)
        for attr, value in changes.items():
            setattr(record, attr, value)
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    _save(store, record)


# ---------------------------------------------------------------------------
# visitorlog show / list / next-id
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("record_id", type=int)
@click.option("--json", "as_json", is_flag=True, help="Print the stored JSON document")
@click.pass_context
def show(ctx: click.Context, record_id: int, as_json: bool) -> None:
    """Print one record."""
    try:
        record = _store(ctx).load(record_id)
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    if as_json:
        click.echo(json.dumps(record.to_dict(), indent=2))
    else:
        click.echo(_format_record(record))


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Print every stored record, in id order."""
    try:
        records = list(_store(ctx).iter_records())
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    if not records:
        click.echo("No visitors recorded.")
        return
    for record in records:
        click.echo(f"{record.id:>4}  {record.date} {record.time}  {record.full_name:<24} {record.assistant}")


@cli.command("next-id")
@click.pass_context
def next_id(ctx: click.Context) -> None:
    """Print the id the next new record would get."""
    try:
        record_id = _store(ctx).generate_id()
    except _RECORD_ERRORS as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(record_id)
