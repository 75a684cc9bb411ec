"""Command line entry point.

Examples:
  outlook-migrate import --source sqlite+aiosqlite:///./devav.sqlite3
  outlook-migrate clone --factor 3

Both commands print a JSON report on stdout. A ``MigrationError`` or database
error exits with status 1 after printing whatever partial report the run
produced.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
import structlog
from sqlalchemy.exc import SQLAlchemyError

from OutlookMigrator.cloner import generate_clones
from OutlookMigrator.config import Settings, load_settings
from OutlookMigrator.db import (
    create_engine_for,
    create_target_schema,
    make_sessionmaker,
    session_scope,
)
from OutlookMigrator.errors import MigrationError
from OutlookMigrator.logging import redact_settings, setup_logging
from OutlookMigrator.pipeline import import_all
from OutlookMigrator.stores import SourceStore, TargetStore

log = structlog.get_logger()


def _settings(**overrides: Any) -> Settings:
    settings = load_settings(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(settings)
    log.debug("settings.loaded", settings=redact_settings(settings))
    return settings


def _emit(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


async def _run_import(settings: Settings) -> dict[str, Any]:
    source_engine = create_engine_for(settings.source_database_url, role="source")
    engine = create_engine_for(settings.target_database_url)
    try:
        source = SourceStore(make_sessionmaker(source_engine))
        if settings.create_target_schema:
            await create_target_schema(engine)
        async with session_scope(make_sessionmaker(engine)) as session:
            report = await import_all(TargetStore(session), source)
        return report.to_dict()
    finally:
        await source_engine.dispose()
        await engine.dispose()


async def _run_clone(settings: Settings, factor: int) -> dict[str, Any]:
    engine = create_engine_for(settings.target_database_url)
    try:
        async with session_scope(make_sessionmaker(engine)) as session:
            report = await generate_clones(TargetStore(session), factor)
        return report.to_dict()
    finally:
        await engine.dispose()


@click.group()
def cli() -> None:
    """Migrate the legacy DevAV dataset into the Outlook target store."""


@cli.command("import")
@click.option("--source", "source_url", default=None, help="Legacy database URL.")
@click.option("--target", "target_url", default=None, help="Target database URL.")
def import_command(source_url: str | None, target_url: str | None) -> None:
    """Import every legacy entity type, stage by stage."""
    settings = _settings(source_database_url=source_url, target_database_url=target_url)
    try:
        payload = asyncio.run(_run_import(settings))
    except (MigrationError, SQLAlchemyError) as exc:
        log.error("migration.failed", error=type(exc).__name__, detail=str(exc))
        report = getattr(exc, "report", None)
        if report is not None:
            _emit(report.to_dict())
        raise SystemExit(1) from exc
    _emit(payload)


@cli.command("clone")
@click.option("--factor", type=click.IntRange(min=0), default=None, help="Copies per order.")
@click.option("--target", "target_url", default=None, help="Target database URL.")
def clone_command(factor: int | None, target_url: str | None) -> None:
    """Append synthetic copies of every committed order."""
    settings = _settings(target_database_url=target_url)
    try:
        payload = asyncio.run(
            _run_clone(settings, settings.clone_factor if factor is None else factor)
        )
    except (MigrationError, SQLAlchemyError) as exc:
        log.error("migration.failed", error=type(exc).__name__, detail=str(exc))
        raise SystemExit(1) from exc
    _emit(payload)


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
