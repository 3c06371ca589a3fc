"""
Operator CLI: ingest one entity into the local database.

Examples:
  discord-mirror ingest user --json '{"id": "42", "username": "ada"}'
  discord-mirror ingest role --identity '{"guild_id": 1, "role_id": 2}'
  discord-mirror ingest message --file message.json
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click
import orjson
import structlog
from sqlalchemy import inspect as sa_inspect

from DiscordMirror.config import load_settings
from DiscordMirror.kinds import EntityKind
from DiscordMirror.logging import redact_settings, setup_logging
from DiscordMirror.pipeline import IngestionPipeline
from DiscordMirror.result import Err

log = structlog.get_logger()


def _record_to_dict(record: Any) -> dict[str, Any]:
    return {
        attr.key: getattr(record, attr.key) for attr in sa_inspect(record).mapper.column_attrs
    }


def _parse_json(raw: str | None, label: str) -> Any:
    if raw is None:
        return None
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise click.BadParameter(f"{label} is not valid JSON: {exc}") from exc


async def _run(pipeline: IngestionPipeline, kind: str, payload: Any, identity: Any) -> int:
    async with pipeline:
        res = await pipeline.ingest(kind, payload=payload, identity=identity)
    if isinstance(res, Err):
        click.echo(f"error: {res.error.message}", err=True)
        return 1
    click.echo(
        orjson.dumps(_record_to_dict(res.value), default=str, option=orjson.OPT_INDENT_2).decode()
    )
    return 0


@click.group()
def cli() -> None:
    """DiscordMirror operator commands."""


@cli.command()
@click.argument("kind", type=click.Choice([k.value for k in EntityKind]))
@click.option("--json", "payload_json", help="Inline payload as JSON.")
@click.option(
    "--file",
    "payload_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the payload from a JSON file.",
)
@click.option("--identity", "identity_json", help="Identity as JSON (number, string or object).")
@click.pass_obj
def ingest(
    obj: IngestionPipeline | None,
    kind: str,
    payload_json: str | None,
    payload_file: Path | None,
    identity_json: str | None,
) -> None:
    """Ingest one KIND from a payload or by fetching it via its identity."""
    if payload_json is not None and payload_file is not None:
        raise click.UsageError("--json and --file are mutually exclusive")
    if payload_file is not None:
        payload_json = payload_file.read_text()
    payload = _parse_json(payload_json, "payload")
    identity = _parse_json(identity_json, "identity")

    pipeline = obj
    if pipeline is None:
        settings = load_settings()
        setup_logging(settings)
        log.info("cli.startup", config=redact_settings(settings))
        pipeline = IngestionPipeline.from_settings(settings)
    raise SystemExit(asyncio.run(_run(pipeline, kind, payload, identity)))


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
