"""Typer CLI entrypoint for the screening engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger

LOG_FORMATS = ("json", "console")

app = typer.Typer(help="Tenant screening and match scoring CLI.")


@app.callback()
def cli() -> None:
    """Tenant screening and match scoring CLI."""


@app.command()
def screen(
    applicant: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Applicant JSON path."),
    listings: Path = typer.Option(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="Listing criteria JSON path (one object or a list).",
    ),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    store: Optional[Path] = typer.Option(None, dir_okay=False, help="Report store JSON path for reuse across runs."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_format: str = typer.Option("json", help="Log renderer: json or console."),
) -> None:
    """Screen an applicant and score them against listing criteria."""
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            if not isinstance(loaded, dict):
                raise typer.BadParameter("Config file must be a YAML object", param_name="config")
            settings = loaded
    if store:
        settings.setdefault("store", {})["path"] = str(store)

    if log_format not in LOG_FORMATS:
        raise typer.BadParameter(f"Expected one of {', '.join(LOG_FORMATS)}", param_name="log_format")
    configure_logging(log_level, json_output=log_format == "json")

    try:
        container = create_container(settings=settings)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc

    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    try:
        payload = pipeline.run(
            applicant_path=applicant,
            listings_path=listings,
            output_path=output,
            audit_logger=audit_logger,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    metadata = payload["metadata"]
    note = " (estimated results, screening unavailable)" if metadata["source"] == "synthetic" else ""
    typer.echo(
        f"Scored {metadata['listing_count']} listing(s) for {metadata['applicant_id']}{note}. "
        f"Results saved to {output}."
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
