"""CLI commands for previewing and checking the curated homepage."""

import asyncio
import json
import logging
import sys
import uuid
from pathlib import Path

import click
import structlog
import yaml
from pydantic import ValidationError

from curation import __version__
from curation.config.constants import COMPONENT_CLI
from curation.config.loader import ConfigLoader, ConfigValidationError
from curation.config.schemas.homepage import HomepageConfig
from curation.content.classifier import classify, describe_state
from curation.content.readiness import compute_readiness
from curation.content.warnings import SafetyWarning, collect_warnings, has_errors
from curation.items.models import Item
from curation.observability.logging import bind_session_context, configure_logging
from curation.ranker.assembler import assemble_homepage
from curation.ranker.models import HomepageSections
from curation.settings.app import AppSettings, get_settings
from curation.store.errors import ItemStoreError
from curation.store.loader import load_working_set
from curation.store.memory import InMemoryItemStore
from curation.store.protocols import ItemStore
from curation.store.rest import RestItemStore


logger = structlog.get_logger()


def _setup_logging(
    settings: AppSettings, json_logs: bool | None, verbose: bool, command: str
) -> structlog.typing.FilteringBoundLogger:
    level = logging.DEBUG if verbose else settings.log_level_number
    configure_logging(
        level=level,
        json_format=settings.log_json if json_logs is None else json_logs,
    )
    session_id = uuid.uuid4().hex[:12]
    bind_session_context(session_id)
    return logger.bind(component=COMPONENT_CLI, command=command)  # type: ignore[no-any-return]


def _load_config(config_path: Path | None) -> HomepageConfig:
    """Load homepage.yaml, exit with hints on failure."""
    try:
        return ConfigLoader().load(config_path)
    except ConfigValidationError as e:
        click.echo("Configuration validation failed:", err=True)
        for formatted in e.format_errors():
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)


def load_snapshot(path: Path) -> InMemoryItemStore:
    """Build an in-memory store from a YAML snapshot.

    The snapshot holds an ``items`` list of item records and an optional
    ``episode_counts`` mapping of item id to count.

    Raises:
        click.ClickException: If the file cannot be parsed or validated.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid snapshot {path}: {e}") from e

    if not isinstance(data, dict):
        raise click.ClickException(f"Invalid snapshot {path}: expected a mapping")

    try:
        items = [Item.model_validate(row) for row in data.get("items") or []]
    except ValidationError as e:
        raise click.ClickException(f"Invalid item in snapshot {path}: {e}") from e

    counts = data.get("episode_counts") or {}
    if not isinstance(counts, dict):
        raise click.ClickException(
            f"Invalid snapshot {path}: episode_counts must be a mapping"
        )
    try:
        child_counts = {str(k): int(v) for k, v in counts.items()}
    except (TypeError, ValueError) as e:
        raise click.ClickException(
            f"Invalid episode count in snapshot {path}: {e}"
        ) from e
    return InMemoryItemStore(items, child_counts=child_counts)


async def _fetch_items(
    snapshot: Path | None, settings: AppSettings, config: HomepageConfig
) -> list[Item]:
    if snapshot is not None:
        return await load_working_set(load_snapshot(snapshot))

    if not settings.has_remote_store:
        raise click.UsageError(
            "No item store configured: pass --snapshot or set ITEM_STORE_URL"
        )
    store: ItemStore
    async with RestItemStore(
        settings.item_store_url or "",
        api_key=settings.item_store_api_key,
        layout=config.store,
        timeout_seconds=settings.item_store_timeout_seconds,
    ) as store:
        return await load_working_set(store)


def _gather_items(
    snapshot: Path | None,
    settings: AppSettings,
    config: HomepageConfig,
    log: structlog.typing.FilteringBoundLogger,
) -> list[Item]:
    try:
        return asyncio.run(_fetch_items(snapshot, settings, config))
    except ItemStoreError as e:
        log.error("item_fetch_failed", error=str(e))
        click.echo(f"Failed to load stories: {e}", err=True)
        sys.exit(1)


def _render_sections(sections: HomepageSections, config: HomepageConfig) -> None:
    def line(item: Item, rank: int | None = None) -> str:
        prefix = f"#{rank} " if rank is not None else ""
        label = config.language_label(item.language)
        return f"  {prefix}{item.title or item.id} [{label}]"

    click.echo(f"Banner ({len(sections.banner)}/{config.limits.banner_max})")
    for item in sections.banner:
        click.echo(line(item))
    click.echo(f"Ranked ({len(sections.ranked)}/{config.limits.ranked_max})")
    for item in sections.ranked:
        click.echo(line(item, item.homepage_rank))
    click.echo(
        f"New launches ({len(sections.new_launches)}/{config.limits.new_launch_max})"
    )
    for item in sections.new_launches:
        click.echo(line(item, item.new_launch_rank))


def _warning_to_dict(warning: SafetyWarning) -> dict[str, object]:
    return warning.model_dump(mode="json")


common_options = [
    click.option(
        "--snapshot",
        "snapshot_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML snapshot of stories instead of the remote item store.",
    ),
    click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Path to homepage.yaml (default: CURATION_CONFIG_PATH or built-in).",
    ),
    click.option(
        "--json",
        "json_output",
        is_flag=True,
        help="Output as JSON.",
    ),
    click.option(
        "--json-logs/--no-json-logs",
        default=None,
        help="Use JSON format for logs (default: LOG_JSON).",
    ),
    click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose logging.",
    ),
]


def with_common_options(func):  # type: ignore[no-untyped-def]
    """Attach the options shared by the read commands."""
    for option in reversed(common_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Homepage curation CLI."""


@cli.command()
@with_common_options
def preview(
    snapshot_path: Path | None,
    config_path: Path | None,
    json_output: bool,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Print the assembled homepage sections."""
    settings = get_settings()
    log = _setup_logging(settings, json_logs, verbose, "preview")
    config = _load_config(config_path or settings.config_path)

    items = _gather_items(snapshot_path, settings, config, log)
    sections = assemble_homepage(items, config.limits)
    log.info("homepage_previewed", item_count=len(items), **sections.to_summary())

    if json_output:
        output = {
            "sections": sections.to_summary(),
            "states": {item.id: classify(item).value for item in items},
        }
        click.echo(json.dumps(output, indent=2))
        return

    if sections.is_empty:
        click.echo("Homepage is empty.")
        return
    _render_sections(sections, config)


@cli.command()
@with_common_options
def check(
    snapshot_path: Path | None,
    config_path: Path | None,
    json_output: bool,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Print safety warnings; exit 1 if any is an error."""
    settings = get_settings()
    log = _setup_logging(settings, json_logs, verbose, "check")
    config = _load_config(config_path or settings.config_path)

    items = _gather_items(snapshot_path, settings, config, log)
    warnings = collect_warnings(items)
    failed = has_errors(warnings)
    log.info("homepage_checked", item_count=len(items), warning_count=len(warnings))

    if json_output:
        output = {
            "warnings": [_warning_to_dict(w) for w in warnings],
            "readiness": {
                item.id: compute_readiness(item).percentage
                for item in items
                if item.has_homepage_config
            },
        }
        click.echo(json.dumps(output, indent=2))
    elif not warnings:
        click.echo("No safety warnings.")
    else:
        click.echo(f"Safety warnings ({len(warnings)}):")
        for warning in warnings:
            click.echo(f"  [{warning.severity.value.upper()}] {warning.message}")
        if verbose:
            click.echo("")
            click.echo("Item states:")
            for item in items:
                click.echo(f"  {item.id}: {describe_state(classify(item))}")

    if failed:
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to homepage.yaml configuration file.",
)
def validate(config_path: Path) -> None:
    """Validate homepage.yaml without contacting the item store."""
    configure_logging(json_format=False)
    loader = ConfigLoader()

    try:
        config = loader.load(config_path)
    except ConfigValidationError as e:
        click.echo("Configuration validation failed:", err=True)
        for formatted in e.format_errors():
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)

    click.echo("Configuration is valid!")
    click.echo(
        f"  Limits: banner={config.limits.banner_max} "
        f"ranked={config.limits.ranked_max} "
        f"new_launch={config.limits.new_launch_max}"
    )
    click.echo(f"  Languages: {', '.join(lang.code for lang in config.languages)}")
    click.echo(f"  Checksum: {loader.checksum}")


if __name__ == "__main__":
    cli()
