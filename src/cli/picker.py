"""CLI commands for the color preference picker."""

import json
import logging
import random
import sys
from pathlib import Path

import click
import structlog

from src.observability.logging import (
    configure_logging,
    parse_log_level,
    session_log_context,
)
from src.picker import (
    PickerConfig,
    PickerConfigError,
    PickerSession,
    SessionState,
    build_config,
    load_picker_config,
)
from src.picker.constants import COMPONENT_PICKER
from src.picker.simulation import HueChooser, run_simulation
from src.settings import get_settings


logger = structlog.get_logger()


def _load_config(config_path: Path | None) -> PickerConfig:
    """Load config from a file, or from environment settings.

    Exits with status 1 and hints on invalid configuration.
    """
    try:
        if config_path is not None:
            return load_picker_config(config_path)
        return build_config(get_settings().picker_options(), source="<environment>")
    except PickerConfigError as e:
        click.echo(e.format(include_hint=True), err=True)
        sys.exit(1)


def _format_item_line(rank: int, item_dict: dict[str, object]) -> str:
    return (
        f"{rank:>3}. {item_dict['id']:<12} {item_dict['hex'] or '-':<8} "
        f"rating={item_dict['rating']:.1f} "
        f"W/L={item_dict['wins']}/{item_dict['losses']} "
        f"n={item_dict['comparisons']}"
    )


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Color preference picker CLI."""


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a picker YAML file (default: PICKER_* environment settings).",
)
@click.option(
    "--target-hue",
    type=click.FloatRange(0, 360, max_open=True),
    default=210.0,
    show_default=True,
    help="Hue (degrees) the simulated user prefers.",
)
@click.option(
    "--tolerance",
    type=click.FloatRange(0, 180),
    default=30.0,
    show_default=True,
    help="Maximum hue distance the simulated user still picks.",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducible runs (default: PICKER_SEED).",
)
@click.option("--top", type=click.IntRange(min=1), default=10, show_default=True)
@click.option(
    "--resume",
    "resume_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Snapshot JSON to resume from instead of starting fresh.",
)
@click.option(
    "--snapshot-out",
    "snapshot_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the final session snapshot to this file.",
)
@click.option("--json-output", is_flag=True, help="Print results as JSON.")
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: PICKER_JSON_LOGS).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def simulate(  # noqa: PLR0913
    config_path: Path | None,
    target_hue: float,
    tolerance: float,
    seed: int | None,
    top: int,
    resume_path: Path | None,
    snapshot_path: Path | None,
    json_output: bool,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Run a session with a synthetic user who prefers one hue."""
    settings = get_settings()
    level = parse_log_level(settings.log_level)
    if verbose:
        level = logging.DEBUG
    configure_logging(
        level=level,
        json_format=settings.json_logs if json_logs is None else json_logs,
    )

    config = _load_config(config_path)
    rng_seed = seed if seed is not None else settings.seed
    session = PickerSession(config, rng=random.Random(rng_seed))  # noqa: S311

    with session_log_context(session.session_id):
        log = logger.bind(component=COMPONENT_PICKER, command="simulate")
        log.info("simulation_started", target_hue=target_hue, tolerance=tolerance)

        if resume_path is not None:
            session.restore_state(resume_path.read_text(encoding="utf-8"))
            # A rejected snapshot leaves the session untouched
            if session.state == SessionState.IDLE:
                log.error("resume_failed", path=str(resume_path))
                click.echo(
                    f"Error: {resume_path} is not a valid session snapshot",
                    err=True,
                )
                sys.exit(1)
        else:
            session.initialize()

        result = run_simulation(session, HueChooser(target_hue, tolerance), top=top)

        if snapshot_path is not None:
            snapshot_path.parent.mkdir(parents=True, exist_ok=True)
            snapshot_path.write_text(session.snapshot().to_json(), encoding="utf-8")
            log.info("snapshot_written", path=str(snapshot_path))

    top_dicts = [item.to_json_dict() for item in result.top_items]
    if json_output:
        output = {
            "session_id": session.session_id,
            "complete": session.is_complete,
            "rounds": result.rounds,
            "picks": result.picks,
            "passes": result.passes,
            "top": top_dicts,
            "favorites": [item.id for item in result.favorites],
            "metrics": session.metrics.to_dict(),
        }
        click.echo(json.dumps(output, indent=2))
        return

    click.echo(
        f"Session {session.session_id}: {result.rounds} rounds "
        f"({result.picks} picks, {result.passes} passes)"
    )
    click.echo(f"Top {len(top_dicts)} colors:")
    for rank, item_dict in enumerate(top_dicts, start=1):
        click.echo(_format_item_line(rank, item_dict))
    if result.favorites:
        click.echo("Favorites: " + ", ".join(item.id for item in result.favorites))


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to a picker YAML file.",
)
def validate(config_path: Path) -> None:
    """Validate a picker configuration file."""
    configure_logging(json_format=False, level=logging.WARNING)
    config = _load_config(config_path)

    click.echo("Configuration is valid!")
    click.echo(f"  Generate items: {config.generate_items}")
    pool_size = config.item_count if config.generate_items else len(config.items or [])
    click.echo(f"  Pool size: {pool_size}")
    click.echo(f"  Max rounds: {config.max_rounds}")
    click.echo(f"  Batch size: {config.default_settings.batch_size}")


if __name__ == "__main__":
    cli()
