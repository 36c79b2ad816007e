"""ccbell hook runner.

Usage:
    ccbell decide EVENT [OPTIONS]  - Decide whether EVENT should play a sound
    ccbell status                  - Show event settings and remaining cooldowns

``decide`` exits 0 when the sound should play, 1 when it is suppressed and
2 when the config file is invalid.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .config import get_settings
from .cooldown import CooldownTracker
from .engine import DecisionEngine
from .events import EventData, EventType
from .exceptions import ConfigError
from .notification_config import load_engine_config
from .notification_state import CooldownStateFile

console = Console()

EXIT_SUPPRESSED = 1
EXIT_CONFIG_ERROR = 2


def _configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_engine(config_path: Optional[Path] = None) -> DecisionEngine:
    """Load config and saved cooldown state into an engine.

    Raises:
        ConfigError: If the config file is invalid
    """
    settings = get_settings()
    config = load_engine_config(config_path)
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    state_file = CooldownStateFile(settings.state_path)
    tracker = CooldownTracker(last_allowed=state_file.load())
    return DecisionEngine(config, tracker, listeners=[state_file.record])


def _load_engine_or_exit(config_path: Optional[Path]) -> DecisionEngine:
    try:
        return build_engine(config_path)
    except ConfigError as e:
        console.print()
        console.print(f"[red]⚠️  Invalid ccbell config: {e}[/red]")
        console.print()
        sys.exit(EXIT_CONFIG_ERROR)


@click.group()
def cli():
    """ccbell - sound notifications for assistant events."""
    _configure_logging()


@cli.command()
@click.argument("event")
@click.option("--message", "-m", default="", help="Message text emitted with the event")
@click.option("--tokens", "-t", default=0, type=click.IntRange(min=0), help="Token count")
@click.option(
    "--duration", "-d", default=0.0, type=click.FloatRange(min=0), help="Duration in seconds"
)
@click.option("--tool-calls/--no-tool-calls", default=False, help="Turn used tools")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Config file")
@click.option("--json", "as_json", is_flag=True, help="Print the verdict as JSON")
def decide(
    event: str,
    message: str,
    tokens: int,
    duration: float,
    tool_calls: bool,
    config_path: Optional[Path],
    as_json: bool,
):
    """Decide whether EVENT should play a sound."""
    try:
        event_type = EventType.parse(event)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="EVENT")

    engine = _load_engine_or_exit(config_path)

    now = datetime.now().astimezone()
    data = EventData(
        event_type=event_type,
        message=message,
        token_count=tokens,
        duration=duration,
        has_tool_calls=tool_calls,
        timestamp=now,
    )
    verdict = engine.decide(event_type, data, now)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "event": event_type.value,
                    "allow": verdict.allow,
                    "reason": verdict.reason.value,
                    "sound": verdict.sound,
                    "volume": verdict.volume,
                }
            )
        )
    elif verdict.allow:
        console.print(f"[green]✓[/green] Play {verdict.sound or 'default sound'}")
    else:
        console.print(f"[dim]Suppressed {event_type.value}: {verdict.reason.value}[/dim]")

    if not verdict.allow:
        sys.exit(EXIT_SUPPRESSED)


@cli.command()
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Config file")
def status(config_path: Optional[Path]):
    """Show event settings and remaining cooldowns."""
    engine = _load_engine_or_exit(config_path)
    config = engine.config
    now = datetime.now().astimezone()
    remaining = engine.remaining_cooldowns(now)

    if not config.enabled:
        console.print("[yellow]ccbell is disabled[/yellow]")

    table = Table(title=f"ccbell events (profile: {config.active_profile})")
    table.add_column("Event", style="bold", no_wrap=True)
    table.add_column("Enabled", width=8)
    table.add_column("Sound", overflow="fold")
    table.add_column("Volume", justify="right", width=6)
    table.add_column("Cooldown", justify="right", width=9)
    table.add_column("Remaining", justify="right", width=9)

    for event_type, event in config.profile_events().items():
        left = remaining[event_type].total_seconds()
        table.add_row(
            event_type.value,
            "[green]yes[/green]" if event.enabled else "[red]no[/red]",
            event.sound or "-",
            f"{event.volume:.1f}",
            f"{event.cooldown:g}s" if event.cooldown else "-",
            f"{left:.0f}s" if left > 0 else "-",
        )

    console.print(table)


if __name__ == "__main__":
    cli()
