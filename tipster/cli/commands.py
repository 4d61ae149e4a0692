"""CLI commands for tipster."""

from datetime import UTC, datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tipster import __logo__, __version__

app = typer.Typer(
    name="tipster",
    help=f"{__logo__} tipster - proactive tip decisions",
    no_args_is_help=True,
)

console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.json")


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} tipster v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """tipster - proactive tip decisions."""
    pass


def _make_app(config_path: Path | None):
    from tipster.app.bootstrap import build_tipster
    from tipster.config.loader import load_config
    from tipster.utils.logs import configure_logging

    config = load_config(config_path)
    configure_logging(config.logging.level)
    return build_tipster(config)


def _format_ms(value: int | None) -> str:
    if value is None:
        return "[dim]never[/dim]"
    return datetime.fromtimestamp(value / 1000, tz=UTC).isoformat(timespec="seconds")


def _check_category(category: str) -> None:
    from tipster.core.models import CATEGORIES

    if category not in CATEGORIES:
        console.print(f"[red]Unknown category: {category}[/red] (expected one of {', '.join(CATEGORIES)})")
        raise typer.Exit(1)


# ============================================================================
# State
# ============================================================================


@app.command()
def status(config_path: Path = CONFIG_OPTION):
    """Show persisted activity facts and shown records."""
    from tipster.core.models import CATEGORIES

    tipster_app = _make_app(config_path)
    try:
        activity = tipster_app.activity_storage.get_record()

        table = Table(title="Activity")
        table.add_column("Fact", style="cyan")
        table.add_column("Value")
        table.add_row("Last chat open", _format_ms(activity.last_chat_open_time))
        table.add_row("Last chat close", _format_ms(activity.last_chat_close_time))
        table.add_row("Has sent message", "[green]yes[/green]" if activity.has_sent_message else "no")
        table.add_row("Last message sent", _format_ms(activity.last_message_sent_time))
        console.print(table)

        shown = Table(title="Shown tips")
        shown.add_column("Category", style="cyan")
        shown.add_column("Type")
        shown.add_column("Shown at")
        shown.add_column("Can show again")
        for category in CATEGORIES:
            for msg_type, record in tipster_app.tip_storage.get_all(category).items():
                allowed = tipster_app.cooldown.can_show(msg_type, category)
                shown.add_row(
                    category,
                    msg_type,
                    record.timestamp,
                    "[green]yes[/green]" if allowed else "[yellow]no[/yellow]",
                )
        console.print(shown)
    finally:
        tipster_app.close()


@app.command()
def decide(
    context: str = typer.Option(
        "", "--context", help="Decision context: return, outer or inner"
    ),
    config_path: Path = CONFIG_OPTION,
):
    """Run the decision engine against persisted state."""
    tipster_app = _make_app(config_path)
    try:
        state = tipster_app.monitor.current_state()
        result = tipster_app.engine.determine(state, context or None)
    finally:
        tipster_app.close()
    console.print(result or "none")


@app.command("mark-shown")
def mark_shown(
    message_type: str = typer.Argument(..., help="Tip type, e.g. welcome"),
    category: str = typer.Option("out", "--category", help="Tip category: in or out"),
    config_path: Path = CONFIG_OPTION,
):
    """Record a tip as shown now."""
    _check_category(category)
    tipster_app = _make_app(config_path)
    try:
        ok = tipster_app.tip_storage.mark_as_shown(message_type, category)
    finally:
        tipster_app.close()
    if not ok:
        console.print(f"[red]Could not mark {category}.{message_type} as shown[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Marked {category}.{message_type} as shown")


@app.command()
def reset(
    category: str = typer.Option(None, "--category", help="Only clear this category"),
    activity: bool = typer.Option(True, "--activity/--no-activity", help="Also clear activity facts"),
    config_path: Path = CONFIG_OPTION,
):
    """Clear shown records (and activity facts)."""
    from tipster.core.models import CATEGORIES

    if category is not None:
        _check_category(category)
    categories = (category,) if category else CATEGORIES

    tipster_app = _make_app(config_path)
    try:
        for name in categories:
            tipster_app.tip_storage.clear_all(name)
        if activity and category is None:
            tipster_app.activity_storage.clear()
    finally:
        tipster_app.close()
    console.print(f"[green]✓[/green] Cleared {', '.join(categories)}")


# ============================================================================
# Catalog
# ============================================================================


@app.command()
def messages(config_path: Path = CONFIG_OPTION):
    """List the resolved message catalog."""
    from tipster.config.loader import load_config
    from tipster.messages.catalog import MessageCatalog

    config = load_config(config_path)
    catalog = MessageCatalog(config.message_overrides())

    table = Table(title="Messages")
    table.add_column("Type", style="cyan")
    table.add_column("Delay", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Cooldown h", justify="right")
    table.add_column("Enabled")
    table.add_column("Text")

    for qualified in catalog.list_types():
        category, msg_type = qualified.split(".", 1)
        duration = catalog.get_duration(category, msg_type)
        cooldown = catalog.get_field(category, msg_type, "cooldown_hours")
        table.add_row(
            qualified,
            str(catalog.get_delay(category, msg_type)),
            "-" if duration is None else str(duration),
            "-" if cooldown is None else str(cooldown),
            "[green]✓[/green]" if catalog.has(category, msg_type) else "[dim]disabled[/dim]",
            catalog.get_text(category, msg_type),
        )

    console.print(table)


if __name__ == "__main__":
    app()
