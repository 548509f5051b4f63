"""Coloured terminal output shared by both tools."""

import time

from rich.box import SQUARE
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console(highlight=False)

LEVEL_STYLES = {
    "SUCCESS": ("✓", "green"),
    "ERROR": ("✗", "red"),
    "WARNING": ("!", "yellow"),
    "INFO": ("ℹ", "cyan"),
}


def _timestamp() -> str:
    return time.strftime("%H:%M:%S")


# Provisioner output

def rule(message: str) -> None:
    line = "=" * 58
    console.print(f"[bold cyan]{line}[/bold cyan]")
    console.print(f"[bold cyan]  {escape(message)}[/bold cyan]")
    console.print(f"[bold cyan]{line}[/bold cyan]")


def step(message: str) -> None:
    console.print(f"\n[bold cyan]\\[INFO] {escape(message)}[/bold cyan]")


def info(message: str) -> None:
    console.print(f"[bold cyan]\\[INFO] {escape(message)}[/bold cyan]")


def ok(message: str) -> None:
    console.print(f"[bold green]\\[OK] {escape(message)}[/bold green]")


def fail(message: str) -> None:
    console.print(f"[bold red]\\[ERROR] {escape(message)}[/bold red]")


def raw(text: str) -> None:
    """Pass through output of an external command."""
    console.print(escape(text.rstrip()), soft_wrap=True)


# Auditor output

def section(title: str) -> None:
    console.print(f"[bold cyan]┌────┐ {escape(title)} └────┘[/bold cyan]")


def kv(key: str, value: str) -> None:
    console.print(
        f"[bold cyan]{_timestamp()}[/bold cyan] ├─ {key:<20} [cyan]{escape(str(value))}[/cyan]",
        soft_wrap=True,
    )


def status(level: str, message: str) -> None:
    icon, color = LEVEL_STYLES.get(level, ("?", "default"))
    console.print(
        f"[bold cyan]{_timestamp()}[/bold cyan] \\[[{color}]{icon}[/{color}]] {escape(message)}"
    )


def summary_table(php_version: str, config_source: str, timeout_sec: str) -> Table:
    table = Table(box=SQUARE, border_style="bold cyan", show_lines=False)
    for column in ("PHP_VERSION", "CONFIG_SOURCE", "TIMEOUT_SEC"):
        table.add_column(column, min_width=20)
    table.add_row(f"[cyan]{escape(php_version)}[/cyan]", escape(config_source), escape(timeout_sec))
    console.print()
    console.print(table)
    return table


def banner(success: bool) -> None:
    console.print()
    if success:
        console.print("[bold green]ALL OPERATIONS COMPLETED SUCCESSFULLY.[/bold green]")
    else:
        console.print("[red]OPERATIONS COMPLETED WITH ERRORS. Check logs above.[/red]")
    console.print()


def blank() -> None:
    console.print()
