"""
Formatting helpers and rich tables for violations and suggestions.
"""

from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from schedcheck.model import Slot, Violation


def from_minutes(mins: Optional[int]) -> str:
    """
    Minutes since midnight -> 'HH:MM'. None renders as '--:--'.
    """
    if mins is None:
        return "--:--"
    return f"{mins // 60:02d}:{mins % 60:02d}"


def format_time_12h(mins: int) -> str:
    h, m = divmod(mins, 60)
    h %= 24
    ampm = "PM" if h >= 12 else "AM"
    hh = h % 12 or 12
    return f"{hh}:{m:02d} {ampm}"


def slot_label(slot: Slot) -> str:
    return f"{slot.day.capitalize()} {format_time_12h(slot.start)} - {format_time_12h(slot.end)}"


def violations_table(violations: list[Violation]) -> Table:
    table = Table(title="Conflicts", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Rule")
    table.add_column("Message")
    for i, v in enumerate(violations, start=1):
        table.add_row(str(i), v.rule.value, f"[red]{v.message}[/]")
    return table


def suggestions_table(slots: list[Slot]) -> Table:
    table = Table(title="Suggested time slots", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Day")
    table.add_column("Start")
    table.add_column("End")
    for i, s in enumerate(slots, start=1):
        table.add_row(str(i), s.day.capitalize(), from_minutes(s.start), from_minutes(s.end))
    return table


def print_violations(violations: list[Violation], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not violations:
        console.print("[green]No conflicts found.[/]")
        return
    console.print(violations_table(violations))


def print_suggestions(slots: list[Slot], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not slots:
        console.print("No available time slots found.")
        return
    console.print(suggestions_table(slots))
