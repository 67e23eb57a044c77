"""Rich renderers for the Turnstile CLI.

Each helper draws one piece of machine output: a configuration summary,
the state and transition tables, a simulation trace or a status line.
CLI modules should import from here, never from rich directly.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from turnstile.schema import MachineConfig

THEME = Theme(
    {
        "state": "cyan",
        "event": "magenta",
        "initial": "green",
        "dangling": "yellow",
        "failed": "bold red",
    }
)

console = Console(theme=THEME, highlight=False)

_MAX_WIDTH = 80


def _width() -> int:
    return min(console.width, _MAX_WIDTH)


def _table(title: str, columns: Sequence[str]) -> Table:
    table = Table(
        title=title,
        title_style="bold",
        header_style="bold dim",
        border_style="dim",
        width=_width(),
        padding=(0, 1),
    )
    for col in columns:
        table.add_column(col)
    return table


def report_ok(msg: str) -> None:
    console.print(f"  [green]✓[/] {msg}")


def report_failure(msg: str, hint: Optional[str] = None) -> None:
    console.print(f"  [red]✗[/] {msg}", style="failed")
    if hint:
        console.print(f"    [dim]{hint}[/]")


def machine_title(config: MachineConfig, label: str) -> None:
    """Machine name in bold, description underneath."""
    console.print()
    console.print(Text(config.name or label, style="bold"))
    if config.description:
        console.print(f"  [dim]{config.description}[/]")


def machine_summary(config: MachineConfig, label: str) -> None:
    """Panel with state/transition counts for a validated machine."""
    transitions = sum(len(s.transitions) for s in config.states.values())
    body = "\n".join(
        [
            f"[bold]Name:[/] {config.name or label}",
            f"[bold]Initial:[/] [initial]{config.initial}[/]",
            f"[bold]States:[/] {len(config.states)}",
            f"[bold]Transitions:[/] {transitions}",
        ]
    )
    console.print()
    console.print(
        Panel(
            body,
            title="✓ Valid Machine",
            title_align="left",
            border_style="dim",
            width=_width(),
            padding=(0, 1),
        )
    )


def reference_warnings(config: MachineConfig) -> None:
    """One line per unknown initial state or dangling transition target."""
    if not config.initial_is_defined():
        console.print(
            f"  [dangling]![/] Initial state '{config.initial}' is not a configured state"
        )
    for state, event, target in config.dangling_targets():
        console.print(
            f"  [dangling]![/] '{state}' --{event}--> '{target}' "
            f"leads to an unconfigured state"
        )


def states_table(config: MachineConfig, verbose: bool = False) -> None:
    columns = ["Name", "Type", "Events"] + (["Description"] if verbose else [])
    table = _table("States", columns)
    for name, state in config.states.items():
        kind = "[initial]initial[/]" if name == config.initial else "-"
        events = ", ".join(f"[event]{e}[/]" for e in state.transitions) or "-"
        row = [f"[state]{name}[/]", kind, events]
        if verbose:
            row.append(state.description or "")
        table.add_row(*row)
    console.print()
    console.print(table)


def transitions_table(config: MachineConfig) -> None:
    """Every (state, event, target) triple; dangling targets highlighted."""
    table = _table("Transitions", ["From", "Event", "To"])
    for name, state in config.states.items():
        for event, target in state.transitions.items():
            style = "state" if config.has_state(target) else "dangling"
            table.add_row(name, f"[event]{event}[/]", f"→ [{style}]{target}[/]")
    if table.row_count:
        console.print()
        console.print(table)


def simulation_table(start: str, steps: Sequence[tuple[str, str, str]]) -> None:
    """Trace of a simulation: the start state, then (step, result, state) rows."""
    table = _table("Simulation", ["Step", "Result", "State"])
    table.add_row("", "start", f"[state]{start}[/]")
    for step, result, state in steps:
        table.add_row(step, result, f"[state]{state}[/]")
    console.print()
    console.print(table)
