"""
Turnstile CLI entry point.

Commands:
- turnstile validate: Validate a machine configuration file
- turnstile info: Show states and transitions
- turnstile simulate: Replay a sequence of steps against a machine
- turnstile version: Show version information

Group options apply to every command:
- --debug: force DEBUG logging
- --settings: explicit turnstile.yaml settings file
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.text import Text

from turnstile import __version__
from turnstile.cli_ui import (
    console,
    machine_summary,
    machine_title,
    reference_warnings,
    report_failure,
    report_ok,
    simulation_table,
    states_table,
    transitions_table,
)
from turnstile.config.settings import MachineSettings
from turnstile.exceptions import MachineError


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def load_settings(ctx: click.Context, **overrides) -> MachineSettings:
    """Build settings from the group options and configure logging from them."""
    opts = ctx.find_root().obj or {}
    if opts.get("debug"):
        overrides["debug"] = True
    settings_path = opts.get("settings_path")
    try:
        settings = MachineSettings(
            _config_path=str(settings_path) if settings_path else None,
            **overrides,
        )
    except Exception as e:
        report_failure(f"Invalid settings: {e}")
        raise SystemExit(1)

    setup_logging(settings.effective_log_level)
    return settings


@click.group()
@click.version_option(version=__version__, prog_name="turnstile")
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug logging",
)
@click.option(
    "--settings",
    "-s",
    "settings_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to turnstile.yaml settings file",
)
@click.pass_context
def main(ctx: click.Context, debug: bool, settings_path: Optional[Path]) -> None:
    """Turnstile - finite state machines with undo/redo history."""
    ctx.obj = {"debug": debug, "settings_path": settings_path}


@main.command()
@click.argument(
    "config_path",
    type=click.Path(exists=True, path_type=Path),
)
@click.pass_context
def validate(ctx: click.Context, config_path: Path) -> None:
    """Validate a machine configuration file.

    Unknown initial states and transitions into unconfigured states are
    reported as warnings; they do not fail validation.

    Example:
        turnstile validate light_switch.yaml
    """
    from turnstile.parser import MachineParser

    load_settings(ctx)
    try:
        config = MachineParser.parse_file(config_path)
    except Exception as e:
        report_failure(f"Validation error: {e}")
        raise SystemExit(1)

    machine_summary(config, config_path.stem)
    reference_warnings(config)


@main.command()
@click.argument(
    "config_path",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show state descriptions",
)
@click.pass_context
def info(ctx: click.Context, config_path: Path, verbose: bool) -> None:
    """Show states and transitions of a machine.

    Example:
        turnstile info light_switch.yaml --verbose
    """
    from turnstile.parser import MachineParser

    load_settings(ctx)
    try:
        config = MachineParser.parse_file(config_path)
    except Exception as e:
        report_failure(str(e))
        raise SystemExit(1)

    machine_title(config, config_path.stem)
    states_table(config, verbose=verbose)
    transitions_table(config)

    if verbose:
        console.print()
        console.print(f"  [bold]Dangling targets:[/] {len(config.dangling_targets())}")
    console.print()


@main.command()
@click.argument(
    "config_path",
    type=click.Path(exists=True, path_type=Path),
)
@click.argument("steps", nargs=-1)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Reject transitions into unconfigured states",
)
@click.pass_context
def simulate(
    ctx: click.Context,
    config_path: Path,
    steps: tuple[str, ...],
    strict: bool,
) -> None:
    """Replay STEPS against a fresh machine.

    A step is an event name, '=STATE' to change state directly, or one of
    ':undo', ':redo', ':reset', ':clear'.

    Example:
        turnstile simulate light_switch.yaml turnOn turnOff :undo :redo
    """
    from turnstile.machine import StateMachine

    settings = load_settings(ctx, **({"strict_targets": True} if strict else {}))
    try:
        machine = StateMachine.from_file(config_path, settings=settings)
    except Exception as e:
        report_failure(str(e))
        raise SystemExit(1)

    start = machine.get_state()
    trace: list[tuple[str, str, str]] = []
    failure: Optional[str] = None
    for step in steps:
        try:
            result = apply_step(machine, step)
        except MachineError as e:
            failure = f"Step '{step}' failed in state '{machine.get_state()}': {e}"
            break
        trace.append((step, result, machine.get_state()))

    simulation_table(start, trace)

    if failure:
        report_failure(failure)
        raise SystemExit(1)
    report_ok(f"Final state: {machine.get_state()}")


def apply_step(machine, step: str) -> str:
    """Apply one simulation step and describe its outcome."""
    if step == ":undo":
        return str(machine.undo()).lower()
    if step == ":redo":
        return str(machine.redo()).lower()
    if step == ":reset":
        machine.reset()
        return "reset"
    if step == ":clear":
        machine.clear_history()
        return "cleared"
    if step.startswith("="):
        machine.change_state(step[1:])
        return "changed"
    machine.trigger(step)
    return "triggered"


@main.command()
def version() -> None:
    """Show version information."""
    console.print(
        Text.assemble(
            ("Turnstile", "bold"),
            (f" v{__version__}", "dim"),
        )
    )


if __name__ == "__main__":
    main()
