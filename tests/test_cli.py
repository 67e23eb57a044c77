"""Tests for turnstile.cli commands."""

from io import StringIO
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from turnstile.cli import apply_step, main
from turnstile.machine import StateMachine


def _invoke(args):
    """Invoke CLI and capture both Click output and Rich stdout."""
    runner = CliRunner()
    buf = StringIO()
    from turnstile.cli_ui import console

    old_file = console.file
    console.file = buf
    try:
        result = runner.invoke(main, args)
    finally:
        console.file = old_file
    combined = result.output + buf.getvalue()
    return result, combined


class TestVersionCommand:
    def test_version_output(self):
        result, output = _invoke(["version"])
        assert result.exit_code == 0
        assert "Turnstile" in output

    def test_version_flag(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "turnstile" in result.output


class TestValidateCommand:
    def test_validate_missing_file(self):
        result, _ = _invoke(["validate", "nonexistent.yaml"])
        assert result.exit_code != 0

    def test_validate_valid_machine(self, light_switch_path: Path):
        result, output = _invoke(["validate", str(light_switch_path)])

        assert result.exit_code == 0
        assert "Valid Machine" in output
        assert "light-switch" in output

    def test_validate_warns_on_dangling_target(self, gate_path: Path):
        result, output = _invoke(["validate", str(gate_path)])

        assert result.exit_code == 0
        assert "broken" in output

    def test_validate_invalid_machine(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("states:\n  a: {}\n")

        result, output = _invoke(["validate", str(path)])

        assert result.exit_code == 1
        assert "Validation error" in output


class TestInfoCommand:
    def test_info_lists_states_and_transitions(self, gate_path: Path):
        result, output = _invoke(["info", str(gate_path)])

        assert result.exit_code == 0
        assert "coin-gate" in output
        assert "maintenance" in output
        assert "escalate" in output

    def test_info_verbose_shows_descriptions(self, light_switch_path: Path):
        result, output = _invoke(["info", str(light_switch_path), "--verbose"])

        assert result.exit_code == 0
        assert "Light is lit" in output
        assert "Dangling targets" in output


class TestSimulateCommand:
    def test_simulate_scenario(self, light_switch_path: Path):
        result, output = _invoke(
            ["simulate", str(light_switch_path), "turnOn", "turnOff", ":undo", ":redo"]
        )

        assert result.exit_code == 0, output
        assert "Final state: off" in output
        assert "Simulation" in output
        assert "triggered" in output

    def test_simulate_invalid_event(self, light_switch_path: Path):
        result, output = _invoke(["simulate", str(light_switch_path), "turnOff"])

        assert result.exit_code == 1
        assert "No such event for current state" in output

    def test_simulate_strict_rejects_dangling(self, gate_path: Path):
        steps = ["service", "escalate"]

        lenient, output = _invoke(["simulate", str(gate_path), *steps])
        assert lenient.exit_code == 0
        assert "Final state: broken" in output

        strict, output = _invoke(["simulate", str(gate_path), "--strict", *steps])
        assert strict.exit_code == 1
        assert "unknown state 'broken'" in " ".join(output.split())

    def test_simulate_settings_file(self, gate_path: Path, tmp_path: Path):
        settings_path = tmp_path / "turnstile.yaml"
        settings_path.write_text("strict_targets: true\n")

        result, _ = _invoke(
            [
                "--settings",
                str(settings_path),
                "simulate",
                str(gate_path),
                "service",
                "escalate",
            ]
        )

        assert result.exit_code == 1

    def test_settings_after_command_rejected(self, gate_path: Path, tmp_path: Path):
        settings_path = tmp_path / "turnstile.yaml"
        settings_path.write_text("strict_targets: true\n")

        result, _ = _invoke(
            ["simulate", str(gate_path), "--settings", str(settings_path), "service"]
        )

        assert result.exit_code == 2


class TestLoggingOptions:
    def test_default_level_from_settings(
        self, light_switch_path: Path, tmp_path: Path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        with patch("turnstile.cli.setup_logging") as setup:
            result, _ = _invoke(["validate", str(light_switch_path)])

        assert result.exit_code == 0
        setup.assert_called_once_with("INFO")

    def test_debug_flag(self, light_switch_path: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch("turnstile.cli.setup_logging") as setup:
            result, _ = _invoke(["--debug", "validate", str(light_switch_path)])

        assert result.exit_code == 0
        setup.assert_called_once_with("DEBUG")

    def test_log_level_from_settings_file(
        self, light_switch_path: Path, tmp_path: Path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        settings_path = tmp_path / "custom.yaml"
        settings_path.write_text("log_level: ERROR\n")

        with patch("turnstile.cli.setup_logging") as setup:
            result, _ = _invoke(
                ["--settings", str(settings_path), "info", str(light_switch_path)]
            )

        assert result.exit_code == 0
        setup.assert_called_once_with("ERROR")

    def test_log_level_from_environment(
        self, light_switch_path: Path, tmp_path: Path, monkeypatch
    ):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TURNSTILE_LOG_LEVEL", "WARNING")

        with patch("turnstile.cli.setup_logging") as setup:
            result, _ = _invoke(["simulate", str(light_switch_path), "turnOn"])

        assert result.exit_code == 0
        setup.assert_called_once_with("WARNING")

class TestApplyStep:
    def test_step_kinds(self, switch_config_dict):
        machine = StateMachine(switch_config_dict)

        assert apply_step(machine, "turnOn") == "triggered"
        assert apply_step(machine, "=off") == "changed"
        assert apply_step(machine, ":undo") == "true"
        assert machine.get_state() == "on"
        assert apply_step(machine, ":redo") == "true"
        assert apply_step(machine, ":redo") == "false"
        assert apply_step(machine, ":reset") == "reset"
        assert apply_step(machine, ":clear") == "cleared"
        assert machine.history == ()
