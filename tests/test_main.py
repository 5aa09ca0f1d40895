"""
End-to-end tests for run() with a temporary project directory.
"""

import importlib

import pytest

from fast_cli import __version__
from fast_cli.cli.main import create_context, run
from fast_cli.config import CONFIG_FILENAME, clear_config_cache
from fast_cli.core.telemetry import Telemetry

# fast_cli.cli re-exports the main() function under the submodule name
main_mod = importlib.import_module("fast_cli.cli.main")


class RecordingSink:
    def __init__(self):
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def sink():
    return RecordingSink()


def make_ctx(tmp_path, sink, toml=None, env=None):
    if toml is not None:
        (tmp_path / CONFIG_FILENAME).write_text(toml)
    return create_context(argv0="/usr/bin/fast", cwd=tmp_path, env=env or {}, telemetry=Telemetry(sink))


class TestCreateContext:
    """Tests for create_context."""

    def test_without_config(self, tmp_path, sink):
        ctx = make_ctx(tmp_path, sink)
        assert ctx.config is None
        assert ctx.command_name == "fast"
        assert ctx.cwd == tmp_path

    def test_app_section_sets_identity(self, tmp_path, sink):
        ctx = make_ctx(tmp_path, sink, '[app]\nname = "linsa"\nversion = "0.4.0"\n')
        assert ctx.command_name == "linsa"
        assert ctx.identity.version == "0.4.0"

    def test_telemetry_metadata(self, tmp_path):
        ctx = create_context(
            argv0="fast",
            cwd=tmp_path,
            env={"FLOW_TELEMETRY": "0"},
        )
        assert not ctx.telemetry.active
        assert ctx.telemetry.metadata == {"commandName": "fast", "version": ctx.identity.version}


class TestRun:
    """Tests for run()."""

    def test_version(self, tmp_path, sink, capsys):
        ctx = make_ctx(tmp_path, sink, '[app]\nversion = "3.1.4"\n')
        assert run(["--version"], ctx=ctx) == 0
        assert capsys.readouterr().out.strip() == "3.1.4"

    def test_numeric_app_version_falls_back(self, tmp_path, sink, capsys):
        ctx = make_ctx(tmp_path, sink, "[app]\nversion = 2\n")
        assert run(["version"], ctx=ctx) == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_invocation_tracked(self, tmp_path, sink):
        ctx = make_ctx(tmp_path, sink)
        run(["--help"], ctx=ctx)
        assert sink.records[0]["event"] == "cli_invocation"
        assert sink.records[0]["args"] == ["--help"]

    def test_help_lists_config_tasks(self, tmp_path, sink, capsys):
        ctx = make_ctx(tmp_path, sink, '[tasks.dev]\ndesc = "Start dev server"\ncmds = ["bun dev"]\n')
        assert run(["help"], ctx=ctx) == 0
        assert "Start dev server" in capsys.readouterr().out

    def test_runs_config_task(self, tmp_path, sink, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "fast_cli.workflows.tasks.run_shell",
            lambda command, cwd=None: calls.append((command, cwd)) or 0,
        )
        ctx = make_ctx(tmp_path, sink, '[tasks.dev]\ncmds = ["bun install", "bun dev"]\n')

        assert run(["dev"], ctx=ctx) == 0
        assert calls == [("bun install", tmp_path), ("bun dev", tmp_path)]
        events = [r["event"] for r in sink.records]
        assert events == ["cli_invocation", "command_start", "command_success"]

    def test_failing_task(self, tmp_path, sink, monkeypatch, capsys):
        monkeypatch.setattr("fast_cli.workflows.tasks.run_shell", lambda command, cwd=None: 1)
        ctx = make_ctx(tmp_path, sink, '[tasks.dev]\ncmds = ["false"]\n')

        assert run(["dev"], ctx=ctx) == 1
        assert "Task 'dev' command exited with code 1" in capsys.readouterr().err
        assert sink.records[-1]["event"] == "command_failure"

    def test_unknown_command(self, tmp_path, sink, capsys):
        ctx = make_ctx(tmp_path, sink)
        assert run(["nope"], ctx=ctx) == 1
        assert "Unknown command: nope" in capsys.readouterr().err

    def test_tasks_builtin(self, tmp_path, sink, capsys):
        ctx = make_ctx(tmp_path, sink, '[tasks.lint]\ndesc = "Lint"\ncmds = ["bun lint"]\n')
        assert run(["tasks"], ctx=ctx) == 0
        assert "  lint  Lint (1 cmd)" in capsys.readouterr().out

    def test_setup_missing_secret(self, tmp_path, sink, capsys):
        toml = '[secrets.API_TOKEN]\nrequired = true\n\n[tasks.setup]\ncmds = ["bun install"]\n'
        ctx = make_ctx(tmp_path, sink, toml)

        assert run(["setup"], ctx=ctx) == 1
        captured = capsys.readouterr()
        assert "❌ API_TOKEN (API_TOKEN) is required" in captured.out
        assert "Missing required secrets: API_TOKEN" in captured.err

    def test_setup_runs_setup_task(self, tmp_path, sink, monkeypatch, capsys):
        calls = []
        monkeypatch.setattr(
            "fast_cli.workflows.tasks.run_shell",
            lambda command, cwd=None: calls.append(command) or 0,
        )
        toml = '[secrets.API_TOKEN]\nrequired = true\n\n[tasks.setup]\ncmds = ["bun install"]\n'
        ctx = make_ctx(tmp_path, sink, toml, env={"API_TOKEN": "t"})

        assert run(["setup"], ctx=ctx) == 0
        assert calls == ["bun install"]
        assert "Running setup task commands..." in capsys.readouterr().out

    def test_commit_without_api_key(self, tmp_path, sink, monkeypatch, capsys):
        monkeypatch.setattr(
            "fast_cli.cli.commands.builtins.commit.ensure_git_repository",
            lambda cwd=None: None,
        )
        ctx = make_ctx(tmp_path, sink)

        assert run(["commit"], ctx=ctx) == 1
        assert "OPENAI_API_KEY is not set" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, monkeypatch, capsys):
        (tmp_path / CONFIG_FILENAME).write_text("[app\n")
        monkeypatch.chdir(tmp_path)

        assert run(["--help"]) == 1
        assert CONFIG_FILENAME in capsys.readouterr().err


class TestMain:
    """Tests for the console entry point."""

    def test_exit_code(self, monkeypatch):
        monkeypatch.setattr(main_mod, "run", lambda argv, argv0=None: 7)
        monkeypatch.setattr(main_mod.sys, "argv", ["fast", "x"])
        with pytest.raises(SystemExit) as exc:
            main_mod.main()
        assert exc.value.code == 7

    def test_keyboard_interrupt(self, monkeypatch):
        def interrupted(argv, argv0=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(main_mod, "run", interrupted)
        monkeypatch.setattr(main_mod.sys, "argv", ["fast"])
        with pytest.raises(SystemExit) as exc:
            main_mod.main()
        assert exc.value.code == 130
