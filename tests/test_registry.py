"""
Tests for the command registry and 1f.toml task loading.
"""

import pytest

from fast_cli.cli.commands import CommandRegistry, builtin_commands, load_config_tasks
from fast_cli.cli.commands.registry import BuiltinTable
from fast_cli.config import parse_config
from fast_cli.core.telemetry import Telemetry


class RecordingSink:
    def __init__(self):
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def registry(sink):
    return CommandRegistry(Telemetry(sink))


# ============================================================================
# CommandRegistry Tests
# ============================================================================

class TestCommandRegistry:
    """Tests for CommandRegistry."""

    def test_register_and_get(self, registry):
        assert registry.register("hello", "Say hello", lambda: None)
        entry = registry.get("hello")
        assert entry.name == "hello"
        assert entry.description == "Say hello"
        assert "hello" in registry
        assert len(registry) == 1

    def test_get_unknown(self, registry):
        assert registry.get("missing") is None
        assert "missing" not in registry

    def test_first_writer_wins(self, registry):
        """A second registration of a name is ignored."""
        calls = []
        assert registry.register("deploy", "first", lambda: calls.append("first"))
        assert not registry.register("deploy", "second", lambda: calls.append("second"))

        entry = registry.get("deploy")
        assert entry.description == "first"
        entry.run()
        assert calls == ["first"]

    def test_catalog_in_registration_order(self, registry):
        for name in ["zeta", "alpha", "mid"]:
            registry.register(name, f"{name} desc", lambda: None)

        catalog = registry.catalog()
        assert [e.name for e in catalog] == ["zeta", "alpha", "mid"]
        assert catalog[1].description == "alpha desc"
        assert [e.name for e in registry.all_commands()] == ["zeta", "alpha", "mid"]

    def test_usage_and_help_text(self, registry):
        registry.register("x", "d", lambda: None, usage="fast x [arg]", help_text="Longer")
        entry = registry.get("x")
        assert entry.usage == "fast x [arg]"
        assert entry.help_text == "Longer"

    def test_handler_is_instrumented(self, registry, sink):
        registry.register("ok", "d", lambda: None)
        registry.get("ok").run()

        events = [(r["event"], r.get("command")) for r in sink.records]
        assert events == [("command_start", "ok"), ("command_success", "ok")]

    def test_failing_handler_reports_failure(self, registry, sink):
        def boom():
            raise RuntimeError("broken")

        registry.register("bad", "d", boom)
        with pytest.raises(RuntimeError):
            registry.get("bad").run()

        assert sink.records[-1]["event"] == "command_failure"
        assert sink.records[-1]["error"]["message"] == "broken"

    def test_default_telemetry_is_inactive(self):
        registry = CommandRegistry()
        assert not registry.telemetry.active


# ============================================================================
# Built-in Table Tests
# ============================================================================

class TestBuiltinTable:
    """Tests for BuiltinTable."""

    def test_install_binds_context(self, registry):
        table = BuiltinTable()
        seen = []

        @table.register("one", "First")
        def cmd_one(ctx):
            seen.append(ctx)

        installed = table.install(registry, "the-context")
        assert installed == ["one"]
        registry.get("one").run()
        assert seen == ["the-context"]

    def test_install_skips_taken_names(self, registry):
        registry.register("one", "already here", lambda: None)
        table = BuiltinTable()
        table.register("one", "First")(lambda ctx: None)
        table.register("two", "Second")(lambda ctx: None)

        assert table.install(registry, None) == ["two"]
        assert registry.get("one").description == "already here"

    def test_global_table_has_builtins(self):
        import fast_cli.cli.commands.builtins  # noqa: F401

        names = builtin_commands.names()
        for name in ["commit", "commitPush", "dbOpen", "dbClear", "update",
                     "setup", "tasks", "test", "chat", "version"]:
            assert name in names


# ============================================================================
# Task Loading Tests
# ============================================================================

class TestLoadConfigTasks:
    """Tests for load_config_tasks."""

    def test_no_config(self, registry):
        assert load_config_tasks(registry, None) == []
        assert len(registry) == 0

    def test_tasks_registered_in_order(self, registry):
        config = parse_config(
            '[tasks.dev]\ndesc = "Dev server"\ncmds = ["bun dev"]\n\n'
            '[tasks.build]\ncmds = ["bun build"]\n'
        )
        assert load_config_tasks(registry, config) == ["dev", "build"]
        assert registry.get("dev").description == "Dev server"
        assert registry.get("build").description == "Run build task from 1f.toml"

    def test_tasks_do_not_override_existing(self, registry):
        """A task named like a built-in leaves the built-in in place."""
        registry.register("commit", "Built-in commit", lambda: None)
        config = parse_config('[tasks.commit]\ncmds = ["git commit"]\n')

        assert load_config_tasks(registry, config) == []
        assert registry.get("commit").description == "Built-in commit"

    def test_task_handler_runs_task(self, registry, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "fast_cli.workflows.tasks.run_shell",
            lambda command, cwd=None: calls.append((command, cwd)) or 0,
        )
        config = parse_config('[tasks.dev]\nsilent = true\ncmds = ["echo hi"]\n')
        load_config_tasks(registry, config, cwd="/work")

        registry.get("dev").run()
        assert calls == [("echo hi", "/work")]
