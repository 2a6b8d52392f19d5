import logging

import pytest

from env_doc.config import EnvDocConfig
from env_doc.core import DeclaredVariable, UsageAggregate
from env_doc.errors import PluginLoadError
from env_doc.plugins import HookPoint, Plugin, PluginHost, PluginRegistry, load_plugins
from env_doc.plugins.summary_table import SummaryTablePlugin
from env_doc.plugins.validation_hints import ValidationHintsPlugin, validation_rule_for
from env_doc.reporters import MarkdownReporter


class SuffixPlugin(Plugin):
    suffix = ""

    @property
    def name(self):
        return f"suffix{self.suffix}"

    def apply(self, host):
        host.hooks.before_output.tap(self.name, lambda text, data: text + self.suffix)


class SuffixA(SuffixPlugin):
    suffix = "-a"


class SuffixB(SuffixPlugin):
    suffix = "-b"


class BrokenConstructor(Plugin):
    def __init__(self, config):
        raise RuntimeError("boom")

    def apply(self, host):
        pass


def test_hook_chain_runs_in_registration_order():
    host = PluginHost()
    config = EnvDocConfig()

    SuffixA(config).apply(host)
    SuffixB(config).apply(host)

    assert host.run_before_output("base", {}) == "base-a-b"


def test_retap_replaces_handler_in_place():
    hook = HookPoint("beforeOutput")
    hook.tap("first", lambda text: text + "1")
    hook.tap("second", lambda text: text + "2")
    hook.tap("first", lambda text: text + "X")

    assert [name for name, _ in hook.handlers] == ["first", "second"]
    assert hook.call("") == "X2"


def test_failing_handler_is_skipped(caplog):
    hook = HookPoint("beforeParse")

    def explode(value):
        raise ValueError("bad plugin")

    hook.tap("broken", explode)
    hook.tap("ok", lambda value: value + ["ok"])

    with caplog.at_level(logging.WARNING):
        assert hook.call([]) == ["ok"]
    assert "broken failed in beforeParse" in caplog.text


def test_handler_returning_none_keeps_previous_value(caplog):
    hook = HookPoint("beforeOutput")
    hook.tap("silent", lambda text: None)

    with caplog.at_level(logging.WARNING):
        assert hook.call("keep") == "keep"
    assert "returned nothing" in caplog.text


def test_no_handlers_is_identity():
    host = PluginHost()
    variables = {"A": DeclaredVariable(name="A")}

    assert host.run_before_parse(variables) is variables
    assert host.run_before_output("text", {}) == "text"


def test_load_plugins_skips_failures(registered_plugins, caplog):
    registered_plugins("test-suffix-a", SuffixA)
    registered_plugins("test-broken", BrokenConstructor)
    host = PluginHost()

    with caplog.at_level(logging.ERROR):
        loaded = load_plugins(
            ["test-broken", "does-not-exist", "test-suffix-a"], EnvDocConfig(), host
        )

    assert [type(p) for p in loaded] == [SuffixA]
    assert host.run_before_output("x", {}) == "x-a"
    assert "Error loading plugin test-broken" in caplog.text
    assert "Error loading plugin does-not-exist" in caplog.text


def test_plugin_receives_config(registered_plugins):
    registered_plugins("test-suffix-b", SuffixB)
    config = EnvDocConfig.from_dict({"plugins": ["test-suffix-b"], "custom": {"flag": True}})
    host = PluginHost()

    [plugin] = load_plugins(config.plugins, config, host)

    assert plugin.config is config
    assert plugin.config.raw["custom"] == {"flag": True}


def test_registry_resolves_builtins_and_import_paths():
    assert PluginRegistry.resolve("validation-hints") is ValidationHintsPlugin
    assert PluginRegistry.resolve("summary-table") is SummaryTablePlugin
    assert (
        PluginRegistry.resolve("env_doc.plugins.validation_hints:ValidationHintsPlugin")
        is ValidationHintsPlugin
    )
    assert "validation-hints" in PluginRegistry.get_available_names()


@pytest.mark.parametrize("name", [
    "no-such-plugin",
    "env_doc_missing_module_xyz:Plugin",
    "env_doc.plugins.validation_hints:NoSuchClass",
])
def test_registry_resolution_failures(name):
    with pytest.raises(PluginLoadError):
        PluginRegistry.resolve(name)


@pytest.mark.parametrize("name, rule", [
    ("DATABASE_URL", "Must be a valid URL"),
    ("PORT", "Must be a valid port number (0-65535)"),
    ("API_KEY", "Should be a valid API key format"),
    ("REQUEST_TIMEOUT", "Must be a positive integer (in milliseconds)"),
    ("NODE_ENV", None),
])
def test_validation_rules(name, rule):
    assert validation_rule_for(name) == rule


def test_validation_hints_plugin_attaches_metadata():
    host = PluginHost()
    ValidationHintsPlugin(EnvDocConfig()).apply(host)
    variables = {
        "PORT": DeclaredVariable(name="PORT", value="80"),
        "NODE_ENV": DeclaredVariable(name="NODE_ENV"),
    }

    result = host.run_before_parse(variables)

    assert result["PORT"].metadata == {"validation": "Must be a valid port number (0-65535)"}
    assert result["NODE_ENV"].metadata == {}


def test_summary_table_plugin_inserts_tables():
    usage = UsageAggregate()
    usage.add("a.js", 4)
    env_data = {
        ".env.example": {
            "API_KEY": DeclaredVariable(name="API_KEY", value="x|y", description="Key\nmore", usage=usage),
        },
    }
    baseline = MarkdownReporter().render(env_data)
    host = PluginHost()
    SummaryTablePlugin(EnvDocConfig()).apply(host)

    text = host.run_before_output(baseline, env_data)

    assert text.startswith("# Environment Variables Documentation\n\n## Table of Contents\n")
    assert "- [.env.example](#envexample)" in text
    assert "| `API_KEY` | Key | `x\\|y` | 4 |" in text
    assert text.endswith(baseline.split("\n\n", 1)[1])


def test_summary_table_plugin_ignores_other_formats():
    config = EnvDocConfig.from_dict({"output": {"format": "json"}})
    plugin = SummaryTablePlugin(config)

    assert plugin.process_markdown("{}", {}) == "{}"
