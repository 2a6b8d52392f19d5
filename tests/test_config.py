import json

import pytest

from env_doc.config import (
    DEFAULT_INPUT_PATTERNS,
    DEFAULT_SCAN_IGNORE,
    EnvDocConfig,
    load_config,
)
from env_doc.errors import ConfigError


def _write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_full_config(tmp_path):
    path = _write_config(tmp_path / "env-doc.config.json", {
        "plugins": ["validation-hints"],
        "input": {"files": [".env.example"], "patterns": ["config/.env*"]},
        "output": {"format": "html", "file": "variables.html"},
        "scan": {
            "patterns": ["**/*.js"],
            "ignore": ["vendor/**"],
            "usagePatterns": [r"os\.getenv\(['\"]{name}['\"]"],
        },
        "exclude": ["SECRET_*"],
    })

    config = load_config(path)

    assert config.plugins == ("validation-hints",)
    assert config.input.sources == [".env.example", "config/.env*"]
    assert config.output.format == "html"
    assert config.output.file == "variables.html"
    assert config.scan.patterns == ("**/*.js",)
    assert config.scan.ignore == ("vendor/**",)
    assert config.scan.usage_patterns == (r"os\.getenv\(['\"]{name}['\"]",)
    assert config.exclude == ("SECRET_*",)


def test_missing_sections_use_defaults(tmp_path):
    config = load_config(_write_config(tmp_path / "c.json", {}))

    assert config.plugins == ()
    assert list(config.input.patterns) == DEFAULT_INPUT_PATTERNS
    assert config.output.format == "markdown"
    assert config.output.file is None
    assert list(config.scan.ignore) == DEFAULT_SCAN_IGNORE
    assert config.exclude == ()


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.json")


def test_malformed_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{ plugins: [", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(path)


@pytest.mark.parametrize("data, message", [
    ([], "JSON object"),
    ({"plugins": "validation-hints"}, "plugins"),
    ({"input": ["x"]}, "'input' must be an object"),
    ({"input": {"files": [1]}}, "input.files"),
    ({"output": {"format": 3}}, "output.format"),
    ({"output": {"file": ""}}, "output.file"),
    ({"scan": {"usagePatterns": ["no placeholder"]}}, "placeholder"),
    ({"exclude": [None]}, "exclude"),
])
def test_invalid_values_raise(data, message):
    with pytest.raises(ConfigError, match=message):
        EnvDocConfig.from_dict(data)


def test_config_is_read_only():
    config = EnvDocConfig.from_dict({"exclude": ["A"]})

    with pytest.raises(AttributeError):
        config.exclude = ("B",)
