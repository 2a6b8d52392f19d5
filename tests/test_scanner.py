import logging

import pytest

from env_doc.core import UsageScanner, discover_files, validate_templates
from env_doc.errors import ConfigError


@pytest.mark.parametrize("snippet", [
    "process.env.DB_HOST",
    "process.env['DB_HOST']",
    'process.env["DB_HOST"]',
    "process['env']['DB_HOST']",
    'process["env"]["DB_HOST"]',
    "process['env'].DB_HOST",
    "require('dotenv').config().DB_HOST",
    "config().DB_HOST",
])
def test_each_access_idiom_counts_once(snippet):
    scanner = UsageScanner(["DB_HOST"])

    assert scanner.count(f"const x = {snippet};\n", "DB_HOST") == 1


def test_exact_identifier_boundary():
    scanner = UsageScanner(["API_KEY", "API_KEY_BACKUP"])
    content = (
        "process.env.API_KEY\n"
        "process.env.API_KEY_BACKUP\n"
        "process.env.API_KEY;\n"
    )

    assert scanner.scan_content(content) == {"API_KEY": 2, "API_KEY_BACKUP": 1}


def test_matching_is_case_sensitive():
    scanner = UsageScanner(["API_KEY"])

    assert scanner.count("process.env.api_key", "API_KEY") == 0


def test_name_with_regex_characters_is_escaped():
    scanner = UsageScanner(["A.B"])

    assert scanner.count("process.env.AxB", "A.B") == 0
    assert scanner.count("process.env['A.B']", "A.B") == 1


def test_plain_name_mentions_are_not_usage():
    scanner = UsageScanner(["PORT"])

    assert scanner.count("PORT=3000\nconst PORT = 1;\n", "PORT") == 0


def test_custom_templates():
    templates = validate_templates([r"os\.environ\[['\"]{name}['\"]\]", r"os\.getenv\(['\"]{name}['\"]"])
    scanner = UsageScanner(["HOME_DIR"], templates)

    content = "os.environ['HOME_DIR']\nos.getenv(\"HOME_DIR\")\nos.environ['HOME_DIR_X']\n"
    assert scanner.count(content, "HOME_DIR") == 2


def test_template_without_placeholder_is_rejected():
    with pytest.raises(ConfigError):
        validate_templates([r"os\.environ"])


def test_invalid_template_regex_is_rejected():
    with pytest.raises(ConfigError):
        validate_templates([r"({name}"])


def test_scan_files_builds_aggregates_in_file_order(make_tree):
    root = make_tree({
        "b.js": "process.env.API_KEY\n",
        "a.js": "process.env.API_KEY\nprocess.env.API_KEY\n",
        "c.js": "nothing here\n",
    })
    files = discover_files(["**/*.js"], cwd=root)

    usage = UsageScanner(["API_KEY", "UNUSED"]).scan_files(files, root)

    assert [(o.file, o.count) for o in usage["API_KEY"].occurrences] == [("a.js", 2), ("b.js", 1)]
    assert usage["API_KEY"].total_count == 3
    assert usage["UNUSED"].total_count == 0
    assert usage["UNUSED"].unused


def test_binary_files_are_skipped_with_warning(make_tree, caplog):
    root = make_tree({
        "blob.bin": b"\x00\x01process.env.API_KEY",
        "app.js": "process.env.API_KEY",
    })
    files = discover_files(["**/*"], cwd=root)

    with caplog.at_level(logging.WARNING):
        usage = UsageScanner(["API_KEY"]).scan_files(files, root)

    assert [o.file for o in usage["API_KEY"].occurrences] == ["app.js"]
    assert "binary" in caplog.text


def test_unreadable_file_is_skipped(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        usage = UsageScanner(["API_KEY"]).scan_files([tmp_path / "gone.js"], tmp_path)

    assert usage["API_KEY"].occurrences == []
    assert "Failed to read" in caplog.text


def test_progress_callback(make_tree):
    root = make_tree({"a.js": "", "b.js": ""})
    seen = []

    UsageScanner(["X"]).scan_files(discover_files(["*.js"], cwd=root), root, on_file=seen.append)

    assert seen == ["a.js", "b.js"]


def test_total_count_matches_sum_of_occurrences(make_tree):
    root = make_tree({f"f{i}.js": "process.env.V\n" * i for i in range(1, 6)})

    usage = UsageScanner(["V"]).scan_files(discover_files(["*.js"], cwd=root), root)

    assert usage["V"].total_count == sum(o.count for o in usage["V"].occurrences) == 15
