"""Summary table plugin.

Inserts a table of contents and a per-file summary table right after the
top-level heading of a Markdown report. Other formats pass through.
"""

import re
from pathlib import Path

from env_doc.core.models import EnvData
from env_doc.errors import ConfigError
from env_doc.plugins.base import Plugin, PluginHost, PluginRegistry
from env_doc.reporters import MarkdownReporter, get_reporter
from env_doc.reporters.base import NOT_SET


def _anchor(title: str) -> str:
    """GitHub-style heading anchor"""
    slug = re.sub(r"[^\w\- ]", "", title.strip().lower())
    return slug.replace(" ", "-")


def _cell(text: str) -> str:
    return text.replace("|", "\\|")


class SummaryTablePlugin(Plugin):
    """Adds a table of contents and summary tables to Markdown output."""

    @property
    def name(self) -> str:
        return "summary-table"

    def apply(self, host: PluginHost) -> None:
        host.hooks.before_output.tap(self.name, self.process_markdown)

    def process_markdown(self, text: str, env_data: EnvData) -> str:
        try:
            reporter = get_reporter(self.config.output.format)
        except ConfigError:
            return text
        if not isinstance(reporter, MarkdownReporter):
            return text

        head, sep, rest = text.partition("\n\n")
        if not sep:
            return text
        return head + sep + self.render_summary(env_data) + rest

    def render_summary(self, env_data: EnvData) -> str:
        lines = ["## Table of Contents", ""]
        for source in env_data:
            section = Path(source).name
            lines.append(f"- [{section}](#{_anchor(section)})")
        lines.append("")

        for source, variables in env_data.items():
            lines.append(f"### Summary: {Path(source).name}")
            lines.append("")
            lines.append("| Variable | Description | Default Value | Usage Count |")
            lines.append("|----------|-------------|---------------|-------------|")
            for name, variable in variables.items():
                description = variable.description.split("\n")[0] if variable.description else "No description"
                value = variable.value or NOT_SET
                lines.append(
                    f"| `{_cell(name)}` | {_cell(description)} | `{_cell(value)}` | {variable.usage_count} |"
                )
            lines.append("")

        lines.append("---")
        lines.append("")
        return "\n".join(lines) + "\n"


# Auto-register plugin
PluginRegistry.register("summary-table", SummaryTablePlugin)
