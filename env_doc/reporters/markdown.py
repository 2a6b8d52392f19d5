"""
Markdown 报告器 - 按声明文件分节输出变量文档
"""

from pathlib import Path

from env_doc.core.models import DeclaredVariable, EnvData
from env_doc.reporters.base import (
    NOT_SET,
    UNUSED_WARNING,
    format_metadata_value,
    metadata_label,
)

TITLE = "# Environment Variables Documentation"


class MarkdownReporter:
    """Markdown 报告器"""

    format_name = "markdown"
    default_filename = "ENV.md"

    def render(self, data: EnvData) -> str:
        lines = [TITLE, ""]

        for source, variables in data.items():
            lines.append(f"## {Path(source).name}")
            lines.append("")
            if not variables:
                lines.append("_No variables declared._")
                lines.append("")
                continue
            for variable in variables.values():
                lines.extend(self._render_variable(variable))

        return "\n".join(lines)

    def _render_variable(self, variable: DeclaredVariable) -> list[str]:
        lines = [f"### {variable.name}", ""]

        if variable.description:
            lines.append(variable.description)
            lines.append("")

        lines.append(f"**Default:** `{variable.value or NOT_SET}`")
        lines.append("")

        for key, value in variable.metadata.items():
            lines.append(f"**{metadata_label(key)}:** {format_metadata_value(value)}")
            lines.append("")

        lines.append(f"**Total Usage Count:** {variable.usage_count}")
        lines.append("")

        if variable.usage and variable.usage.occurrences:
            lines.append("**Usage Locations:**")
            lines.append("")
            for occurrence in variable.usage.occurrences:
                lines.append(f"- {occurrence.file} ({occurrence.count} occurrences)")
            lines.append("")
        else:
            lines.append(UNUSED_WARNING)
            lines.append("")

        return lines
