"""
使用审计报告 - env-scan 模式的简化渲染

输入为单个声明文件的扁平变量字典，不按文件分节。
"""

import json
from enum import Enum
from html import escape

from env_doc.core.models import DeclaredVariable
from env_doc.reporters.base import UNUSED_WARNING
from env_doc.reporters.html import html_document, html_text, render_locations

TITLE = "Environment Variables Usage Documentation"


class UsageFormat(str, Enum):
    """审计报告格式"""
    md = "md"
    json = "json"
    html = "html"

    @property
    def filename(self) -> str:
        return f"env-usage.{self.value}"


def render_usage_markdown(variables: dict[str, DeclaredVariable]) -> str:
    lines = [f"# {TITLE}", ""]

    for name, variable in variables.items():
        lines.append(f"## {name}")
        lines.append("")
        lines.append(f"**Description:** {variable.description}")
        lines.append("")
        lines.append(f"**Total Usage Count:** {variable.usage_count}")
        lines.append("")

        if variable.usage and variable.usage.occurrences:
            lines.append("### Usage Locations:")
            lines.append("")
            for occurrence in variable.usage.occurrences:
                lines.append(f"- {occurrence.file} ({occurrence.count} occurrences)")
            lines.append("")
        else:
            lines.append(UNUSED_WARNING)
            lines.append("")

    return "\n".join(lines)


def render_usage_json(variables: dict[str, DeclaredVariable]) -> str:
    payload = {
        name: {
            "description": variable.description,
            "value": variable.value,
            "count": variable.usage_count,
            "occurrences": (
                [o.to_dict() for o in variable.usage.occurrences] if variable.usage else []
            ),
        }
        for name, variable in variables.items()
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def render_usage_html(variables: dict[str, DeclaredVariable]) -> str:
    body: list[str] = []
    for name, variable in variables.items():
        body.append('<div class="variable">')
        body.append(f"<h2>{escape(name)}</h2>")
        body.append(f"<p><strong>Description:</strong> {html_text(variable.description)}</p>")
        body.append(f"<p><strong>Total Usage Count:</strong> {variable.usage_count}</p>")
        body.extend(render_locations(variable))
        body.append("</div>")
    return html_document(TITLE, body)


_RENDERERS = {
    UsageFormat.md: render_usage_markdown,
    UsageFormat.json: render_usage_json,
    UsageFormat.html: render_usage_html,
}


def render_usage(variables: dict[str, DeclaredVariable], output_format: UsageFormat) -> str:
    return _RENDERERS[UsageFormat(output_format)](variables)
