"""
HTML 报告器 - 输出单个自包含的 HTML 文档

所有插入到标记中的文本都经过 html.escape。
"""

from html import escape
from pathlib import Path

from env_doc.core.models import DeclaredVariable, EnvData
from env_doc.reporters.base import (
    NOT_SET,
    UNUSED_WARNING,
    format_metadata_value,
    metadata_label,
)

STYLE = """\
body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; }
.variable { margin-bottom: 30px; }
.warning { color: #856404; background-color: #fff3cd; padding: 10px; border-radius: 4px; }
.locations { margin-left: 20px; }
code { background-color: #f4f4f4; padding: 2px 4px; border-radius: 3px; }"""


def html_text(text: str) -> str:
    """转义文本并保留换行"""
    return escape(text).replace("\n", "<br>\n")


def html_document(title: str, body: list[str]) -> str:
    """包装为完整的 HTML 文档"""
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{escape(title)}</title>",
        "<style>",
        STYLE,
        "</style>",
        "</head>",
        "<body>",
        f"<h1>{escape(title)}</h1>",
        *body,
        "</body>",
        "</html>",
    ]
    return "\n".join(parts) + "\n"


def render_locations(variable: DeclaredVariable) -> list[str]:
    """使用位置列表或未使用警告"""
    if variable.usage and variable.usage.occurrences:
        parts = ["<h4>Usage Locations:</h4>", '<ul class="locations">']
        for occurrence in variable.usage.occurrences:
            parts.append(
                f"<li>{escape(occurrence.file)} ({occurrence.count} occurrences)</li>"
            )
        parts.append("</ul>")
        return parts
    return [f'<p class="warning">{escape(UNUSED_WARNING)}</p>']


class HtmlReporter:
    """HTML 报告器"""

    format_name = "html"
    default_filename = "ENV.html"
    title = "Environment Variables Documentation"

    def render(self, data: EnvData) -> str:
        body: list[str] = []
        for source, variables in data.items():
            body.append('<section class="env-file">')
            body.append(f"<h2>{escape(Path(source).name)}</h2>")
            if not variables:
                body.append("<p><em>No variables declared.</em></p>")
            for variable in variables.values():
                body.extend(self._render_variable(variable))
            body.append("</section>")
        return html_document(self.title, body)

    def _render_variable(self, variable: DeclaredVariable) -> list[str]:
        parts = ['<div class="variable">', f"<h3>{escape(variable.name)}</h3>"]
        if variable.description:
            parts.append(f"<p>{html_text(variable.description)}</p>")
        parts.append(
            f"<p><strong>Default:</strong> <code>{escape(variable.value or NOT_SET)}</code></p>"
        )
        for key, value in variable.metadata.items():
            parts.append(
                f"<p><strong>{escape(metadata_label(key))}:</strong> "
                f"{escape(format_metadata_value(value))}</p>"
            )
        parts.append(f"<p><strong>Total Usage Count:</strong> {variable.usage_count}</p>")
        parts.extend(render_locations(variable))
        parts.append("</div>")
        return parts
