"""
Reporters Layer - 报告层

包含 Markdown、HTML、JSON 报告器以及使用审计模式的简化报告。
"""

import logging
from pathlib import Path

from env_doc.errors import ConfigError, OutputWriteError
from env_doc.reporters.base import Reporter, UNUSED_WARNING
from env_doc.reporters.markdown import MarkdownReporter
from env_doc.reporters.html import HtmlReporter
from env_doc.reporters.json_reporter import JsonReporter, load_json_report
from env_doc.reporters.usage import UsageFormat, render_usage

logger = logging.getLogger(__name__)

_FORMAT_ALIASES = {
    "markdown": MarkdownReporter,
    "md": MarkdownReporter,
    "html": HtmlReporter,
    "json": JsonReporter,
}


def get_reporter(output_format: str) -> Reporter:
    """按格式名获取报告器 (不区分大小写)"""
    reporter_cls = _FORMAT_ALIASES.get(output_format.strip().lower())
    if reporter_cls is None:
        supported = ", ".join(sorted(_FORMAT_ALIASES))
        raise ConfigError(f"Unsupported output format '{output_format}' (expected one of: {supported})")
    return reporter_cls()


def write_report(text: str, path: Path) -> Path:
    """写入报告文件，必要时创建父目录"""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    logger.info(f"Wrote {path}")
    return path


__all__ = [
    "Reporter",
    "MarkdownReporter",
    "HtmlReporter",
    "JsonReporter",
    "UsageFormat",
    "UNUSED_WARNING",
    "get_reporter",
    "load_json_report",
    "render_usage",
    "write_report",
]
