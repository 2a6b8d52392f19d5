"""
使用审计模式 (env-scan)

解析单个声明文件，扫描整个项目的使用情况，在工作目录写出
env-usage.md / env-usage.json / env-usage.html。不加载插件。
"""

import logging
from pathlib import Path
from typing import Optional

from env_doc.core import (
    DeclaredVariable,
    UsageScanner,
    discover_files,
    parse_dotenv_content,
    read_dotenv_file,
)
from env_doc.core.scanner import ProgressCallback
from env_doc.errors import DeclarationFileError
from env_doc.reporters import UsageFormat, render_usage, write_report

logger = logging.getLogger(__name__)

DEFAULT_ENV_PATH = ".env"

DEFAULT_SCAN_PATTERNS: list[str] = ["**/*.*"]

DEFAULT_AUDIT_IGNORE: list[str] = [
    "node_modules/**",
    ".git/**",
    "/*.md",
    "/*.env*",
]


def split_ignore_patterns(ignore: Optional[str]) -> list[str]:
    """拆分逗号分隔的忽略模式，去除空白和空项"""
    if not ignore:
        return []
    return [p.strip() for p in ignore.split(",") if p.strip()]


def load_declared_variables(env_path: Path) -> dict[str, DeclaredVariable]:
    """读取声明文件，文件不存在时抛出 DeclarationFileError"""
    if not env_path.is_file():
        raise DeclarationFileError(f"ENV file not found at: {env_path}")
    return parse_dotenv_content(read_dotenv_file(env_path))


def scan_env_usage(
    env_path: Optional[str] = None,
    output_format: UsageFormat | str = UsageFormat.md,
    ignore: Optional[str] = None,
    cwd: Optional[Path] = None,
    on_file: Optional[ProgressCallback] = None,
) -> Path:
    """
    运行使用审计

    Args:
        env_path: 声明文件路径，默认为 cwd 下的 .env
        output_format: md / json / html
        ignore: 额外的忽略模式 (逗号分隔)
        cwd: 工作目录，默认为当前目录
        on_file: 每扫描一个文件时的回调

    Returns:
        写入的报告路径

    Raises:
        DeclarationFileError: 声明文件不存在或无法读取
        OutputWriteError: 无法写入报告
    """
    cwd = Path(cwd or Path.cwd()).resolve()
    output_format = UsageFormat(output_format)

    path = Path(env_path) if env_path else Path(DEFAULT_ENV_PATH)
    if not path.is_absolute():
        path = cwd / path

    variables = load_declared_variables(path)
    logger.info(f"Loaded {len(variables)} variables from {path}")

    ignore_patterns = [*DEFAULT_AUDIT_IGNORE, *split_ignore_patterns(ignore)]
    files = discover_files(DEFAULT_SCAN_PATTERNS, ignore_patterns, cwd=cwd)

    output_path = cwd / output_format.filename
    files = [f for f in files if f.resolve() != output_path]

    scanner = UsageScanner(variables.keys())
    usage = scanner.scan_files(files, cwd, on_file=on_file)
    for name, variable in variables.items():
        variable.usage = usage[name]

    return write_report(render_usage(variables, output_format), output_path)
