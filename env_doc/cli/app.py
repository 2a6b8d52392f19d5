"""
CLI 入口模块 - 使用 Typer 构建命令行界面

两个独立的入口：
- env-doc: 按配置文件生成完整文档（支持插件、多个声明文件）
- env-scan: 单个 .env 文件的使用审计
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from env_doc import __version__
from env_doc.audit import DEFAULT_ENV_PATH, scan_env_usage
from env_doc.config import DEFAULT_CONFIG_PATH, load_config
from env_doc.errors import EnvDocError
from env_doc.generator import generate_docs
from env_doc.reporters import UsageFormat

logger = logging.getLogger("env_doc")

# 创建 Typer 应用实例
app = typer.Typer(
    name="env-doc",
    help="Generate documentation for environment variables.",
    add_completion=False,
)

scan_app = typer.Typer(
    name="env-scan",
    help="Audit where the variables of a single .env file are used.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

SUCCESS_MESSAGE = "✨ Environment variables documentation generated successfully!"


def configure_logging(verbose: bool) -> None:
    """日志输出到 stderr，默认只显示警告"""
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def fail(message: str) -> None:
    """打印错误并以状态码 1 退出"""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]env-doc[/bold] v{__version__}")
        raise typer.Exit()


@app.command()
def generate(
    config: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to config file",
    ),
    output: str = typer.Option(
        "./docs",
        "--output",
        "-o",
        help="Output directory",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Generate environment variable documentation from a config file.

    Examples:
        env-doc
        env-doc --config ./env-doc.config.json --output ./docs
    """
    configure_logging(verbose)
    cwd = Path.cwd()

    try:
        cfg = load_config(cwd / config)
    except EnvDocError as e:
        fail(f"Could not load config file: {e}")

    on_file = None
    if verbose:
        def on_file(rel: str) -> None:
            console.print(f"[dim]  scanning {escape(rel)}[/dim]")

    try:
        result = generate_docs(cfg, Path(output), cwd=cwd, on_file=on_file)
    except EnvDocError as e:
        fail(str(e))
    except Exception as e:
        logger.info("Unhandled error", exc_info=True)
        fail(f"Unexpected error: {e}")

    if verbose:
        console.print(f"[dim]  {len(result.env_files)} declaration files, {result.scanned_files} scanned files[/dim]")
    console.print(f"[green]Documentation generated successfully at {escape(str(result.output_path))}[/green]")


@scan_app.command()
def scan(
    env: str = typer.Option(
        DEFAULT_ENV_PATH,
        "--env",
        "-e",
        help="Custom .env file path",
    ),
    output: UsageFormat = typer.Option(
        UsageFormat.md,
        "--output",
        "-o",
        help="Output format (md/json/html)",
    ),
    ignore: Optional[str] = typer.Option(
        None,
        "--ignore",
        "-i",
        help="Additional ignore patterns (comma-separated)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    Scan the project for usages of the variables declared in a .env file.

    Examples:
        env-scan
        env-scan --env .env.example --output html --ignore "dist/**,coverage/**"
    """
    configure_logging(verbose)

    try:
        path = scan_env_usage(env, output, ignore=ignore, cwd=Path.cwd())
    except EnvDocError as e:
        fail(str(e))
    except Exception as e:
        logger.info("Unhandled error", exc_info=True)
        fail(f"Unexpected error: {e}")

    if verbose:
        console.print(f"[dim]Wrote {escape(str(path))}[/dim]")
    console.print(f"[green]{SUCCESS_MESSAGE}[/green]")


def main() -> None:
    app()


def scan_main() -> None:
    scan_app()


if __name__ == "__main__":
    app()
