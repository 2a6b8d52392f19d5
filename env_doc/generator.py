"""
文档生成流程

固定顺序：
1. 加载插件
2. 发现声明文件
3. 逐个解析 → beforeParse → 排除过滤
4. 扫描源码使用情况
5. 渲染报告 → beforeOutput
6. 写入输出文件
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from env_doc.config import EnvDocConfig
from env_doc.core import (
    EnvData,
    UsageScanner,
    default_templates,
    discover_files,
    filter_excluded,
    parse_dotenv_file,
    relative_posix,
)
from env_doc.core.scanner import ProgressCallback
from env_doc.plugins import PluginHost, PluginRegistry, load_plugins
from env_doc.reporters import get_reporter, write_report

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """
    生成结果

    Attributes:
        output_path: 写入的报告文件
        content: 最终报告文本
        env_files: 处理过的声明文件 (相对路径)
        scanned_files: 扫描的源文件数量
        env_data: 渲染使用的变量数据
    """
    output_path: Path
    content: str
    env_files: list[str] = field(default_factory=list)
    scanned_files: int = 0
    env_data: EnvData = field(default_factory=dict)


def collect_env_data(
    config: EnvDocConfig,
    host: PluginHost,
    cwd: Path,
) -> EnvData:
    """发现并解析所有声明文件"""
    env_data: EnvData = {}
    env_files = discover_files(config.input.sources, config.input.ignore, cwd=cwd)
    if not env_files:
        logger.warning("No declaration files matched the configured input")

    for env_file in env_files:
        rel = relative_posix(env_file, cwd)
        logger.info(f"Parsing {rel}")
        variables = parse_dotenv_file(env_file)
        variables = host.run_before_parse(variables)
        env_data[rel] = filter_excluded(variables, config.exclude)

    return env_data


def attach_usage(
    env_data: EnvData,
    config: EnvDocConfig,
    cwd: Path,
    extra_ignore: list[str],
    on_file: Optional[ProgressCallback] = None,
) -> int:
    """扫描源码并把使用汇总附加到每个变量，返回扫描的文件数"""
    names = [name for variables in env_data.values() for name in variables]
    ignore = [*config.scan.ignore, *extra_ignore]
    files = discover_files(config.scan.patterns, ignore, cwd=cwd)

    templates = [*default_templates(), *config.scan.usage_patterns]
    scanner = UsageScanner(names, templates)
    usage = scanner.scan_files(files, cwd, on_file=on_file)

    for variables in env_data.values():
        for name, variable in variables.items():
            variable.usage = usage[name]

    return len(files)


def output_path_for(config: EnvDocConfig, output_dir: Path) -> Path:
    reporter = get_reporter(config.output.format)
    return Path(output_dir) / (config.output.file or reporter.default_filename)


def generate_docs(
    config: EnvDocConfig,
    output_dir: Path,
    cwd: Optional[Path] = None,
    registry: type[PluginRegistry] = PluginRegistry,
    on_file: Optional[ProgressCallback] = None,
) -> GenerationResult:
    """
    运行完整的文档生成流程

    Args:
        config: 已加载的配置
        output_dir: 输出目录 (相对路径基于 cwd)
        cwd: 工作目录，默认为当前目录
        registry: 插件注册表
        on_file: 每扫描一个源文件时的回调

    Returns:
        GenerationResult

    Raises:
        ConfigError: 输出格式不受支持
        OutputWriteError: 无法写入报告
    """
    cwd = Path(cwd or Path.cwd()).resolve()
    output_dir = Path(output_dir)
    if not output_dir.is_absolute():
        output_dir = cwd / output_dir

    reporter = get_reporter(config.output.format)
    output_path = output_path_for(config, output_dir)

    host = PluginHost()
    load_plugins(config.plugins, config, host, registry=registry)

    env_data = collect_env_data(config, host, cwd)

    # 声明文件和报告自身不参与扫描
    extra_ignore = ["/" + rel for rel in env_data]
    output_rel = relative_posix(output_path, cwd)
    if not Path(output_rel).is_absolute():
        extra_ignore.append("/" + output_rel)

    scanned = attach_usage(env_data, config, cwd, extra_ignore, on_file=on_file)

    content = reporter.render(env_data)
    content = host.run_before_output(content, env_data)

    write_report(content, output_path)

    return GenerationResult(
        output_path=output_path,
        content=content,
        env_files=list(env_data),
        scanned_files=scanned,
        env_data=env_data,
    )
