"""
配置加载

读取 env-doc.config.json 并校验字段类型。配置在启动时加载一次，之后只读。
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from env_doc.core.patterns import validate_templates
from env_doc.errors import ConfigError

DEFAULT_CONFIG_PATH = "./env-doc.config.json"

DEFAULT_INPUT_PATTERNS: list[str] = ["**/.env*"]

DEFAULT_INPUT_IGNORE: list[str] = [
    "node_modules/**",
    ".git/**",
]

DEFAULT_SCAN_PATTERNS: list[str] = [
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.mjs",
    "**/*.cjs",
    "**/*.vue",
    "**/*.py",
    "**/*.rb",
    "**/*.php",
    "**/*.html",
    "**/*.css",
    "**/*.json",
    "**/*.yaml",
    "**/*.yml",
    "**/*.toml",
    "**/*.ini",
    "**/*.xml",
    "**/*.txt",
]

DEFAULT_SCAN_IGNORE: list[str] = [
    "node_modules/**",
    "dist/**",
    "build/**",
    ".git/**",
]


def _string_list(section: dict, key: str, where: str, default: list[str]) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return tuple(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{where}.{key}' must be a list of strings")
    return tuple(value)


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be an object")
    return value


@dataclass(frozen=True)
class InputConfig:
    """声明文件来源"""
    files: tuple[str, ...] = ()
    patterns: tuple[str, ...] = tuple(DEFAULT_INPUT_PATTERNS)
    ignore: tuple[str, ...] = tuple(DEFAULT_INPUT_IGNORE)

    @property
    def sources(self) -> list[str]:
        return [*self.files, *self.patterns]


@dataclass(frozen=True)
class OutputConfig:
    """输出格式和文件名 (file 为 None 时按格式取默认名)"""
    format: str = "markdown"
    file: Optional[str] = None


@dataclass(frozen=True)
class ScanConfig:
    """扫描范围与额外的使用模式模板"""
    patterns: tuple[str, ...] = tuple(DEFAULT_SCAN_PATTERNS)
    ignore: tuple[str, ...] = tuple(DEFAULT_SCAN_IGNORE)
    usage_patterns: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnvDocConfig:
    """
    env-doc 配置

    Attributes:
        plugins: 按顺序加载的插件标识
        input: 声明文件来源
        output: 输出设置
        scan: 扫描设置
        exclude: 解析后排除的变量名通配符
        raw: 原始配置字典，供插件读取自定义字段
    """
    plugins: tuple[str, ...] = ()
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    exclude: tuple[str, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvDocConfig":
        """从字典构建配置，字段类型错误时抛出 ConfigError"""
        if not isinstance(data, dict):
            raise ConfigError("Config must be a JSON object")

        input_section = _section(data, "input")
        output_section = _section(data, "output")
        scan_section = _section(data, "scan")

        fmt = output_section.get("format", "markdown")
        if not isinstance(fmt, str):
            raise ConfigError("'output.format' must be a string")
        out_file = output_section.get("file")
        if out_file is not None and (not isinstance(out_file, str) or not out_file):
            raise ConfigError("'output.file' must be a non-empty string")

        usage_patterns = _string_list(scan_section, "usagePatterns", "scan", [])

        return cls(
            plugins=_string_list(data, "plugins", "config", []),
            input=InputConfig(
                files=_string_list(input_section, "files", "input", []),
                patterns=_string_list(input_section, "patterns", "input", DEFAULT_INPUT_PATTERNS),
                ignore=_string_list(input_section, "ignore", "input", DEFAULT_INPUT_IGNORE),
            ),
            output=OutputConfig(format=fmt, file=out_file),
            scan=ScanConfig(
                patterns=_string_list(scan_section, "patterns", "scan", DEFAULT_SCAN_PATTERNS),
                ignore=_string_list(scan_section, "ignore", "scan", DEFAULT_SCAN_IGNORE),
                usage_patterns=tuple(validate_templates(usage_patterns)),
            ),
            exclude=_string_list(data, "exclude", "config", []),
            raw=data,
        )


def load_config(path: Path | str) -> EnvDocConfig:
    """
    加载 JSON 配置文件

    Raises:
        ConfigError: 文件不存在、无法读取或内容无效
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {config_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    return EnvDocConfig.from_dict(data)
