"""
正则表达式模式定义

环境变量使用方式的匹配模板。每个模板中的 {name} 会被替换为
经过 re.escape 的变量名，所有模板以 | 连接后统一计数。
"""

import re
from typing import Iterable

from env_doc.errors import ConfigError

NAME_PLACEHOLDER = "{name}"

# 变量名之后不能紧跟标识符字符，避免 API_KEY 命中 API_KEY_BACKUP
IDENTIFIER_BOUNDARY = r"(?![A-Za-z0-9_$])"

# 默认使用模式 (JavaScript / dotenv 生态)，按顺序独立匹配后求和
USAGE_PATTERNS: list[tuple[str, str]] = [
    ("process_env_dot", r"process\.env\.{name}"),
    ("process_env_bracket", r"process\.env\[\s*(?:'{name}'|\"{name}\")\s*\]"),
    ("process_bracket_env_bracket", r"process\[\s*(?:'env'|\"env\")\s*\]\[\s*(?:'{name}'|\"{name}\")\s*\]"),
    ("process_bracket_env_dot", r"process\[\s*(?:'env'|\"env\")\s*\]\.{name}"),
    ("dotenv_require_config", r"require\(\s*(?:'dotenv'|\"dotenv\")\s*\)\.config\(\)\.{name}"),
    ("dotenv_config", r"\bconfig\(\)\.{name}"),
]


def validate_templates(templates: Iterable[str]) -> list[str]:
    """检查自定义模板是否包含 {name} 占位符且能编译"""
    checked: list[str] = []
    for template in templates:
        if NAME_PLACEHOLDER not in template:
            raise ConfigError(
                f"Usage pattern must contain the {NAME_PLACEHOLDER} placeholder: {template}"
            )
        try:
            re.compile(template.replace(NAME_PLACEHOLDER, "X"))
        except re.error as e:
            raise ConfigError(f"Invalid usage pattern {template!r}: {e}") from e
        checked.append(template)
    return checked


def default_templates() -> list[str]:
    return [template for _, template in USAGE_PATTERNS]


def build_usage_regex(name: str, templates: Iterable[str]) -> re.Pattern:
    """为单个变量构建合并后的匹配正则"""
    escaped = re.escape(name)
    alternatives = [
        f"(?:{template.replace(NAME_PLACEHOLDER, escaped)}){IDENTIFIER_BOUNDARY}"
        for template in templates
    ]
    return re.compile("|".join(alternatives))
