"""
Core Layer - 核心层

包含声明文件解析、文件发现、使用扫描和数据模型。
"""

from env_doc.core.models import (
    DeclaredVariable,
    UsageOccurrence,
    UsageAggregate,
    EnvData,
    env_data_to_dict,
    env_data_from_dict,
)
from env_doc.core.dotenv import (
    parse_dotenv_content,
    parse_dotenv_file,
    read_dotenv_file,
)
from env_doc.core.discovery import (
    IgnoreFilter,
    discover_files,
    relative_posix,
)
from env_doc.core.patterns import (
    USAGE_PATTERNS,
    build_usage_regex,
    default_templates,
    validate_templates,
)
from env_doc.core.scanner import UsageScanner, read_source_file
from env_doc.core.filters import filter_excluded, is_excluded

__all__ = [
    # models
    "DeclaredVariable",
    "UsageOccurrence",
    "UsageAggregate",
    "EnvData",
    "env_data_to_dict",
    "env_data_from_dict",
    # dotenv
    "parse_dotenv_content",
    "parse_dotenv_file",
    "read_dotenv_file",
    # discovery
    "IgnoreFilter",
    "discover_files",
    "relative_posix",
    # patterns
    "USAGE_PATTERNS",
    "build_usage_regex",
    "default_templates",
    "validate_templates",
    # scanner
    "UsageScanner",
    "read_source_file",
    # filters
    "filter_excluded",
    "is_excluded",
]
