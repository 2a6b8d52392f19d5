"""
报告器基类 - 定义报告器接口
"""

from typing import Any, Protocol

from env_doc.core.models import EnvData

UNUSED_WARNING = "⚠️ This variable is defined but not used in the project."
NOT_SET = "Not set"


def metadata_label(key: str) -> str:
    """插件字段名转换为显示标签"""
    return key.replace("_", " ").replace("-", " ").strip().capitalize()


def format_metadata_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


class Reporter(Protocol):
    """报告器协议"""

    format_name: str
    default_filename: str

    def render(self, data: EnvData) -> str:
        """渲染报告文本"""
        ...
