"""
数据模型定义

声明变量、使用记录及其 JSON 序列化。
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class UsageOccurrence:
    """
    单个文件中的使用记录

    Attributes:
        file: 相对于工作目录的文件路径 (POSIX 分隔符)
        count: 该文件中的匹配次数
    """
    file: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "count": self.count}


@dataclass
class UsageAggregate:
    """
    变量的使用汇总

    occurrences 按文件发现顺序排列，不排序。
    """
    occurrences: list[UsageOccurrence] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return sum(o.count for o in self.occurrences)

    @property
    def unused(self) -> bool:
        return self.total_count == 0

    def add(self, file: str, count: int) -> None:
        """追加一条使用记录，count <= 0 时忽略"""
        if count > 0:
            self.occurrences.append(UsageOccurrence(file=file, count=count))

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCount": self.total_count,
            "occurrences": [o.to_dict() for o in self.occurrences],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UsageAggregate":
        return cls(
            occurrences=[
                UsageOccurrence(file=o["file"], count=o["count"])
                for o in data.get("occurrences", [])
            ]
        )


@dataclass
class DeclaredVariable:
    """
    声明文件中的一个变量

    Attributes:
        name: 变量名 (区分大小写)
        value: 等号后的原始值，已去除首尾空白
        description: 紧邻其上的注释行，以换行连接
        usage: 扫描后附加的使用汇总
        metadata: 插件附加的任意字段
    """
    name: str
    value: str = ""
    description: str = ""
    usage: Optional[UsageAggregate] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def usage_count(self) -> int:
        return self.usage.total_count if self.usage else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "description": self.description,
            "usage": self.usage.to_dict() if self.usage is not None else None,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "DeclaredVariable":
        usage = data.get("usage")
        return cls(
            name=name,
            value=data.get("value", ""),
            description=data.get("description", ""),
            usage=UsageAggregate.from_dict(usage) if usage is not None else None,
            metadata=dict(data.get("metadata") or {}),
        )


# 声明文件路径 -> 变量名 -> 变量
EnvData = dict[str, dict[str, DeclaredVariable]]


def env_data_to_dict(data: EnvData) -> dict[str, dict[str, Any]]:
    """序列化为可 JSON 化的字典，保持输入顺序"""
    return {
        source: {name: var.to_dict() for name, var in variables.items()}
        for source, variables in data.items()
    }


def env_data_from_dict(raw: dict[str, dict[str, Any]]) -> EnvData:
    """从 env_data_to_dict 的输出还原"""
    return {
        source: {
            name: DeclaredVariable.from_dict(name, payload)
            for name, payload in variables.items()
        }
        for source, variables in raw.items()
    }
