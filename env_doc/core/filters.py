"""
变量排除过滤
"""

import fnmatch
from typing import Iterable

from env_doc.core.models import DeclaredVariable


def is_excluded(name: str, patterns: Iterable[str]) -> bool:
    """变量名完整匹配任一通配符模式 (区分大小写)"""
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def filter_excluded(
    variables: dict[str, DeclaredVariable],
    patterns: Iterable[str],
) -> dict[str, DeclaredVariable]:
    """返回去除被排除变量后的新字典，保持原顺序"""
    patterns = list(patterns)
    if not patterns:
        return dict(variables)
    return {
        name: var for name, var in variables.items()
        if not is_excluded(name, patterns)
    }
