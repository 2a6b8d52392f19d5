"""
文件发现

将 glob 模式展开为待处理的文件列表。忽略模式使用 gitignore 语义
（基于 pathspec 库），在遍历时即生效，被忽略的目录不会进入。
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

import pathspec

logger = logging.getLogger(__name__)


class IgnoreFilter:
    """基于 pathspec 的忽略规则"""

    def __init__(self, patterns: Iterable[str]):
        self.patterns = [p for p in patterns if p and p.strip()]
        self._spec = pathspec.PathSpec.from_lines("gitwildmatch", self.patterns)

    def should_ignore(self, relative: str, is_dir: bool = False) -> bool:
        """
        判断相对路径是否被忽略

        Args:
            relative: 相对于根目录的 POSIX 路径
            is_dir: 是否为目录（目录以 / 结尾参与匹配）
        """
        if not self.patterns:
            return False
        if is_dir:
            relative = relative.rstrip("/") + "/"
        return self._spec.match_file(relative)


def relative_posix(path: Path, root: Path) -> str:
    """返回 path 相对 root 的 POSIX 路径，不在 root 内时返回原路径"""
    try:
        return Path(path).resolve().relative_to(Path(root).resolve()).as_posix()
    except ValueError:
        return Path(path).as_posix()


def _normalize_pattern(pattern: str, cwd: Path) -> Optional[str]:
    """
    将 glob 模式转换为锚定在 cwd 的 gitwildmatch 模式

    - 不含 / 的模式只匹配根目录下的文件（与 shell glob 一致）
    - 绝对路径先转换为相对路径，不在 cwd 内时返回 None
    """
    pattern = pattern.strip()
    if not pattern:
        return None

    if os.path.isabs(pattern):
        try:
            pattern = Path(pattern).relative_to(cwd).as_posix()
        except ValueError:
            return None

    while pattern.startswith("./"):
        pattern = pattern[2:]

    if pattern.startswith("**/") or pattern.startswith("/"):
        return pattern
    return "/" + pattern


def _walk(cwd: Path, ignore: IgnoreFilter) -> list[str]:
    """遍历 cwd，返回未被忽略的文件相对路径（字典序）"""
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(cwd):
        rel_dir = Path(dirpath).relative_to(cwd).as_posix()
        prefix = "" if rel_dir == "." else rel_dir + "/"

        dirnames[:] = sorted(
            d for d in dirnames
            if not ignore.should_ignore(prefix + d, is_dir=True)
        )
        for name in filenames:
            rel = prefix + name
            if not ignore.should_ignore(rel):
                files.append(rel)

    files.sort()
    return files


def discover_files(
    patterns: Iterable[str],
    ignore: Iterable[str] = (),
    cwd: Optional[Path] = None,
) -> list[Path]:
    """
    展开 glob 模式为去重后的文件列表

    顺序：按模式给出的顺序，同一模式内按相对路径字典序。
    没有匹配的模式不会报错。

    Args:
        patterns: glob 模式列表（** 可跨越任意层目录，包括零层）
        ignore: gitignore 风格的忽略模式
        cwd: 工作目录，默认为当前目录

    Returns:
        绝对路径列表
    """
    root = Path(cwd or Path.cwd()).resolve()
    ignore_filter = IgnoreFilter(ignore)

    candidates: Optional[list[str]] = None
    seen: set[Path] = set()
    results: list[Path] = []

    for pattern in patterns:
        normalized = _normalize_pattern(pattern, root)
        if normalized is None:
            logger.warning(f"Skipping pattern outside working directory: {pattern}")
            continue

        if candidates is None:
            candidates = _walk(root, ignore_filter)

        spec = pathspec.PathSpec.from_lines("gitwildmatch", [normalized])
        matched = [rel for rel in candidates if spec.match_file(rel)]
        if not matched:
            logger.debug(f"Pattern matched no files: {pattern}")

        for rel in matched:
            resolved = (root / rel).resolve()
            if resolved in seen:
                continue
            seen.add(resolved)
            results.append(root / rel)

    return results
