"""
使用情况扫描

对每个文件内容逐个变量应用合并后的使用模式，统计匹配次数。
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, Optional

from env_doc.core.discovery import relative_posix
from env_doc.core.models import UsageAggregate
from env_doc.core.patterns import build_usage_regex, default_templates
from env_doc.errors import ScanFileError

logger = logging.getLogger(__name__)

# 二进制检测读取的字节数
BINARY_SNIFF_SIZE = 8192

# 进度回调类型 (相对路径)
ProgressCallback = Callable[[str], None]


def read_source_file(file_path: Path) -> str:
    """
    读取待扫描文件

    Raises:
        ScanFileError: 文件无法读取或为二进制文件
    """
    try:
        data = Path(file_path).read_bytes()
    except OSError as e:
        raise ScanFileError(f"Failed to read {file_path}: {e}") from e
    if b"\x00" in data[:BINARY_SNIFF_SIZE]:
        raise ScanFileError(f"Skipping binary file {file_path}")
    return data.decode("utf-8", errors="replace")


class UsageScanner:
    """
    环境变量使用扫描器

    Attributes:
        names: 待搜索的变量名
        templates: 使用模式模板，默认为 USAGE_PATTERNS
    """

    def __init__(self, names: Iterable[str], templates: Optional[Iterable[str]] = None):
        self.names = list(dict.fromkeys(names))
        self.templates = list(templates) if templates is not None else default_templates()
        self._regexes: dict[str, re.Pattern] = {
            name: build_usage_regex(name, self.templates) for name in self.names
        }

    def count(self, content: str, name: str) -> int:
        """统计单个变量在内容中的非重叠匹配次数"""
        regex = self._regexes.get(name)
        if regex is None:
            regex = self._regexes[name] = build_usage_regex(name, self.templates)
        return sum(1 for _ in regex.finditer(content))

    def scan_content(self, content: str) -> dict[str, int]:
        """返回匹配次数大于 0 的变量"""
        counts: dict[str, int] = {}
        for name in self.names:
            n = self.count(content, name)
            if n > 0:
                counts[name] = n
        return counts

    def scan_files(
        self,
        files: Iterable[Path],
        cwd: Path,
        on_file: Optional[ProgressCallback] = None,
    ) -> dict[str, UsageAggregate]:
        """
        扫描文件列表

        Args:
            files: 待扫描文件（按发现顺序）
            cwd: 用于计算相对路径的工作目录
            on_file: 每扫描一个文件时的回调

        Returns:
            变量名到 UsageAggregate 的字典，包含未使用的变量
        """
        usage = {name: UsageAggregate() for name in self.names}

        for file_path in files:
            rel = relative_posix(file_path, cwd)
            try:
                content = read_source_file(file_path)
            except ScanFileError as e:
                logger.warning(str(e))
                continue

            if on_file:
                on_file(rel)

            for name, n in self.scan_content(content).items():
                usage[name].add(rel, n)

        return usage
