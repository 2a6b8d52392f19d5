"""
DotEnv 文件解析

解析 .env 声明文件，提取变量及其上方的注释说明。
"""

import logging
from pathlib import Path

from env_doc.core.models import DeclaredVariable
from env_doc.errors import DeclarationFileError

logger = logging.getLogger(__name__)


def read_dotenv_file(file_path: Path) -> str:
    """读取声明文件内容，失败时抛出 DeclarationFileError"""
    try:
        return Path(file_path).read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise DeclarationFileError(f"Failed to read {file_path}: {e}") from e


def parse_dotenv_file(file_path: Path) -> dict[str, DeclaredVariable]:
    """解析 .env 文件，读取失败时返回空字典"""
    try:
        content = read_dotenv_file(file_path)
    except DeclarationFileError as e:
        logger.warning(str(e))
        return {}
    return parse_dotenv_content(content)


def parse_dotenv_content(content: str) -> dict[str, DeclaredVariable]:
    """
    解析 .env 文件内容字符串

    规则：
    - 以 # 开头的行累积为待定注释
    - 含 = 的行在第一个 = 处拆分，值中其余的 = 原样保留
    - 空行和无法识别的行直接跳过，不清空待定注释

    Args:
        content: 文件内容

    Returns:
        变量名到 DeclaredVariable 的有序字典
    """
    variables: dict[str, DeclaredVariable] = {}
    pending_comment: list[str] = []

    for line in content.split("\n"):
        line = line.strip()

        if line.startswith("#"):
            pending_comment.append(line[1:].strip())
            continue

        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        variables[key] = DeclaredVariable(
            name=key,
            value=value.strip(),
            description="\n".join(pending_comment),
        )
        pending_comment = []

    return variables
