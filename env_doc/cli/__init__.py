"""
CLI Layer - 命令行接口层

提供 env-doc 与 env-scan 两个命令行入口。
"""

from env_doc.cli.app import app, scan_app, generate, scan, main, scan_main

__all__ = [
    "app",
    "scan_app",
    "generate",
    "scan",
    "main",
    "scan_main",
]
