"""
错误类型定义

只有 ConfigError 和 OutputWriteError 会中止运行，
其余错误由调用方记录日志后跳过。
"""


class EnvDocError(Exception):
    """env-doc 所有错误的基类"""


class ConfigError(EnvDocError):
    """配置文件缺失、无法解析或字段类型错误"""


class DeclarationFileError(EnvDocError):
    """声明文件（.env）无法读取"""


class PluginLoadError(EnvDocError):
    """插件未找到或构造失败"""


class ScanFileError(EnvDocError):
    """被扫描文件无法读取或为二进制文件"""


class OutputWriteError(EnvDocError):
    """无法创建输出目录或写入报告"""
