"""
env-doc - 环境变量文档生成器

扫描 .env 声明文件与项目源码，生成变量使用情况文档。
"""

__version__ = "2.0.0"
