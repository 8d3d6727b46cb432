"""
issue-linker - 在源码注释中识别 (#123) 形式的 issue 引用，并链接到仓库托管平台
"""

__version__ = "0.1.0"
