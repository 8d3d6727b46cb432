"""
异常定义

仓库解析失败的分类。库函数 ``RemoteResolver.resolve`` 会吞掉这些异常并返回
None；只有 ``resolve_strict`` 和 CLI 会直接接触它们。
"""

from pathlib import Path
from typing import Optional


class ResolutionError(Exception):
    """仓库解析错误基类"""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class NoRepositoryFound(ResolutionError):
    """向上查找到文件系统根目录仍未发现仓库标记"""
    pass


class RemoteReadFailure(ResolutionError):
    """读取 origin 远程地址失败（远程不存在、git 命令出错等）"""
    pass


class UnrecognizedRemoteFormat(ResolutionError):
    """origin 地址既不是 SSH 简写也不是 HTTP(S) 形式"""

    def __init__(self, message: str, url: str, path: Optional[Path] = None):
        super().__init__(message, path)
        self.url = url
