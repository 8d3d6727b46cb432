"""
仓库解析器模块 - 从文件路径解析出仓库网页地址和托管平台

流程：
1. 从文件所在目录逐级向上查找仓库标记（.git）
2. 在仓库根目录读取 origin 远程地址
3. 把 SSH 简写 / HTTP(S) 地址归一化为 https 网页地址
4. 按主机名判断托管平台

所有失败都是"静默缺失"：``resolve`` 返回 None，不会向调用方抛出异常。
"""

import logging
import os
import re
from pathlib import Path
from typing import Callable, Optional, Union

from git.cmd import Git
from git.exc import GitError

from issue_linker.config import ResolverConfig
from issue_linker.core.models import Provider, RepoInfo
from issue_linker.exceptions import (
    ResolutionError,
    NoRepositoryFound,
    RemoteReadFailure,
    UnrecognizedRemoteFormat,
)

logger = logging.getLogger(__name__)


# ============================================================
# 配置常量
# ============================================================

# git@host:path(.git)
SSH_URL_PATTERN = re.compile(r"^git@([^:]+):(.+?)(?:\.git)?$")

# http(s)://[user[:password]@]host/path，.git 已提前去掉
HTTP_URL_PATTERN = re.compile(r"^https?://(?:[^/@]+@)?([^/@]+)/(.+)$")

# 主机名子串到平台的映射（按顺序判断）
PROVIDER_HOSTS: list[tuple[str, Provider]] = [
    ("github.com", Provider.GITHUB),
    ("gitlab.com", Provider.GITLAB),
    ("bitbucket.org", Provider.BITBUCKET),
]

# 各平台 issue 路径
ISSUE_PATH_TEMPLATES: dict[Provider, str] = {
    Provider.GITHUB: "{web_url}/issues/{number}",
    Provider.GITLAB: "{web_url}/-/issues/{number}",
    Provider.BITBUCKET: "{web_url}/issues/{number}",
    Provider.GIT: "{web_url}/issues/{number}",
}

PathLike = Union[str, os.PathLike]

# 读取远程地址：接收仓库根目录，返回原始 URL，失败时抛异常
OriginUrlReader = Callable[[Path], str]

# 文件系统探测：判断路径是否存在
PathProbe = Callable[[Path], bool]


# ============================================================
# 纯函数
# ============================================================

def parse_remote_url(url: str) -> Optional[tuple[str, str]]:
    """
    解析远程地址

    Args:
        url: git remote 地址

    Returns:
        (host, path)，无法识别时返回 None
    """
    url = url.strip()

    if url.startswith("git@"):
        match = SSH_URL_PATTERN.match(url.rstrip("/"))
    elif url.startswith("http://") or url.startswith("https://"):
        stripped = url.rstrip("/")
        if stripped.endswith(".git"):
            stripped = stripped[:-len(".git")]
        match = HTTP_URL_PATTERN.match(stripped)
    else:
        return None

    if not match:
        return None

    host, path = match.group(1), match.group(2).rstrip("/")
    # 只去掉一层 .git；空路径或剩余 .git 后缀都视为无法识别
    if not host or not path or path.endswith(".git"):
        return None
    return host, path


def classify_provider(host: str) -> Provider:
    """根据主机名判断托管平台"""
    for needle, provider in PROVIDER_HOSTS:
        if needle in host:
            return provider
    return Provider.GIT


def build_issue_url(web_url: str, issue_number: str, provider: Provider) -> str:
    """构造 issue 地址"""
    template = ISSUE_PATH_TEMPLATES.get(provider, ISSUE_PATH_TEMPLATES[Provider.GIT])
    return template.format(web_url=web_url, number=issue_number)


def repo_info_from_url(url: str) -> Optional[RepoInfo]:
    """把远程地址转换为 RepoInfo，无法识别时返回 None"""
    parsed = parse_remote_url(url)
    if parsed is None:
        return None
    host, path = parsed
    return RepoInfo(
        web_url=f"https://{host}/{path}",
        provider_name=classify_provider(host),
        repo_slug=path,
    )


# ============================================================
# 外部协作者
# ============================================================

def read_origin_url(repo_root: Path, remote_name: str = "origin") -> str:
    """
    读取远程地址，相当于 ``git config --get remote.<name>.url``

    Raises:
        RemoteReadFailure: 远程不存在、git 不可用或命令失败
    """
    try:
        output = Git(str(repo_root)).config("--get", f"remote.{remote_name}.url")
    except (GitError, OSError) as e:
        raise RemoteReadFailure(
            f"Cannot read remote '{remote_name}': {e}", path=repo_root
        ) from e
    return output.strip()


# ============================================================
# 解析器
# ============================================================

class RemoteResolver:
    """
    仓库解析器

    不做任何缓存：每次调用都会重新执行一次远程地址读取。
    需要吞吐的调用方应自行按仓库根目录做记忆化（见 ``resolve_root``）。
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        origin_reader: Optional[OriginUrlReader] = None,
        path_exists: Optional[PathProbe] = None,
    ):
        self.config = config or ResolverConfig()
        self._origin_reader = origin_reader or self._default_reader
        self._path_exists = path_exists or os.path.exists

    def _default_reader(self, repo_root: Path) -> str:
        return read_origin_url(repo_root, self.config.remote_name)

    def find_repository_root(self, file_path: PathLike) -> Optional[Path]:
        """
        从文件所在目录向上查找仓库根目录

        Returns:
            仓库根目录，走到文件系统根仍未找到时返回 None
        """
        return self.find_root_from(Path(os.path.dirname(os.path.abspath(file_path))))

    def find_root_from(self, directory: Path) -> Optional[Path]:
        """从给定目录（含）向上查找仓库根目录"""
        while True:
            if self._path_exists(directory / self.config.marker_name):
                return directory
            parent = directory.parent
            if parent == directory:
                return None
            directory = parent

    def resolve_strict(self, file_path: PathLike) -> RepoInfo:
        """
        解析文件所属仓库，失败时抛出具体原因

        Raises:
            NoRepositoryFound: 未找到仓库
            RemoteReadFailure: 读取远程地址失败
            UnrecognizedRemoteFormat: 远程地址格式无法识别
        """
        root = self.find_repository_root(file_path)
        if root is None:
            raise NoRepositoryFound(
                f"No {self.config.marker_name} found above {file_path}",
                path=Path(file_path),
            )
        return self.resolve_root_strict(root)

    def resolve_root_strict(self, root: Path) -> RepoInfo:
        """解析已知仓库根目录，失败时抛出具体原因"""
        try:
            url = self._origin_reader(root)
        except RemoteReadFailure:
            raise
        except Exception as e:
            raise RemoteReadFailure(f"Cannot read remote: {e}", path=root) from e

        info = repo_info_from_url(url)
        if info is None:
            raise UnrecognizedRemoteFormat(
                f"Unrecognized remote URL: {url}", url=url, path=root
            )
        return info

    def resolve(self, file_path: PathLike) -> Optional[RepoInfo]:
        """解析文件所属仓库，任何失败都返回 None"""
        try:
            return self.resolve_strict(file_path)
        except ResolutionError as e:
            logger.debug(f"Repository resolution skipped for {file_path}: {e}")
            return None

    def resolve_root(self, root: Path) -> Optional[RepoInfo]:
        """解析已知仓库根目录，任何失败都返回 None"""
        try:
            return self.resolve_root_strict(root)
        except ResolutionError as e:
            logger.debug(f"Repository resolution skipped for {root}: {e}")
            return None
