"""
CLI 入口模块 - 使用 Typer 构建命令行界面

命令：
1. links    扫描文件或目录，输出注释中的 issue 链接
2. resolve  显示文件所属仓库的解析结果（失败时说明原因）
3. comments 列出文件中识别出的注释区域
4. version  显示版本
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from issue_linker.config import ResolverConfig, ScanConfig
from issue_linker.core.comments import scan_comments
from issue_linker.core.models import LinkScanResult, RepoInfo
from issue_linker.core.profiles import PLAINTEXT, detect_language
from issue_linker.document import TextDocument
from issue_linker.exceptions import (
    ResolutionError,
    NoRepositoryFound,
    RemoteReadFailure,
    UnrecognizedRemoteFormat,
)
from issue_linker.filters import PathspecFilter
from issue_linker.linker import DocumentLinker
from issue_linker.repo.resolver import RemoteResolver
from issue_linker.reporters import RichReporter, JsonReporter

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="issue-linker",
    help="Issue-Linker: turn (#123) references in code comments into issue links.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()

# 解析失败提示模板
RESOLUTION_ERROR_MESSAGES: dict[type, str] = {
    NoRepositoryFound: """
📂 No git repository found above {path}.

Suggestions:
- Run the command inside a cloned repository
- Check that the repository has a .git directory
""",
    RemoteReadFailure: """
🌐 Could not read the '{remote}' remote.

Possible causes:
- The repository has no '{remote}' remote configured
- git is not installed or not on PATH

Suggestions:
- Check with: git config --get remote.{remote}.url
- Use --remote to pick another remote
""",
    UnrecognizedRemoteFormat: """
❓ Remote URL is not in a supported format: {url}

Supported formats:
- git@host:owner/repo.git
- https://host/owner/repo.git
""",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_resolution_error(error: ResolutionError, remote: str) -> str:
    template = RESOLUTION_ERROR_MESSAGES.get(type(error), "{error}")
    return template.format(
        path=error.path,
        remote=remote,
        url=getattr(error, "url", ""),
        error=error,
    )


def _collect_files(
    target: Path,
    scan_config: ScanConfig,
    all_files: bool,
    resolver: RemoteResolver,
) -> list[Path]:
    """
    收集待扫描文件；目录扫描默认只保留可识别语言的文件

    .gitignore 规则以所在仓库根目录为准，扫描子目录时同样生效。
    """
    if target.is_file():
        return [target]

    filter_root = resolver.find_root_from(target) or target
    path_filter = PathspecFilter(filter_root, scan_config)
    return [
        file_path
        for file_path in path_filter.iter_files(target)
        if all_files or detect_language(file_path.name) != PLAINTEXT
    ]


def _require_path(target: str) -> Path:
    path = Path(target).resolve()
    if not path.exists():
        console.print(f"[red]Error:[/red] Path does not exist: {escape(target)}")
        raise typer.Exit(1)
    return path


@app.command()
def links(
    target: str = typer.Argument(
        ".",
        help="File or directory to scan",
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Language identifier to use instead of detecting it from the file name",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    remote: str = typer.Option(
        "origin",
        "--remote",
        envvar="ISSUE_LINKER_REMOTE",
        help="Git remote whose URL is used to build issue links",
    ),
    all_files: bool = typer.Option(
        False,
        "--all-files",
        help="Also scan files whose language is not recognized",
    ),
    no_gitignore: bool = typer.Option(
        False,
        "--no-gitignore",
        help="Do not skip files matched by .gitignore",
    ),
    show_empty: bool = typer.Option(
        False,
        "--show-empty",
        help="List files without links in the rich report",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """
    Find issue references in comments and print their links.

    Examples:
        issue-linker links
        issue-linker links src/app.ts
        issue-linker links . --format json
    """
    _configure_logging(verbose)
    target_path = _require_path(target)

    scan_config = ScanConfig(respect_gitignore=not no_gitignore)
    resolver = RemoteResolver(ResolverConfig(remote_name=remote))
    linker = DocumentLinker(resolver)

    # 同一次命令内按仓库根目录记忆化，避免每个文件都调用一次 git
    repo_cache: dict[Path, Optional[RepoInfo]] = {}
    results: list[LinkScanResult] = []

    for file_path in _collect_files(target_path, scan_config, all_files, resolver):
        try:
            document = TextDocument.from_path(file_path, language_id=language)
        except OSError as e:
            logger.warning(f"Failed to read {file_path}: {e}")
            continue

        repo_info = None
        root = resolver.find_repository_root(file_path)
        if root is not None:
            if root not in repo_cache:
                repo_cache[root] = resolver.resolve_root(root)
            repo_info = repo_cache[root]

        result = LinkScanResult(
            file_path=str(file_path),
            language_id=document.language_id,
            repo_info=repo_info,
        )
        if repo_info is not None:
            result.links = linker.provide_links_for_repo(document, repo_info)
        results.append(result)

    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console, show_empty=show_empty)

    reporter.report(results, target)


@app.command()
def resolve(
    target: str = typer.Argument(
        ".",
        help="File or directory inside a repository",
    ),
    remote: str = typer.Option(
        "origin",
        "--remote",
        envvar="ISSUE_LINKER_REMOTE",
        help="Git remote to read",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Show the repository web URL and provider for a path."""
    _configure_logging(verbose)
    path = _require_path(target)

    resolver = RemoteResolver(ResolverConfig(remote_name=remote))

    try:
        if path.is_dir():
            # 目录本身也可能是仓库根目录
            root = resolver.find_root_from(path)
            if root is None:
                raise NoRepositoryFound(f"No repository found above {path}", path=path)
            info = resolver.resolve_root_strict(root)
        else:
            info = resolver.resolve_strict(path)
    except ResolutionError as e:
        console.print(f"[red]Error:[/red] {escape(_format_resolution_error(e, remote))}")
        raise typer.Exit(1)

    if format == "json":
        typer.echo(json.dumps({
            "web_url": info.web_url,
            "provider_name": info.provider_name.value,
            "repo_slug": info.repo_slug,
        }, indent=2, ensure_ascii=False))
        return

    console.print(f"[bold]Provider:[/bold] {info.provider_name.display_name}")
    console.print(f"[bold]Web URL:[/bold]  {escape(info.web_url)}")
    console.print(f"[bold]Slug:[/bold]     {escape(str(info.repo_slug))}")


@app.command()
def comments(
    target: str = typer.Argument(..., help="File to scan"),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Language identifier to use instead of detecting it from the file name",
    ),
) -> None:
    """List the comment regions detected in a file."""
    path = _require_path(target)
    if not path.is_file():
        console.print(f"[red]Error:[/red] Path is not a file: {escape(target)}")
        raise typer.Exit(1)

    document = TextDocument.from_path(path, language_id=language)

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("位置", style="cyan", width=12)
    table.add_column("偏移", justify="right", width=14)
    table.add_column("注释")

    count = 0
    for span in scan_comments(document.text, document.language_id):
        count += 1
        start = document.position_at(span.start_offset)
        preview = span.text if len(span.text) <= 80 else span.text[:77] + "..."
        # Text 包装，注释中的 [..] 不会被当成 Rich 标记
        table.add_row(
            f"{start.line + 1}:{start.character + 1}",
            f"{span.start_offset}-{span.end_offset}",
            Text(preview.replace("\n", "⏎")),
        )

    console.print(f"[bold]{escape(path.name)}[/bold] [dim]({escape(document.language_id)})[/dim]")
    console.print(table)
    console.print(f"[dim]{count} comment regions[/dim]")


@app.command()
def version() -> None:
    """Show the version of Issue-Linker."""
    from issue_linker import __version__
    console.print(f"[bold]Issue-Linker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
