"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式
"""

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from issue_linker.core.models import LinkScanResult, Provider


# 平台配色
PROVIDER_STYLES: dict[Provider, str] = {
    Provider.GITHUB: "white",
    Provider.GITLAB: "dark_orange",
    Provider.BITBUCKET: "blue",
    Provider.GIT: "cyan",
}


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None, show_empty: bool = False):
        self.console = console or Console()
        self.show_empty = show_empty

    def report(self, results: list[LinkScanResult], target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self._print_repo_panel(results, target)

        for result in results:
            if result.links or self.show_empty:
                self._print_document(result)

        self._print_summary(results)

    def _print_repo_panel(self, results: list[LinkScanResult], target: str) -> None:
        """打印仓库信息面板"""
        repos = {r.repo_info for r in results if r.repo_info is not None}

        content = Text()
        content.append("目标: ", style="bold")
        content.append(f"{target}\n")
        if not repos:
            content.append("未找到可识别的仓库", style="yellow")
        for repo in sorted(repos, key=lambda r: r.web_url):
            style = PROVIDER_STYLES.get(repo.provider_name, "cyan")
            content.append(f"{repo.provider_name.display_name}: ", style=f"bold {style}")
            content.append(f"{repo.web_url}\n", style="dim")

        self.console.print(Panel(
            content,
            title="[bold]🔗 Issue 链接[/bold]",
            border_style="cyan",
        ))

    def _print_document(self, result: LinkScanResult) -> None:
        """打印单个文档的链接"""
        self.console.print()
        # 路径可能含 [id] 之类的方括号，不能按 Rich 标记解析
        heading = Text()
        heading.append(f"◆ {result.file_path}", style="bold")
        heading.append(f" ({result.language_id})", style="dim")
        self.console.print(heading)

        if not result.links:
            self.console.print("  [dim]无链接[/dim]")
            return

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("位置", style="cyan", width=12)
        table.add_column("Issue", justify="right", width=10)
        table.add_column("地址")

        for link in result.links:
            start = link.range.start
            table.add_row(
                f"{start.line + 1}:{start.character + 1}",
                f"#{link.issue_number}",
                Text(link.target_url, style=Style(link=link.target_url)),
            )

        self.console.print(table)

    def _print_summary(self, results: list[LinkScanResult]) -> None:
        """打印总结"""
        link_count = sum(len(r.links) for r in results)
        linked_docs = sum(1 for r in results if r.links)
        no_repo = sum(1 for r in results if r.repo_info is None)

        self.console.print()
        summary = (
            f"扫描 [bold]{len(results)}[/bold] 个文件，"
            f"在 [bold]{linked_docs}[/bold] 个文件中找到 [green]{link_count}[/green] 个链接"
        )
        if no_repo:
            summary += f"\n[yellow]{no_repo}[/yellow] 个文件不在可识别的仓库中"
        self.console.print(Panel(summary, border_style="green" if link_count else "dim"))
        self.console.print()
