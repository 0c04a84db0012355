"""Display service for scan results"""
from typing import Optional

from rich.console import Console
from rich.markup import escape

from gitree.formatters import RenderOptions, render_tree
from gitree.models import ScanResult


class DisplayService:
    def __init__(
        self,
        verbose: bool = False,
        color: str = "auto",
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.color = color
        if console is None:
            console = Console(
                highlight=False,
                force_terminal=True if color == "always" else None,
                no_color=True if color == "never" else None,
            )
        self.console = console
        self.error_console = error_console or Console(stderr=True, highlight=False)

    @property
    def color_enabled(self) -> bool:
        if self.color == "never":
            return False
        return self.console.is_terminal and not self.console.no_color

    def render_options(self, show_root: bool = True) -> RenderOptions:
        return RenderOptions(color=self.color_enabled, show_root=show_root)

    def display_tree(self, result: ScanResult, show_root: bool = True) -> None:
        """Print the repository tree to stdout."""
        text = render_tree(result.tree, self.render_options(show_root))
        self.console.print(text, end="", soft_wrap=True)

    def display_diagnostics(self, result: ScanResult) -> None:
        """Print skipped directories and failed repositories to stderr."""
        if not self.verbose:
            if result.errors:
                self.error_console.print(
                    f"[yellow]{len(result.errors)} directories skipped (use -v for details)[/yellow]"
                )
            return

        for error in result.errors:
            self.error_console.print(f"[yellow]skipped[/yellow] {escape(str(error))}")
        failed = [
            repo for repo in result.repositories
            if repo.error or (repo.status is not None and repo.status.error)
        ]
        for repo in failed:
            message = repo.error or repo.status.error
            self.error_console.print(f"[red]{escape(repo.name)}[/red]: {escape(message)}")

        self.error_console.print(
            f"[dim]{result.total_repos} repositories in {result.total_scanned} directories, "
            f"{result.duration:.2f}s, {result.success_rate():.0%} ok[/dim]"
        )
