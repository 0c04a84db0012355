"""Command-line entry point for gitree"""

import sys

from rich.console import Console

from gitree.cli.args import parse_args
from gitree.config import Config
from gitree.core import Gitree
from gitree.exceptions import GitreeError
from gitree.logging_config import setup_logging
from gitree.services.display_service import DisplayService
from gitree.utils.threading import get_threading_info

console = Console(stderr=True)


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        config = Config(
            timeout=parsed_args.timeout,
            max_concurrency=parsed_args.workers,
            scan_timeout=parsed_args.scan_timeout,
            color=parsed_args.color,
            show_root=not parsed_args.no_root,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 2

    if parsed_args.debug:
        console.print("[yellow]Debug mode enabled[/yellow]")
        threading_info = get_threading_info()
        console.print("[yellow]Threading Information:[/yellow]")
        console.print(f"  Python version: {threading_info['python_version']}")
        console.print(f"  Threading mode: {threading_info['mode']}")
        console.print(f"  Workers: {config.workers}")
        console.print("[yellow]Configuration:[/yellow]")
        for key, value in config.to_dict().items():
            console.print(f"  {key}: {value}")

    gitree = Gitree(parsed_args.path, config)
    display = DisplayService(verbose=config.verbose, color=config.color, error_console=console)
    try:
        result = gitree.run()
    except KeyboardInterrupt:
        gitree.cancel()
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except GitreeError as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1

    display.display_tree(result, show_root=config.show_root)
    display.display_diagnostics(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
