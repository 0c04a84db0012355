"""Core functionality for gitree"""

import os
import threading
from typing import Dict, Optional, Union

from rich.text import Text

from gitree.config import Config
from gitree.constants import STATUS_NOT_COLLECTED
from gitree.formatters import RenderOptions, render_tree
from gitree.logging_config import get_logger
from gitree.models import ScanResult, Status
from gitree.services.scanner import scan
from gitree.services.status_service import StatusService

logger = get_logger(__name__)


class Gitree:
    """Runs the scan → status → tree pipeline for one root directory."""

    def __init__(self, root_path: str, config: Union[Config, dict, None] = None):
        """Initialize Gitree.

        Args:
            root_path: Directory to scan
            config: Configuration dict or Config object
        """
        self.root_path = os.path.abspath(root_path)
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.status_service = StatusService(self.config)
        self.cancel_event = threading.Event()

    def cancel(self) -> None:
        """Stop the run in progress as soon as possible, keeping partial results."""
        self.cancel_event.set()

    def scan(self, cancel_event: Optional[threading.Event] = None) -> ScanResult:
        """Discover repositories (raises ScanError when the root is unusable)."""
        return scan(self.root_path, cancel_event, self.config.root_label)

    def collect_statuses(
        self, result: ScanResult, cancel_event: Optional[threading.Event] = None
    ) -> Dict[str, Status]:
        """Extract statuses and attach them to the scanned repositories."""
        statuses = self.status_service.extract_batch(
            [repo.path for repo in result.repositories], cancel_event
        )
        for repo in result.repositories:
            status = statuses.get(repo.path)
            if status is None:
                repo.mark_failed(STATUS_NOT_COLLECTED)
            else:
                repo.attach_status(status)

        missing = result.total_repos - len(statuses)
        if missing:
            logger.warning(f"No status collected for {missing} repositories")
        return statuses

    def render(self, result: ScanResult, color: bool = False) -> Text:
        return render_tree(result.tree, RenderOptions(color=color, show_root=self.config.show_root))

    def _deadline_expired(self) -> None:
        logger.warning(f"Run exceeded {self.config.scan_timeout}s; cancelling")
        self.cancel_event.set()

    def run(self) -> ScanResult:
        """Scan and extract statuses under the configured overall deadline."""
        # Fresh signal per run
        self.cancel_event = threading.Event()
        timer = threading.Timer(self.config.scan_timeout, self._deadline_expired)
        timer.daemon = True
        timer.start()
        try:
            result = self.scan(self.cancel_event)
            if result.repositories:
                self.collect_statuses(result, self.cancel_event)
            return result
        finally:
            timer.cancel()
