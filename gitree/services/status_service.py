"""Concurrent status extraction for many repositories."""

import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from gitree.config import Config
from gitree.constants import POLL_INTERVAL
from gitree.exceptions import ExtractionCancelled, InvariantError
from gitree.logging_config import get_logger
from gitree.models import Status
from gitree.services.git.ignore import read_ignore_patterns, resolve_global_ignore_file
from gitree.services.git.status_reader import extract

logger = get_logger(__name__)


class StatusService:
    """Extracts repository statuses with bounded parallelism."""

    def __init__(self, config: Union[Config, dict, None] = None):
        """Initialize the status service.

        Args:
            config: Configuration dictionary or Config object
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config
        self.timeout = config.timeout
        self.max_concurrency = config.workers
        self.debug_mode = config.debug

    def _load_ignore_file(self) -> Optional[Path]:
        ignore_file = resolve_global_ignore_file()
        if ignore_file is not None and self.debug_mode:
            try:
                patterns = read_ignore_patterns(ignore_file)
                logger.debug(f"Loaded {len(patterns)} global ignore patterns from {ignore_file}")
            except (OSError, ValueError) as e:
                logger.debug(f"Could not read global ignore file {ignore_file}: {e}")
        return ignore_file

    def extract(
        self,
        repo_path: str,
        cancel_event: Optional[threading.Event] = None,
        ignore_file: Optional[Path] = None,
    ) -> Status:
        """Extract the status of a single repository."""
        return extract(
            repo_path,
            timeout=self.timeout,
            cancel_event=cancel_event,
            ignore_file=ignore_file,
            debug=self.debug_mode,
        )

    def extract_batch(
        self, paths: Iterable[str], cancel_event: Optional[threading.Event] = None
    ) -> Dict[str, Status]:
        """Extract statuses for ``paths``, at most ``max_concurrency`` at a time.

        Completion order is arbitrary. When ``cancel_event`` fires, pending work
        is dropped and running units stop at their next poll; results already
        collected are returned and abandoned paths are missing from the map.

        Raises:
            InvariantError: a unit produced an internally inconsistent status
        """
        paths = list(dict.fromkeys(paths))
        results: Dict[str, Status] = {}
        if not paths:
            return results

        if cancel_event is None:
            cancel_event = threading.Event()
        lock = threading.Lock()
        ignore_file = self._load_ignore_file()

        def work(path: str) -> None:
            if cancel_event.is_set():
                raise ExtractionCancelled(path)
            status = self.extract(path, cancel_event, ignore_file)
            with lock:
                results[path] = status

        logger.debug(
            f"Extracting status for {len(paths)} repositories with {self.max_concurrency} workers"
        )
        executor = ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="gitree-status"
        )
        try:
            future_to_path = {executor.submit(work, path): path for path in paths}
            pending = set(future_to_path)
            while pending:
                if cancel_event.is_set():
                    logger.warning(
                        f"Status extraction cancelled with {len(pending)} repositories unfinished"
                    )
                    break
                done, pending = wait(pending, timeout=POLL_INTERVAL, return_when=FIRST_COMPLETED)
                for future in done:
                    path = future_to_path[future]
                    error = future.exception()
                    if error is None:
                        continue
                    if isinstance(error, ExtractionCancelled):
                        logger.debug(f"Extraction abandoned for {path}")
                    elif isinstance(error, InvariantError):
                        raise error
                    else:
                        logger.error(f"Error extracting status for {path}: {error}")
                        with lock:
                            results[path] = Status.degraded(str(error))
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        with lock:
            return dict(results)
