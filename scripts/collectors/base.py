"""Base collector class and utilities."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from models import CollectorConfig


def get_session(retries: int = 3) -> requests.Session:
    """Create a requests session with retry logic."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class BaseCollector(ABC):
    """Abstract base class for package metadata collectors."""

    source_name: str = "unknown"

    def __init__(
        self,
        config: Optional[CollectorConfig] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or CollectorConfig()
        self.session = session or get_session(retries=self.config.http_retries)
        self.sleep = sleep
        self.errors: list[str] = []

    @abstractmethod
    def collect(self, *args, **kwargs):
        """Fetch from this source and return the merged result."""
        pass

    def warn(self, message: str) -> None:
        """Record a non-fatal problem and report it."""
        self.errors.append(message)
        print(f"WARNING: {message}")

    def attempts(self, delays: list[float]) -> Iterator[int]:
        """Yield attempt numbers, sleeping the scheduled delay before each.

        Args:
            delays: Seconds to wait before each attempt. Zero means no wait.

        Yields:
            Zero-based attempt index. The caller breaks out on success.
        """
        for attempt, delay in enumerate(delays):
            if delay:
                self.sleep(delay)
            yield attempt
