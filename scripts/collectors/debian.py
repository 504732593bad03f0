"""Debian package description collector.

Uses the plain-text ``allpackages`` listing published by packages.debian.org,
one package per line::

    3270-common (4.1ga10-1.1+b1) Common files for IBM 3270 emulators and pr3287
"""

import gzip
import time
import zlib
from typing import Callable, Optional

import requests

from collectors.base import BaseCollector
from models import CollectorConfig, PackageDescriptionMap

GZIP_MAGIC = b"\x1f\x8b"


def parse_debian_listing(text: str) -> PackageDescriptionMap:
    """Parse an allpackages listing into package name -> description.

    Lines without a ``(version)`` group are header and footer material and
    are skipped, as are lines with nothing before the ``(``. A later line
    for the same package replaces an earlier one.
    """
    descriptions: PackageDescriptionMap = {}
    for line in text.splitlines():
        left_paren = line.find("(")
        if left_paren == -1:
            continue
        right_paren = line.find(")", left_paren + 1)
        if right_paren == -1:
            continue

        name = line[:left_paren].rstrip()
        if not name:
            continue
        descriptions[name] = line[right_paren + 1 :].strip()

    return descriptions


class DebianDescriptionCollector(BaseCollector):
    """Collect package descriptions from the Debian stable package listing."""

    source_name = "debian"

    def collect(
        self, packages: Optional[PackageDescriptionMap] = None
    ) -> PackageDescriptionMap:
        """Merge Debian descriptions into ``packages``.

        The download is retried on the configured delay schedule. If every
        attempt fails, ``packages`` is returned untouched.

        Args:
            packages: Mapping to merge into. Mutated in place.

        Returns:
            The same mapping, with Debian descriptions overwriting existing keys.
        """
        if packages is None:
            packages = {}

        url = self.config.debian_url
        delays = self.config.debian_retry_delays
        text = None

        for attempt in self.attempts(delays):
            print(f"Fetching Debian package list from {url}...")
            try:
                response = self.session.get(url, timeout=self.config.timeout)
                response.raise_for_status()
                text = self._decode(response.content)
                break
            except (requests.RequestException, OSError, EOFError, zlib.error) as e:
                self.warn(f"Debian packages description download error: {e}")
                if attempt < len(delays) - 1:
                    print("Retrying Debian description download")
                else:
                    print("Failing Debian description download")

        if text is None:
            return packages

        descriptions = parse_debian_listing(text)
        packages.update(descriptions)
        print(f"Collected {len(descriptions)} descriptions from Debian")
        return packages

    def _decode(self, content: bytes) -> str:
        # The listing is served as txt.gz; some transports inflate it already.
        if content.startswith(GZIP_MAGIC):
            content = gzip.decompress(content)

        encoding = self.config.debian_encoding
        text = content.decode("utf-8", errors="replace")
        return text.encode(encoding, errors="replace").decode(encoding)


def fetch_debian_descriptions(
    packages: Optional[PackageDescriptionMap] = None,
    config: Optional[CollectorConfig] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PackageDescriptionMap:
    """Merge Debian descriptions into ``packages`` and return it."""
    return DebianDescriptionCollector(config=config, session=session, sleep=sleep).collect(packages)
