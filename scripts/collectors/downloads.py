"""Package download count collector.

Downloads monthly averaged download counts per distro and rescales them
into a 1 - 99 histogram rank. The counts originally come from
https://awstats.osuosl.org/reports/packages.ros.org/{year}/{month:02d}/awstats.packages.ros.org.downloads.html
"""

import time
from datetime import date, timedelta
from typing import Callable, Optional

import requests

from collectors.base import BaseCollector
from models import (
    CollectorConfig,
    DistroDownloadCounts,
    DistroDownloadCountsPayload,
    ScaledDownloadCounts,
)


def format_period(day: date) -> str:
    """Return the ``YYYY-MM`` report period containing ``day``."""
    return f"{day.year:04d}-{day.month:02d}"


def previous_month(day: date) -> date:
    """Return the first day of the month before ``day``."""
    return (day.replace(day=1) - timedelta(days=1)).replace(day=1)


def scale_download_counts(
    counts: DistroDownloadCounts, max_scaled_count: float = 98.4
) -> ScaledDownloadCounts:
    """Scale raw counts per distro to a cumulative 1 - 99 rank.

    Packages are visited in ascending order of downloads and each is given
    ``int(1 + cumulative * max_scaled_count / total)``, so the most
    downloaded package lands on 99. A distro with no downloads at all has
    every package at 0.
    """
    scaled_by_distro: ScaledDownloadCounts = {}
    for distro, packages in counts.items():
        ordered = sorted(packages.items(), key=lambda item: item[1])
        total = sum(count for _, count in ordered)

        if total == 0:
            scaled_by_distro[distro] = {name: 0 for name, _ in ordered}
            continue

        distro_scale = max_scaled_count / float(total)
        cumulative_count = 0.0
        scaled: dict[str, int] = {}
        for name, count in ordered:
            cumulative_count += float(count)
            scaled[name] = int(1.0 + cumulative_count * distro_scale)
        scaled_by_distro[distro] = scaled

    return scaled_by_distro


class DownloadCountCollector(BaseCollector):
    """Collect and rescale package download counts per distro."""

    source_name = "downloads"

    def __init__(self, *args, today: Callable[[], date] = date.today, **kwargs):
        super().__init__(*args, **kwargs)
        self.today = today

    def fetch_counts(self) -> DistroDownloadCounts:
        """Fetch the most recent published month of raw download counts.

        Starts at the current month. A 404 means the month is not published
        yet and moves the target back one month; any other failure retries
        the same month.

        Raises:
            RuntimeError: If no attempt succeeds.
        """
        active_month = self.today()

        for _ in self.attempts(self.config.download_retry_delays):
            url = self.config.averaged_counts_url.format(period=format_period(active_month))
            print(f"Fetching package download counts from {url}...")

            try:
                response = self.session.get(url, timeout=self.config.timeout)
            except requests.RequestException as e:
                self.warn(f"Failed attempt to get package download counts, {e}")
                continue

            if response.status_code == 200:
                return DistroDownloadCountsPayload.model_validate_json(response.content).root

            # Only look for another month if the current month is missing
            if response.status_code == 404:
                active_month = previous_month(active_month)
            self.warn(f"Failed attempt to get package download counts, {response.reason}")

        raise RuntimeError("could not retrieve package download counts")

    def collect(self) -> ScaledDownloadCounts:
        """Fetch download counts and scale them per distro.

        Returns:
            Mapping of distro -> package -> rank in 1 - 99.
        """
        counts = self.fetch_counts()
        scaled = scale_download_counts(counts, self.config.max_scaled_count)
        print(f"Collected download ranks for {len(scaled)} distros")
        return scaled


def fetch_scaled_download_counts(
    config: Optional[CollectorConfig] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ScaledDownloadCounts:
    """Fetch the latest download counts, scaled 1 - 99 per distro."""
    return DownloadCountCollector(config=config, session=session, sleep=sleep).collect()
