"""Package metadata collectors for various sources."""

import time
from typing import Callable, Optional

import requests

from collectors.base import BaseCollector
from collectors.debian import DebianDescriptionCollector, fetch_debian_descriptions
from collectors.pip import PipDescriptionCollector, fetch_pip_descriptions
from collectors.downloads import (
    DownloadCountCollector,
    fetch_scaled_download_counts,
    scale_download_counts,
)
from models import CollectorConfig, PackageDescriptionMap


def fetch_package_descriptions(
    packages: Optional[PackageDescriptionMap] = None,
    config: Optional[CollectorConfig] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PackageDescriptionMap:
    """Merge Debian then pip descriptions into one mapping.

    Debian entries take precedence; pip only fills in missing packages.
    """
    if packages is None:
        packages = {}
    fetch_debian_descriptions(packages, config=config, session=session, sleep=sleep)
    fetch_pip_descriptions(packages, config=config, session=session, sleep=sleep)
    return packages


__all__ = [
    "BaseCollector",
    "DebianDescriptionCollector",
    "PipDescriptionCollector",
    "DownloadCountCollector",
    "fetch_debian_descriptions",
    "fetch_pip_descriptions",
    "fetch_package_descriptions",
    "fetch_scaled_download_counts",
    "scale_download_counts",
]
