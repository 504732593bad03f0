"""Pip package description collector."""

import time
from typing import Callable, Optional

import requests

from collectors.base import BaseCollector
from models import CollectorConfig, PackageDescriptionMap, PipDescriptionsPayload


class PipDescriptionCollector(BaseCollector):
    """Collect pip package descriptions from the published JSON feed."""

    source_name = "pip"

    def collect(
        self, packages: Optional[PackageDescriptionMap] = None
    ) -> PackageDescriptionMap:
        """Add pip descriptions for packages not already in ``packages``.

        A single attempt is made. Malformed JSON raises
        ``pydantic.ValidationError``.

        Args:
            packages: Mapping to merge into. Mutated in place.

        Returns:
            The same mapping. Existing entries are never overwritten.
        """
        if packages is None:
            packages = {}

        print(f"Fetching pip descriptions from {self.config.pip_url}...")

        try:
            response = self.session.get(self.config.pip_url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.warn(f"Failed to fetch pip descriptions: {e}")
            return packages

        if not response.content:
            self.warn("Empty pip descriptions response")
            return packages

        pip_descriptions = PipDescriptionsPayload.model_validate_json(response.content).root

        added = 0
        for name, description in pip_descriptions.items():
            if name not in packages:
                packages[name] = description
                added += 1

        print(f"Collected {added} new descriptions from pip")
        return packages


def fetch_pip_descriptions(
    packages: Optional[PackageDescriptionMap] = None,
    config: Optional[CollectorConfig] = None,
    session: Optional[requests.Session] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PackageDescriptionMap:
    """Merge pip descriptions into ``packages`` and return it."""
    return PipDescriptionCollector(config=config, session=session, sleep=sleep).collect(packages)
