"""Data models and configuration for package metadata collection."""

from typing import Annotated, Union

from pydantic import BaseModel, Field, RootModel, StrictFloat, StrictInt

# Package name -> description. Owned by the caller, mutated in place by fetchers.
PackageDescriptionMap = dict[str, str]

# Distro name -> package name -> raw download count
DistroDownloadCounts = dict[str, dict[str, Union[int, float]]]

# Distro name -> package name -> scaled rank (1 - 99, 0 for no downloads)
ScaledDownloadCounts = dict[str, dict[str, int]]


class CollectorConfig(BaseModel):
    """Source URLs, retry schedules and scaling constants for the collectors."""

    debian_url: str = Field(
        default="https://packages.debian.org/stable/allpackages?format=txt.gz",
        description="Flat listing of all Debian stable packages",
    )
    pip_url: str = Field(
        default=(
            "https://raw.githubusercontent.com/rkent/ros_webdata/"
            "refs/heads/build/pip_packages.json"
        ),
        description="JSON object of pip package name to description",
    )
    averaged_counts_url: str = Field(
        default=(
            "https://raw.githubusercontent.com/rkent/ros_webdata/"
            "refs/heads/build/averaged_counts-{period}.json"
        ),
        description="Monthly download counts, templated with a YYYY-MM period",
    )

    # Seconds to wait before each attempt (0 = no wait)
    debian_retry_delays: list[float] = Field(default_factory=lambda: [0, 10, 60])
    download_retry_delays: list[float] = Field(default_factory=lambda: [0, 2, 10])

    # .4 so the most downloaded package still rounds to 99 with float drift
    max_scaled_count: float = Field(default=98.4, gt=0)

    debian_encoding: str = Field(
        default="ascii",
        description="Encoding the Debian listing is forced into; others become '?'",
    )
    timeout: int = Field(default=60, description="HTTP timeout in seconds")
    http_retries: int = Field(
        default=0, ge=0, description="Adapter-level retries below the delay schedules"
    )


class PipDescriptionsPayload(RootModel[dict[str, str]]):
    """Pip description feed: package name -> description."""


# Counts arrive as JSON numbers; booleans, strings and negatives are rejected
DownloadCount = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]


class DistroDownloadCountsPayload(RootModel[dict[str, dict[str, DownloadCount]]]):
    """Averaged download counts: distro -> package -> non-negative count."""
