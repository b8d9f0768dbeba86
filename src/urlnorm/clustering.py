"""Group URLs that share a normalization string."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterable, Optional

from .core import UrlNormalizer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UrlCluster:
    key: str
    urls: list[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.urls)

    @property
    def representative(self) -> str:
        return self.urls[0]


def cluster_urls(
    urls: Iterable[str],
    normalizer: Optional[UrlNormalizer] = None,
) -> list[UrlCluster]:
    """Cluster URL strings by key.

    Clusters come back in the order their first member was seen; members keep
    input order, duplicates included.
    """
    normalizer = normalizer or UrlNormalizer()
    start = perf_counter()
    clusters: dict[str, UrlCluster] = {}
    total = 0
    for url in urls:
        total += 1
        key = normalizer.normalize_text(url)
        cluster = clusters.get(key)
        if cluster is None:
            cluster = clusters[key] = UrlCluster(key=key)
        cluster.urls.append(url)
    duration = perf_counter() - start
    logger.info(
        "Clustered %s URLs into %s groups in %.2fs",
        total,
        len(clusters),
        duration,
    )
    return list(clusters.values())


__all__ = ["UrlCluster", "cluster_urls"]
