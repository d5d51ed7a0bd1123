"""EC2 inventory across regions, backed by the snapshot cache."""

import concurrent.futures
from dataclasses import dataclass, field
from typing import Any, Optional

import boto3

from ..core import BaseClient, SnapshotCache, get_logger

logger = get_logger("inventory")


@dataclass
class RegionResult:
    """Outcome of one region scan: instances on success, a reason on failure."""

    region: str
    instances: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class InventoryClient(BaseClient):
    def __init__(self, session: Optional[boto3.Session] = None, **kwargs):
        super().__init__(session, **kwargs)

    def describe_region(self, region: str) -> list[dict[str, Any]]:
        """Raw instance records for one region, reservations flattened"""
        ec2 = self.client("ec2", region_name=region)
        paginator = ec2.get_paginator("describe_instances")
        instances = []
        for page in paginator.paginate():
            for res in page.get("Reservations", []):
                instances.extend(res.get("Instances", []))
        return instances

    def scan_region(self, region: str) -> RegionResult:
        try:
            return RegionResult(region, self.describe_region(region))
        except Exception as e:
            return RegionResult(region, error=f"{type(e).__name__}: {e}")

    def fetch(self, regions: list[str]) -> list[RegionResult]:
        """Scan all regions concurrently; results follow the order of regions"""
        if not regions:
            return []
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(regions)) as ex:
            return list(ex.map(self.scan_region, regions))


class InventoryAggregator:
    def __init__(self, client: InventoryClient, cache: SnapshotCache):
        self.client = client
        self.cache = cache
        self.last_results: list[RegionResult] = []

    @property
    def degraded_regions(self) -> list[str]:
        return [r.region for r in self.last_results if not r.ok]

    def get_all_instances(
        self, regions: list[str], refresh: bool = False
    ) -> list[dict[str, Any]]:
        """Cached instances when fresh, otherwise a live multi-region fetch.

        Failing regions contribute nothing and are logged; the partial
        result still replaces the snapshot. When every region fails the
        empty list is returned without being cached.
        """
        if refresh:
            self.cache.clear()
        else:
            snapshot = self.cache.load()
            if snapshot is not None:
                logger.debug("Using %d cached instances", len(snapshot.instances))
                return snapshot.instances

        self.last_results = self.client.fetch(regions)
        instances: list[dict[str, Any]] = []
        for result in self.last_results:
            if not result.ok:
                logger.warning(
                    "Failed to retrieve instances for region %s: %s",
                    result.region,
                    result.error,
                )
                continue
            logger.debug("%s: %d instances", result.region, len(result.instances))
            instances.extend(result.instances)

        if any(r.ok for r in self.last_results):
            self.cache.save(instances)
        return instances
