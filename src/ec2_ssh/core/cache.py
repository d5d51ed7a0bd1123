"""Single-slot file cache for the aggregated instance list."""

import json
import os
import re
import time
from pathlib import Path
from typing import Any, Optional

from ..models.instance import CacheSnapshot
from .config import PickerConfig
from .logging import get_logger

logger = get_logger("cache")


def parse_ttl(value: str) -> int:
    """Parse TTL string like '300', '15m', '1h', '2d' to milliseconds"""
    match = re.match(r"^(\d+)([smhd]?)$", value.strip().lower())
    if not match:
        raise ValueError(
            f"Invalid TTL format: {value}. Use number with optional s/m/h/d suffix"
        )
    num = int(match.group(1))
    unit = match.group(2) or "s"
    multipliers = {"s": 1, "m": 60, "h": 3600, "d": 86400}
    return num * multipliers[unit] * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


class SnapshotCache:
    def __init__(self, config: PickerConfig):
        self.cache_file: Path = config.cache_file
        self.expiry_ms = config.cache_expiry_ms

    def load(self) -> Optional[CacheSnapshot]:
        """Return the snapshot if present, valid and fresh; None otherwise"""
        try:
            raw = self.cache_file.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.debug("Cannot read cache %s: %s", self.cache_file, e)
            return None
        try:
            snapshot = CacheSnapshot.model_validate_json(raw)
        except ValueError as e:
            # ValidationError, or bytes that are not UTF-8
            logger.debug("Discarding malformed cache %s: %s", self.cache_file, e)
            return None
        if not snapshot.is_fresh(now_ms(), self.expiry_ms):
            logger.debug("Cache %s expired", self.cache_file)
            return None
        return snapshot

    def save(self, instances: list[dict[str, Any]]) -> None:
        """Persist instances; failures are logged and otherwise ignored"""
        payload = {"cachedAt": now_ms(), "instances": instances}
        tmp_file = self.cache_file.with_name(
            f".{self.cache_file.name}.{os.getpid()}.tmp"
        )
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            tmp_file.write_text(json.dumps(payload, default=str))
            # Readers see either the old file or the complete new one
            os.replace(tmp_file, self.cache_file)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to write cache %s: %s", self.cache_file, e)
            try:
                tmp_file.unlink(missing_ok=True)
            except OSError:
                pass

    def clear(self) -> None:
        """Clear the cache"""
        try:
            self.cache_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove cache %s: %s", self.cache_file, e)

    def get_info(self) -> Optional[dict]:
        """Get cache metadata, ignoring expiry"""
        try:
            snapshot = CacheSnapshot.model_validate_json(self.cache_file.read_bytes())
        except (OSError, ValueError):
            return None
        age_ms = now_ms() - snapshot.cached_at
        return {
            "cached_at": snapshot.cached_at,
            "expiry_ms": self.expiry_ms,
            "age_ms": age_ms,
            "expired": age_ms > self.expiry_ms,
            "count": len(snapshot.instances),
        }
