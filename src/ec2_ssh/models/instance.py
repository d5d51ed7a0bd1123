"""Instance, candidate and cache snapshot models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class Instance(BaseModel):
    """Read-only view of a raw describe_instances record."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(default="", description="Connection target")
    availability_zone: str = Field(default="")
    state: str = Field(default="")
    tags: dict[str, str] = Field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        """Value of the ``name`` tag, matching the key case-insensitively."""
        return next(
            (v for k, v in self.tags.items() if k.lower() == "name" and v), None
        )

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Instance":
        hostname = (
            raw.get("PublicDnsName")
            or raw.get("PublicIpAddress")
            or raw.get("PrivateIpAddress")
            or ""
        )
        return cls(
            hostname=hostname,
            availability_zone=(raw.get("Placement") or {}).get(
                "AvailabilityZone", ""
            ),
            state=(raw.get("State") or {}).get("Name", ""),
            tags={
                t["Key"]: t.get("Value", "")
                for t in raw.get("Tags") or []
                if "Key" in t
            },
        )


class Candidate(BaseModel):
    """Ranked, display-ready projection of an instance for one query."""

    model_config = ConfigDict(frozen=True)

    display_label: str
    sort_key: str
    score: float
    value: str


class CacheSnapshot(BaseModel):
    """Persisted aggregate, stored as ``{"cachedAt": ..., "instances": [...]}``."""

    model_config = ConfigDict(populate_by_name=True)

    cached_at: int = Field(..., alias="cachedAt", description="Epoch millis")
    instances: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("instances")
    @classmethod
    def records_are_instances(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        # Every record must project to an Instance or the snapshot is unusable
        for i, raw in enumerate(v):
            try:
                Instance.from_raw(raw)
            except (ValidationError, AttributeError, TypeError) as e:
                raise ValueError(f"record {i} is not an instance: {e}") from None
        return v

    def is_fresh(self, now_ms: int, expiry_ms: int) -> bool:
        return self.cached_at + expiry_ms >= now_ms
