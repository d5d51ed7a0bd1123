"""Picker configuration, built once at startup and passed down explicitly."""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging import get_logger

logger = get_logger("config")

ENV_CACHE_EXPIRY = "EC2_SSH_CACHE_EXPIRY"
ENV_USER = "EC2_SSH_USER"
ENV_KEY = "EC2_SSH_KEY"

DEFAULT_CACHE_EXPIRY_MS = 5 * 60 * 1000
DEFAULT_CACHE_FILE = Path(tempfile.gettempdir()) / "ec2-ssh-instances.json"

DEFAULT_REGIONS = [
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "ca-central-1",
    "eu-central-1",
    "eu-west-1",
    "eu-west-2",
    "eu-west-3",
    "eu-north-1",
    "ap-northeast-1",
    "ap-northeast-2",
    "ap-southeast-1",
    "ap-southeast-2",
    "ap-south-1",
    "sa-east-1",
]


class PickerConfig(BaseModel):
    """Settings shared by the cache, the aggregator and the ranker."""

    model_config = ConfigDict(frozen=True)

    regions: list[str] = Field(default_factory=lambda: list(DEFAULT_REGIONS))
    cache_file: Path = Field(default=DEFAULT_CACHE_FILE)
    cache_expiry_ms: int = Field(default=DEFAULT_CACHE_EXPIRY_MS, ge=0)
    default_user: Optional[str] = None
    key_file: Optional[str] = None

    # Fuzzy matching
    name_margin: int = Field(default=3, ge=0)
    prefix_bonus: float = 10.0
    subsequence_bonus: float = 10.0

    # Label rendering (rich markup)
    highlight_start: str = "[bold magenta]"
    highlight_end: str = "[/]"
    unnamed_placeholder: str = "<unnamed>"
    normal_state: str = "running"
    annotation_separator: str = ", "

    @field_validator("regions")
    @classmethod
    def validate_regions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one region is required")
        return v

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "PickerConfig":
        """Build config from environment variables, then apply overrides.

        Overrides set to None are ignored so CLI options can be passed
        through unconditionally.
        """
        environ = os.environ if environ is None else environ
        values: dict = {}

        raw_expiry = environ.get(ENV_CACHE_EXPIRY)
        if raw_expiry:
            try:
                expiry = int(raw_expiry)
            except ValueError:
                expiry = -1
            if expiry >= 0:
                values["cache_expiry_ms"] = expiry
            else:
                logger.warning(
                    "Ignoring %s=%r: expected a non-negative number of milliseconds",
                    ENV_CACHE_EXPIRY,
                    raw_expiry,
                )
        if environ.get(ENV_USER):
            values["default_user"] = environ[ENV_USER]
        if environ.get(ENV_KEY):
            values["key_file"] = environ[ENV_KEY]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
