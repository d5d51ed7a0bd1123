"""Base boto3 client wrapper"""

from typing import Optional

import boto3
from botocore.config import Config

# Keep a single unreachable region from stalling the whole picker
DEFAULT_BOTO_CONFIG = Config(
    connect_timeout=5,
    read_timeout=15,
    retries={"max_attempts": 3, "mode": "standard"},
)


class BaseClient:
    def __init__(
        self,
        session: Optional[boto3.Session] = None,
        boto_config: Optional[Config] = None,
    ):
        # Credentials come from boto3's default chain
        self.session = session or boto3.Session()
        self.boto_config = boto_config or DEFAULT_BOTO_CONFIG

    def client(self, service: str, region_name: Optional[str] = None):
        return self.session.client(
            service, region_name=region_name, config=self.boto_config
        )
