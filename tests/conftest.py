"""Shared pytest fixtures"""

import pytest
from rich.console import Console
from io import StringIO

from ec2_ssh.core.config import PickerConfig


def make_raw(
    name=None,
    zone="eu-west-1a",
    state="running",
    host="ec2-1-2-3-4.eu-west-1.compute.amazonaws.com",
    tag_key="Name",
):
    """Build a describe_instances style record"""
    raw = {
        "InstanceId": "i-0123456789abcdef0",
        "PublicDnsName": host,
        "Placement": {"AvailabilityZone": zone},
        "State": {"Code": 16, "Name": state},
        "Tags": [{"Key": "env", "Value": "test"}],
    }
    if name is not None:
        raw["Tags"].append({"Key": tag_key, "Value": name})
    return raw


@pytest.fixture
def mock_console():
    """Create a mock console that captures output"""
    output = StringIO()
    console = Console(file=output, force_terminal=True, width=120)
    console._output = output
    return console


@pytest.fixture
def config(tmp_path):
    """Config with the cache file in a temp directory"""
    return PickerConfig(
        regions=["eu-west-1", "eu-west-2"], cache_file=tmp_path / "instances.json"
    )


@pytest.fixture
def sample_instances():
    return [
        make_raw("web-01", zone="eu-1", host="web01.example.com"),
        make_raw("web-02", zone="eu-2", state="stopped", host="web02.example.com"),
    ]


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so moto never reaches real AWS"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")


@pytest.fixture
def raw_instance():
    """Factory for raw instance records"""
    return make_raw
