"""Tests for cache module"""

import json
import pytest

from ec2_ssh.core.cache import SnapshotCache, now_ms, parse_ttl
from ec2_ssh.core.config import PickerConfig


class TestParseTTL:
    def test_parse_plain_number_is_seconds(self):
        assert parse_ttl("300") == 300_000

    def test_parse_minutes(self):
        assert parse_ttl("5m") == 300_000
        assert parse_ttl("1m") == 60_000

    def test_parse_hours_and_days(self):
        assert parse_ttl("1h") == 3_600_000
        assert parse_ttl("2d") == 172_800_000

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_ttl("invalid")
        with pytest.raises(ValueError):
            parse_ttl("10x")


class TestSnapshotCache:
    @pytest.fixture
    def cache(self, config):
        return SnapshotCache(config)

    def test_load_missing_file_is_miss(self, cache):
        assert not cache.cache_file.exists()
        assert cache.load() is None

    def test_save_then_load_round_trip(self, cache, sample_instances):
        cache.save(sample_instances)

        snapshot = cache.load()
        assert snapshot is not None
        assert snapshot.instances == sample_instances
        assert snapshot.cached_at <= now_ms()

    def test_file_shape(self, cache, sample_instances):
        cache.save(sample_instances)
        raw = json.loads(cache.cache_file.read_text())
        assert set(raw) == {"cachedAt", "instances"}
        assert isinstance(raw["cachedAt"], int)

    def test_expired_snapshot_is_miss(self, cache, sample_instances):
        old = now_ms() - cache.expiry_ms - 1000
        cache.cache_file.write_text(
            json.dumps({"cachedAt": old, "instances": sample_instances})
        )
        assert cache.load() is None

    def test_snapshot_within_window_is_fresh(self, cache, sample_instances):
        recent = now_ms() - cache.expiry_ms + 60_000
        cache.cache_file.write_text(
            json.dumps({"cachedAt": recent, "instances": sample_instances})
        )
        assert cache.load().instances == sample_instances

    def test_expiry_override(self, tmp_path, sample_instances):
        config = PickerConfig(cache_file=tmp_path / "c.json", cache_expiry_ms=0)
        cache = SnapshotCache(config)
        cache.cache_file.write_text(
            json.dumps({"cachedAt": now_ms() - 10, "instances": sample_instances})
        )
        assert cache.load() is None

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "{not json",
            '{"instances": []}',
            '{"cachedAt": "yesterday", "instances": []}',
            '{"cachedAt": 1, "instances": [1, 2]}',
            "[]",
        ],
    )
    def test_corrupt_snapshot_is_miss(self, cache, content):
        cache.cache_file.write_text(content)
        assert cache.load() is None

    def test_undecodable_snapshot_is_miss(self, cache):
        cache.cache_file.write_bytes(b"\xff\xfe\x00garbage")
        assert cache.load() is None
        assert cache.get_info() is None

    @pytest.mark.parametrize(
        "record",
        [
            {"Placement": "eu-west-1a", "PublicDnsName": "h"},
            {"State": ["running"]},
            {"Tags": [{"Key": "Name", "Value": 7}]},
            {"Tags": [3]},
            {"PublicDnsName": 12},
        ],
    )
    def test_malformed_record_is_miss(self, cache, record):
        cache.cache_file.write_text(
            json.dumps({"cachedAt": now_ms(), "instances": [record]})
        )
        assert cache.load() is None
        assert cache.get_info() is None

    def test_save_failure_is_not_fatal(self, tmp_path, sample_instances):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")
        cache = SnapshotCache(PickerConfig(cache_file=blocker / "instances.json"))

        cache.save(sample_instances)  # Should not raise
        assert cache.load() is None

    def test_save_leaves_no_temp_files(self, cache, sample_instances):
        cache.save(sample_instances)
        assert [p.name for p in cache.cache_file.parent.iterdir()] == [
            cache.cache_file.name
        ]

    def test_save_overwrites_previous_snapshot(self, cache, sample_instances):
        cache.save(sample_instances)
        cache.save(sample_instances[:1])
        assert cache.load().instances == sample_instances[:1]

    def test_save_stringifies_datetimes(self, cache, raw_instance):
        from datetime import datetime, timezone

        record = raw_instance("web-01")
        record["LaunchTime"] = datetime(2024, 1, 1, tzinfo=timezone.utc)
        cache.save([record])
        loaded = cache.load().instances[0]
        assert loaded["LaunchTime"].startswith("2024-01-01")

    def test_clear(self, cache, sample_instances):
        cache.save(sample_instances)
        cache.clear()
        assert cache.load() is None
        cache.clear()  # Missing file is fine

    def test_get_info(self, cache, sample_instances):
        cache.save(sample_instances)
        info = cache.get_info()

        assert info is not None
        assert info["count"] == 2
        assert info["expired"] is False
        assert info["expiry_ms"] == cache.expiry_ms

    def test_get_info_empty(self, cache):
        assert cache.get_info() is None
