"""Tests for runtime snapshots."""

import logging

import pytest

from scriptui.snapshot import KillRecord, RuntimeSnapshot, as_snapshot


class TestKillRecord:
    """Kill history entries accept several shapes."""

    def test_from_mapping(self):
        assert KillRecord.from_value({"fight_duration": "00:01:10"}).fight_duration == "00:01:10"
        assert KillRecord.from_value({"fightDuration": "00:02:00"}).fight_duration == "00:02:00"

    def test_from_none(self):
        assert KillRecord.from_value(None).fight_duration is None

    def test_from_plain_value(self):
        assert KillRecord.from_value("00:00:59").fight_duration == "00:00:59"

    def test_passthrough(self):
        record = KillRecord("x")
        assert KillRecord.from_value(record) is record


class TestRuntimeSnapshot:
    """Derived views used by the Info tab."""

    def test_empty(self):
        snap = RuntimeSnapshot()
        assert not snap.has_stats
        assert not snap.has_boss_health
        assert snap.recent_kills() == []
        assert snap.unique_names() == []

    def test_has_stats(self):
        assert RuntimeSnapshot(kills=0).has_stats
        assert RuntimeSnapshot(kill_timer="00:00:01").has_stats
        assert not RuntimeSnapshot(fastest_kill="00:00:10").has_stats

    def test_boss_health_requires_positive_values(self):
        assert RuntimeSnapshot(boss_health=10, boss_max_health=100).has_boss_health
        assert not RuntimeSnapshot(boss_health=0, boss_max_health=100).has_boss_health
        assert not RuntimeSnapshot(boss_health=10, boss_max_health=0).has_boss_health
        assert not RuntimeSnapshot(boss_health=10).has_boss_health

    def test_recent_kills_last_five(self):
        snap = RuntimeSnapshot(kill_data=[KillRecord(str(i)) for i in range(8)])
        recent = snap.recent_kills()
        assert [n for n, _ in recent] == [4, 5, 6, 7, 8]
        assert [k.fight_duration for _, k in recent] == ["3", "4", "5", "6", "7"]

    def test_recent_kills_fewer_than_limit(self):
        snap = RuntimeSnapshot(kill_data=[KillRecord("a"), KillRecord("b")])
        assert [n for n, _ in snap.recent_kills()] == [1, 2]

    def test_unique_names(self):
        snap = RuntimeSnapshot(uniques_looted=["Shard", ("Codex", 1), ["Helm"], 5])
        assert snap.unique_names() == ["Shard", "Codex", "Helm", "5"]


class TestFromMapping:
    """Dict input from host scripts."""

    def test_camel_case_keys(self):
        snap = RuntimeSnapshot.from_mapping({
            "state": "Fighting",
            "bossName": "Rasial",
            "bossHealth": 50,
            "bossMaxHealth": 100,
            "killsPerHour": 12,
            "killData": [{"fightDuration": "00:01:00"}],
            "uniquesLooted": [["Shard", 1]],
        })
        assert snap.boss_name == "Rasial"
        assert snap.kills_per_hour == 12
        assert snap.kill_data == [KillRecord("00:01:00")]
        assert snap.unique_names() == ["Shard"]

    def test_snake_case_keys(self):
        snap = RuntimeSnapshot.from_mapping({"kill_timer": "00:00:05", "gp_per_hour": 10})
        assert snap.kill_timer == "00:00:05"
        assert snap.gp_per_hour == 10

    def test_unknown_keys_dropped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="scriptui.snapshot"):
            snap = RuntimeSnapshot.from_mapping({"kills": 3, "bossHPTypo": 5})
        assert snap.kills == 3
        assert any("bossHPTypo" in r.getMessage() for r in caplog.records)

    def test_unknown_key_warned_once(self, caplog):
        with caplog.at_level(logging.WARNING, logger="scriptui.snapshot"):
            RuntimeSnapshot.from_mapping({"onlyOnceKey": 1})
            RuntimeSnapshot.from_mapping({"onlyOnceKey": 1})
        warned = [r for r in caplog.records if "onlyOnceKey" in r.getMessage()]
        assert len(warned) == 1

    def test_non_string_key_dropped(self):
        assert RuntimeSnapshot.from_mapping({1: "x", "deaths": 2}).deaths == 2

    def test_null_lists(self):
        snap = RuntimeSnapshot.from_mapping({"killData": None})
        assert snap.kill_data == []


class TestAsSnapshot:
    def test_none(self):
        assert as_snapshot(None) == RuntimeSnapshot()

    def test_passthrough(self):
        snap = RuntimeSnapshot(kills=1)
        assert as_snapshot(snap) is snap

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            as_snapshot(["not", "a", "snapshot"])
