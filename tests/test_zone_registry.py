"""Tests for ZoneRegistry loading, repair, bootstrap and teleport."""

import math

import pytest

from lere_store import EntryStatus
from lere_zone import HubDefaults, SimpleWorld, StaticWorldLookup, Zone, ZoneRegistry

from conftest import CountingStore, FakePlayer, zone_entry


def _registry(data, worlds, **kwargs):
    store = CountingStore(data)
    return ZoneRegistry(store, worlds, **kwargs), store


class TestLoadValidEntries:
    def test_valid_entry_keeps_exact_values(self, worlds):
        registry, _ = _registry(
            {"zones": {"Arena": zone_entry("arena_world", 12.5, 70.25, -3.75)}},
            worlds,
        )

        report = registry.load_from_config()

        zone = registry.get_zone("arena")
        assert zone == Zone("Arena", "arena_world", 12.5, 70.25, -3.75, 0.0, 0.0)
        assert report.entries[0].status is EntryStatus.ACCEPTED
        assert not report.bootstrapped

    def test_yaw_and_pitch_are_read(self, worlds):
        registry, _ = _registry(
            {"zones": {"hub": zone_entry(yaw=90.0, pitch=-45.5)}}, worlds
        )

        registry.load_from_config()

        zone = registry.get_zone("hub")
        assert zone.yaw == 90.0
        assert zone.pitch == -45.5

    def test_yaw_is_narrowed_to_single_precision(self, worlds):
        registry, _ = _registry({"zones": {"hub": zone_entry(yaw=0.1)}}, worlds)

        registry.load_from_config()

        yaw = registry.get_zone("hub").yaw
        assert yaw != 0.1
        assert yaw == pytest.approx(0.1, rel=1e-7)

    def test_integer_coordinates_are_accepted(self, worlds):
        registry, _ = _registry({"zones": {"hub": zone_entry(x=10, y=70, z=-5)}}, worlds)

        registry.load_from_config()

        zone = registry.get_zone("hub")
        assert (zone.x, zone.y, zone.z) == (10.0, 70.0, -5.0)

    def test_numeric_yaml_keys_are_addressable(self, worlds):
        registry, _ = _registry({"zones": {1: zone_entry()}}, worlds)

        registry.load_from_config()

        assert registry.list_zone_ids() == ("1",)
        assert registry.get_zone("1") is not None


class TestYClamping:
    @pytest.mark.parametrize("y", [-0.5, -64.0, -1e9])
    def test_below_zero_becomes_one(self, worlds, y):
        registry, _ = _registry({"zones": {"low": zone_entry(y=y)}}, worlds)

        report = registry.load_from_config()

        assert registry.get_zone("low").y == 1.0
        assert report.entries[0].status is EntryStatus.REPAIRED

    @pytest.mark.parametrize("y", [256.5, 300.0, 1e9])
    def test_above_max_becomes_max_minus_two(self, worlds, y):
        registry, _ = _registry({"zones": {"high": zone_entry(y=y)}}, worlds)

        registry.load_from_config()

        assert registry.get_zone("high").y == 254.0

    def test_tiny_world_never_goes_below_one(self):
        worlds = StaticWorldLookup([SimpleWorld("flat", max_height=2)])
        registry, _ = _registry({"zones": {"z": zone_entry("flat", y=10.0)}}, worlds)

        registry.load_from_config()

        assert registry.get_zone("z").y == 1.0

    @pytest.mark.parametrize("y", [0.0, 256.0])
    def test_bounds_are_inclusive(self, worlds, y):
        registry, _ = _registry({"zones": {"edge": zone_entry(y=y)}}, worlds)

        report = registry.load_from_config()

        assert registry.get_zone("edge").y == y
        assert report.entries[0].status is EntryStatus.ACCEPTED


class TestSkippedEntries:
    def test_bad_entries_are_skipped_and_others_survive(self, worlds):
        registry, _ = _registry(
            {
                "zones": {
                    "good": zone_entry(),
                    "noworld": {"x": 0.0, "y": 64.0, "z": 0.0},
                    "blank": zone_entry(world="   "),
                    "nether": zone_entry(world="world_nether"),
                    "nox": {"world": "world", "y": 64.0, "z": 0.0},
                    "text": zone_entry(x="abc"),
                    "nan": zone_entry(z=math.nan),
                    "inf": zone_entry(y=math.inf),
                    "flag": zone_entry(x=True),
                    "scalar": 5,
                }
            },
            worlds,
        )

        report = registry.load_from_config()

        assert registry.list_zone_ids() == ("good",)
        skipped = {e.key for e in report.rejected}
        assert skipped == {
            "noworld", "blank", "nether", "nox", "text", "nan", "inf", "flag", "scalar",
        }
        assert all(e.status is EntryStatus.SKIPPED for e in report.rejected)
        assert not report.retried

    def test_skip_reasons(self, worlds):
        registry, _ = _registry(
            {
                "zones": {
                    "hub": zone_entry(),
                    "a": {"x": 0.0},
                    "b": zone_entry(world="gone"),
                    "c": zone_entry(x=None),
                }
            },
            worlds,
        )

        report = registry.load_from_config()

        reasons = {e.key: e.reason for e in report.rejected}
        assert reasons["a"] == "missing 'world' value"
        assert reasons["b"] == "references unknown world 'gone'"
        assert reasons["c"] == "has invalid coordinates"

    def test_unexpected_error_in_one_entry_does_not_abort_load(self, worlds):
        class ExplodingLookup:
            def get_world(self, name):
                if name == "broken":
                    raise RuntimeError("world storage corrupted")
                return worlds.get_world(name)

        registry, _ = _registry(
            {
                "zones": {
                    "first": zone_entry(),
                    "bad": zone_entry(world="broken"),
                    "last": zone_entry("arena_world"),
                }
            },
            ExplodingLookup(),
        )

        report = registry.load_from_config()

        assert registry.list_zone_ids() == ("first", "last")
        failed = [e for e in report.entries if e.status is EntryStatus.FAILED]
        assert [e.key for e in failed] == ["bad"]
        assert "world storage corrupted" in failed[0].reason

    @pytest.mark.parametrize("yaw, expected", [
        (1e300, math.inf),
        (-1e300, -math.inf),
        (3.4028234663852886e38, 3.4028234663852886e38),
    ])
    def test_orientation_beyond_single_precision_still_loads(self, worlds, yaw, expected):
        registry, _ = _registry(
            {"zones": {"hub": zone_entry(), "spin": zone_entry(yaw=yaw)}}, worlds
        )

        report = registry.load_from_config()

        assert registry.list_zone_ids() == ("hub", "spin")
        assert registry.get_zone("spin").yaw == expected
        assert report.count(EntryStatus.FAILED) == 0


class TestBootstrap:
    def test_absent_section_writes_and_persists_hub(self, worlds):
        registry, store = _registry({}, worlds)

        report = registry.load_from_config()

        assert report.bootstrapped
        assert not report.retried
        assert registry.list_zone_ids() == ("hub",)
        assert registry.get_zone("hub") == Zone("hub", "world", 0.0, 64.0, 0.0)
        assert store.saves == 1
        assert store.snapshots[0]["zones"]["hub"] == {
            "world": "world", "x": 0.0, "y": 64.0, "z": 0.0, "yaw": 0.0, "pitch": 0.0,
        }

    def test_null_section_is_treated_as_absent(self, worlds):
        registry, _ = _registry({"zones": None}, worlds)

        report = registry.load_from_config()

        assert report.bootstrapped
        assert registry.get_zone("hub") is not None

    def test_empty_section_bootstraps_through_retry(self, worlds):
        registry, store = _registry({"zones": {}}, worlds)

        report = registry.load_from_config()

        assert report.retried
        assert registry.list_zone_ids() == ("hub",)
        assert store.saves == 1

    def test_all_invalid_entries_add_hub_and_keep_user_entries(self, worlds):
        registry, store = _registry(
            {"zones": {"broken": zone_entry(world="nowhere")}}, worlds
        )

        report = registry.load_from_config()

        assert report.retried
        assert registry.list_zone_ids() == ("hub",)
        assert store.get_string("zones.broken.world") == "nowhere"

    def test_hub_completion_keeps_valid_user_values(self, worlds):
        registry, store = _registry(
            {"zones": {"hub": {"world": "arena_world", "x": 10.0, "y": "high"}}},
            worlds,
        )

        registry.load_from_config()

        hub = registry.get_zone("hub")
        assert (hub.world, hub.x, hub.y, hub.z) == ("arena_world", 10.0, 64.0, 0.0)
        assert store.get_float("zones.hub.y") == 64.0

    def test_retry_is_bounded_when_hub_world_is_missing(self, worlds):
        registry, store = _registry(
            {"zones": {"hub": zone_entry(world="lobby")}}, worlds
        )

        report = registry.load_from_config()

        assert registry.count() == 0
        assert report.retried
        assert [e.key for e in report.entries] == ["hub", "hub"]
        assert store.saves == 1

    def test_custom_hub_defaults(self, worlds):
        hub = HubDefaults(zone_id="spawn", world="arena_world", y=100.0)
        registry, _ = _registry({}, worlds, hub=hub)

        registry.load_from_config()

        assert registry.list_zone_ids() == ("spawn",)
        assert registry.get_zone("SPAWN").y == 100.0


class TestReload:
    def test_reload_replaces_everything(self, worlds):
        registry, store = _registry(
            {"zones": {"hub": zone_entry(), "arena": zone_entry("arena_world")}},
            worlds,
        )
        registry.load_from_config()

        store.set("zones.arena", None)
        store.set("zones.hub.x", 42.0)
        registry.load_from_config()

        assert registry.list_zone_ids() == ("hub",)
        assert registry.get_zone("hub").x == 42.0

    def test_zone_whose_world_unloaded_is_dropped_on_reload(self, worlds):
        registry, _ = _registry(
            {"zones": {"hub": zone_entry(), "arena": zone_entry("arena_world")}},
            worlds,
        )
        registry.load_from_config()

        worlds.unload("arena_world")
        registry.load_from_config()

        assert registry.get_zone("arena") is None

    def test_newly_loaded_world_is_picked_up_on_reload(self, worlds):
        registry, _ = _registry(
            {"zones": {"hub": zone_entry(), "pvp": zone_entry("pvp_world", y=100.0)}}, worlds
        )
        registry.load_from_config()
        assert registry.get_zone("pvp") is None

        worlds.load(SimpleWorld("pvp_world", max_height=64))
        registry.load_from_config()

        assert registry.get_zone("pvp").y == 62.0


class TestQueries:
    def test_lookup_is_case_insensitive(self, worlds):
        registry, _ = _registry({"zones": {"Arena": zone_entry()}}, worlds)
        registry.load_from_config()

        assert registry.get_zone("ARENA") is registry.get_zone("arena")
        assert registry.get_zone("Arena").id == "Arena"

    def test_unknown_and_none_ids(self, worlds):
        registry, _ = _registry({"zones": {"hub": zone_entry()}}, worlds)
        registry.load_from_config()

        assert registry.get_zone("nope") is None
        assert registry.get_zone(None) is None

    def test_list_preserves_order_and_case(self, worlds):
        registry, _ = _registry(
            {"zones": {"Hub": zone_entry(), "Arena": zone_entry("arena_world")}},
            worlds,
        )
        registry.load_from_config()

        assert registry.list_zone_ids() == ("Hub", "Arena")

    def test_case_duplicates_collapse_to_one_entry(self, worlds):
        registry, _ = _registry(
            {"zones": {"Hub": zone_entry(x=1.0), "hub": zone_entry(x=2.0)}}, worlds
        )
        registry.load_from_config()

        assert registry.list_zone_ids() == ("hub",)
        assert registry.get_zone("HUB").x == 2.0


class TestTeleport:
    @pytest.fixture
    def registry(self, worlds):
        registry, _ = _registry(
            {
                "zones": {
                    "Hub": zone_entry(),
                    "Arena": zone_entry("arena_world", 5.0, 80.0, 6.0, yaw=180.0),
                }
            },
            worlds,
        )
        registry.load_from_config()
        return registry

    def test_unknown_zone(self, registry, player):
        result = registry.teleport_to_zone(player, "unknown")

        assert not result.success
        assert result.message == "Unknown zone: unknown"
        assert player.teleports == []

    def test_success(self, registry, worlds, player):
        result = registry.teleport_to_zone(player, "arena")

        assert result.success
        assert result.message == "Teleported to zone: arena"
        [location] = player.teleports
        assert location.world is worlds.get_world("arena_world")
        assert (location.x, location.y, location.z) == (5.0, 80.0, 6.0)
        assert location.yaw == 180.0
        assert location.pitch == 0.0

    def test_world_unloaded_after_load(self, registry, worlds, player):
        worlds.unload("arena_world")

        result = registry.teleport_to_zone(player, "Arena")

        assert not result.success
        assert result.message == "Zone world not loaded: arena_world"
        assert player.teleports == []

    def test_host_failure_is_reported_not_raised(self, registry):
        player = FakePlayer(teleport_error=RuntimeError("chunk not loaded"))

        result = registry.teleport_to_zone(player, "hub")

        assert not result.success
        assert result.message == "Teleport failed: chunk not loaded"

    def test_teleport_does_not_change_registry(self, registry, player):
        before = registry.list_zone_ids()

        registry.teleport_to_zone(player, "hub")
        registry.teleport_to_zone(player, "missing")

        assert registry.list_zone_ids() == before
