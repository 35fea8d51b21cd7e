"""Tests for the UUID whitelist."""

from uuid import UUID

import pytest

from lere_access import ENABLED_KEY, PLAYERS_KEY, AccessRegistry, parse_identity
from lere_store import EntryStatus

from conftest import CountingStore

A = UUID("0f8fad5b-d9cb-469f-a165-70867728950e")
B = UUID("7c9e6679-7425-40de-944b-e07fc1f90ae7")
C = UUID("16fd2706-8baf-433b-82eb-8c7fada847da")


def _access(enabled=True, players=None):
    store = CountingStore(
        {"whitelist": {"enabled": enabled, "players": [str(u) for u in players or []]}}
    )
    access = AccessRegistry(store)
    access.load()
    return access, store


class TestIsAllowed:
    def test_disabled_allows_everyone(self):
        store = CountingStore({"whitelist": {"enabled": False, "players": [str(A)]}})
        access = AccessRegistry(store)
        access.load(force=True)

        assert access.is_allowed(A)
        assert access.is_allowed(C)

    def test_missing_flag_means_disabled(self):
        access = AccessRegistry(CountingStore())
        access.load()

        assert not access.enabled
        assert access.is_allowed(C)

    def test_enabled_checks_membership(self):
        access, _ = _access(players=[A, B])

        assert access.is_allowed(A)
        assert access.is_allowed(B)
        assert not access.is_allowed(C)

    def test_flag_is_read_on_every_check(self):
        access, store = _access(players=[A])
        assert not access.is_allowed(C)

        store.set(ENABLED_KEY, False)
        assert access.is_allowed(C)

        store.set(ENABLED_KEY, True)
        assert not access.is_allowed(C)

    def test_non_boolean_flag_is_disabled(self):
        access, _ = _access(enabled="yes", players=[A])

        assert not access.enabled
        assert access.is_allowed(C)


class TestLoad:
    def test_invalid_entries_are_dropped(self):
        store = CountingStore(
            {"whitelist": {"enabled": True, "players": [str(A), "not-a-uuid", " " + str(B) + " "]}}
        )
        access = AccessRegistry(store)

        report = access.load()

        assert access.list() == frozenset({A, B})
        assert [e.key for e in report.rejected] == ["not-a-uuid"]
        assert report.count(EntryStatus.ACCEPTED) == 2

    def test_non_canonical_entries_are_dropped(self):
        store = CountingStore({"whitelist": {"enabled": True, "players": [
            "{" + str(A) + "}",
            "urn:uuid:" + str(A),
            A.hex,
            str(B).upper(),
        ]}})
        access = AccessRegistry(store)

        report = access.load()

        assert access.list() == frozenset({B})
        assert len(report.rejected) == 3

    def test_load_replaces_previous_contents(self):
        access, store = _access(players=[A])
        store.set(PLAYERS_KEY, [str(B)])

        access.load()

        assert access.list() == frozenset({B})

    def test_load_does_not_persist(self):
        _, store = _access(players=[A, B])

        assert store.saves == 0

    def test_load_while_disabled_keeps_stale_set(self):
        access, store = _access(players=[A])

        store.set(ENABLED_KEY, False)
        store.set(PLAYERS_KEY, [str(B)])
        assert access.load() is None
        assert access.list() == frozenset({A})

        store.set(ENABLED_KEY, True)
        assert access.is_allowed(A)
        assert not access.is_allowed(B)

        access.load()
        assert access.list() == frozenset({B})

    def test_disabled_load_leaves_registry_unloaded(self):
        access, _ = _access(enabled=False, players=[A])

        assert not access.loaded
        assert access.list() == frozenset()

    def test_forced_load_reads_disabled_list(self):
        store = CountingStore({"whitelist": {"enabled": False, "players": [str(A)]}})
        access = AccessRegistry(store)

        report = access.load(force=True)

        assert report is not None
        assert access.loaded
        assert access.list() == frozenset({A})


class TestParseIdentity:
    @pytest.mark.parametrize("raw", [str(A), str(A).upper()])
    def test_canonical_forms(self, raw):
        assert parse_identity(raw) == A

    @pytest.mark.parametrize("raw", [
        "{" + str(A) + "}",
        "urn:uuid:" + str(A),
        A.hex,
        " " + str(A),
        "steve",
        "",
    ])
    def test_other_forms_are_rejected(self, raw):
        with pytest.raises(ValueError):
            parse_identity(raw)


class TestMutation:
    def test_add_persists_immediately(self):
        access, store = _access()

        assert access.add(A)

        assert store.saves == 1
        assert store.snapshots[-1]["whitelist"]["players"] == [str(A)]
        assert access.is_allowed(A)

    def test_add_existing_is_a_no_op(self):
        access, store = _access(players=[A])

        assert not access.add(A)
        assert store.saves == 0

    def test_remove_persists_immediately(self):
        access, store = _access(players=[A, B])

        assert access.remove(A)

        assert store.saves == 1
        assert store.get_string_list(PLAYERS_KEY) == [str(B)]
        assert not access.is_allowed(A)

    def test_remove_absent_is_a_no_op(self):
        access, store = _access(players=[A])

        assert not access.remove(C)
        assert store.saves == 0

    def test_saved_list_round_trips(self):
        access, store = _access(players=[B])
        access.add(A)
        access.add(C)

        fresh = AccessRegistry(store)
        fresh.load()

        assert fresh.list() == access.list() == frozenset({A, B, C})

    def test_saved_list_is_sorted(self):
        access, store = _access()
        for identity in (C, B, A):
            access.add(identity)

        assert store.get_string_list(PLAYERS_KEY) == sorted(str(u) for u in (A, B, C))

    def test_list_is_a_snapshot(self):
        access, _ = _access(players=[A])

        snapshot = access.list()
        access.add(B)

        assert snapshot == frozenset({A})
        with pytest.raises(AttributeError):
            snapshot.add(C)

    def test_add_before_any_load_keeps_saved_entries(self):
        access, store = _access(enabled=False, players=[A])
        assert not access.loaded

        assert access.add(B)

        assert access.loaded
        assert store.get_string_list(PLAYERS_KEY) == [str(A), str(B)]

    def test_remove_before_any_load_keeps_other_entries(self):
        access, store = _access(enabled=False, players=[A, B])

        assert access.remove(A)

        assert store.get_string_list(PLAYERS_KEY) == [str(B)]

    def test_add_of_saved_entry_before_any_load_is_a_no_op(self):
        access, store = _access(enabled=False, players=[A])

        assert not access.add(A)
        assert store.saves == 0
