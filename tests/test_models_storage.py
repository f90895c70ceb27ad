"""Tests for the dataset model, its persisted layout, and the snapshot store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from psl_api.default_data import default_dataset
from psl_api.errors import StorageError
from psl_api.models import (
    Dataset,
    Fixture,
    HeadToHeadEntry,
    HeadToHeadMatch,
    RecentMatch,
    TeamRecord,
)
from psl_api.storage import (
    DATA_STORAGE_KEY,
    FORCE_REFRESH_KEY,
    LAST_FETCH_KEY,
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    SnapshotStore,
)

from conftest import NOW_MS


def _sample_dataset() -> Dataset:
    return Dataset(
        teams={
            "Lahore Qalandars": TeamRecord(
                name="Lahore Qalandars",
                matches=9,
                wins=4,
                losses=4,
                no_results=1,
                points=9,
                nrr="+0.958",
                form="LWNWW",
                recent_matches=[RecentMatch("Karachi Kings", "Lost by 4 wickets", "2025-05-04")],
            ),
            # Only partially known
            "Multan Sultans": TeamRecord(name="Multan Sultans", wins=1, losses=8),
        },
        head_to_head={
            "Karachi Kings-Lahore Qalandars": HeadToHeadEntry(
                total=1,
                matches=[HeadToHeadMatch("2025-05-04", "Karachi Kings won by 4 wickets")],
            )
        },
        fixtures={"Final": Fixture("Final", "TBA", "TBA", "2025-05-18", "7:00 PM", "Lahore")},
        news_items=[
            "PSL X trophy 'Luminara' unveiled — 22,000 zircon stones ✨",
            'Fakhar: "we\'ll be back" & <b>not</b> HTML',
        ],
        last_updated="2025-05-08T12:00:00.000Z",
    )


class TestModels:
    def test_team_form_trimmed_to_last_five(self) -> None:
        t = TeamRecord(name="Islamabad United", form="WWWWWLLW")
        assert t.form == "WWLLW"

    def test_team_to_dict_omits_unknown_fields(self) -> None:
        d = TeamRecord(name="Multan Sultans", wins=1, losses=8).to_dict()
        assert d == {"wins": 1, "losses": 8}

    def test_team_to_dict_uses_camel_case(self) -> None:
        d = _sample_dataset().teams["Lahore Qalandars"].to_dict()
        assert d["noResults"] == 1
        assert d["recentMatches"][0]["opponent"] == "Karachi Kings"

    def test_dataset_layout_keys(self) -> None:
        d = _sample_dataset().to_dict()
        assert set(d) == {"teams", "headToHead", "venues", "matches", "newsItems", "lastUpdated"}
        assert "scores" not in d["headToHead"]["Karachi Kings-Lahore Qalandars"]["matches"][0]

    def test_dataset_round_trip(self) -> None:
        ds = _sample_dataset()
        assert Dataset.from_dict(json.loads(json.dumps(ds.to_dict()))) == ds

    def test_is_empty_ignores_timestamp(self) -> None:
        assert Dataset(last_updated="2025-05-08T00:00:00.000Z").is_empty()
        assert not Dataset(news_items=["x"]).is_empty()

    def test_copy_is_deep(self) -> None:
        ds = _sample_dataset()
        clone = ds.copy()
        clone.teams["Lahore Qalandars"].points = 99
        assert ds.teams["Lahore Qalandars"].points == 9

    def test_from_dict_rejects_non_object(self) -> None:
        with pytest.raises(ValueError):
            Dataset.from_dict(["not", "a", "dataset"])

    def test_default_dataset_complete(self) -> None:
        ds = default_dataset()
        assert len(ds.teams) == 6
        assert all(len(t.form or "") <= 5 for t in ds.teams.values())
        assert ds.last_updated == "2025-05-03T18:30:00.000Z"
        assert "Final" in ds.fixtures


class TestSnapshotStore:
    def test_empty_store(self, store: SnapshotStore) -> None:
        assert store.get() is None
        assert store.last_fetch_time() is None

    def test_put_then_get(self, store: SnapshotStore, backend: MemoryKeyValueStore) -> None:
        ds = _sample_dataset()
        store.put(ds)

        assert store.get() == ds
        assert store.last_fetch_time() == NOW_MS
        assert backend.get_item(LAST_FETCH_KEY) == str(NOW_MS)

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2, 3]", "null"])
    def test_corrupt_cache_reads_as_absent(self, store: SnapshotStore, backend: MemoryKeyValueStore, raw: str) -> None:
        backend.set_item(DATA_STORAGE_KEY, raw)
        assert store.get() is None

    def test_malformed_timestamp_ignored(self, store: SnapshotStore, backend: MemoryKeyValueStore) -> None:
        backend.set_item(LAST_FETCH_KEY, "yesterday")
        assert store.last_fetch_time() is None

    def test_backend_failure_raises_storage_error(self, clock) -> None:
        class FullBackend(MemoryKeyValueStore):
            def set_item(self, key: str, value: str) -> None:
                raise OSError("quota exceeded")

        with pytest.raises(StorageError):
            SnapshotStore(FullBackend(), clock=clock).put(_sample_dataset())

    def test_force_refresh_flag_is_one_shot(self, store: SnapshotStore, backend: MemoryKeyValueStore) -> None:
        store.put(_sample_dataset())
        store.request_force_refresh()

        assert backend.get_item(FORCE_REFRESH_KEY) == "true"
        assert store.get() is None
        assert store.force_refresh_pending()
        assert store.pop_force_flag() is True
        assert store.pop_force_flag() is False
        assert not store.force_refresh_pending()


class TestJsonFileKeyValueStore:
    def test_persists_across_instances(self, tmp_path: Path, clock) -> None:
        path = tmp_path / "cache" / "store.json"
        SnapshotStore(JsonFileKeyValueStore(path), clock=clock).put(_sample_dataset())

        reopened = SnapshotStore(JsonFileKeyValueStore(path), clock=clock)
        assert reopened.get() == _sample_dataset()
        assert reopened.last_fetch_time() == NOW_MS

    def test_remove_item(self, tmp_path: Path) -> None:
        kv = JsonFileKeyValueStore(tmp_path / "store.json")
        kv.set_item("a", "1")
        kv.remove_item("a")
        kv.remove_item("missing")
        assert kv.get_item("a") is None

    def test_unreadable_file_treated_as_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{{{ garbage", encoding="utf-8")
        assert JsonFileKeyValueStore(path).get_item(DATA_STORAGE_KEY) is None
