import json

import pytest

from player_demand.core.models import Run, RunMetadata
from player_demand.core.storage import PersistenceError, ResultStore


def _run(test_type="micro", timestamp="2025-07-01T10:00:00+00:00"):
    return Run(
        test_type=test_type,
        source="DataForSEO Google Ads",
        timestamp=timestamp,
        metadata=RunMetadata(entities=["A"], markets=["UK"], keyword_count=1, actual_cost=0.05, api_mode="Sandbox"),
        raw_results={"UK": [{"keyword": "A x", "search_volume": 10, "monthly_searches": []}]},
        processed_results={"profiles": []},
    )


def test_save_and_get_round_trip(tmp_path):
    store = ResultStore(tmp_path / "runs")
    run = _run()

    run_id = store.save(run)

    assert run_id.startswith("micro_")
    assert run.id == run_id
    assert store.path_for(run_id).is_file()
    loaded = store.get(run_id)
    assert loaded.to_dict() == run.to_dict()


def test_get_missing_or_unsafe_id(tmp_path):
    store = ResultStore(tmp_path)

    assert store.get("micro_1_abc") is None
    assert store.get("../etc/passwd") is None
    assert store.get("") is None


def test_new_ids_are_unique(tmp_path):
    store = ResultStore(tmp_path)

    ids = {store.new_id("micro") for _ in range(500)}

    assert len(ids) == 500
    suffix = next(iter(ids)).split("_")[-1]
    assert len(suffix) == 9


def test_list_all_newest_first_and_tolerates_other_files(tmp_path):
    store = ResultStore(tmp_path)
    store.save(_run(timestamp="2025-07-01T10:00:00+00:00"))
    newest = store.save(_run(test_type="full_production", timestamp="2025-07-03T10:00:00+00:00"))
    store.save(_run(timestamp="2025-07-02T10:00:00+00:00"))

    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "list.json").write_text(json.dumps([1, 2, 3]))
    (tmp_path / "micro_1_x_raw_api.json").write_text(json.dumps({"id": "raw", "timestamp": "2030-01-01T00:00:00Z"}))
    (tmp_path / "epoch.json").write_text(json.dumps({"id": "x", "timestamp": 1700000000}))
    (tmp_path / "odd_metadata.json").write_text(
        json.dumps({"id": "y", "timestamp": "2030-01-01T00:00:00Z", "metadata": "not an object"})
    )
    (tmp_path / "odd_raw.json").write_text(
        json.dumps({"id": "z", "timestamp": "2030-01-01T00:00:00Z", "rawResults": ["UK"]})
    )

    runs = store.list_all()

    assert [r.timestamp[:10] for r in runs] == ["2025-07-03", "2025-07-02", "2025-07-01"]
    assert runs[0].id == newest


def test_list_all_missing_directory(tmp_path):
    assert ResultStore(tmp_path / "absent").list_all() == []


def test_files_labels_entries(tmp_path):
    store = ResultStore(tmp_path)
    run_id = store.save(_run())
    (tmp_path / "micro_1_x_raw_api.json").write_text("{}")
    (tmp_path / "notes.txt").write_text("hello")

    entries = {entry["file"]: entry["type"] for entry in store.files()}

    assert entries[f"{run_id}.json"] == "Processed Results"
    assert entries["micro_1_x_raw_api.json"] == "Raw API Data"
    assert entries["notes.txt"] == "Unknown"


def test_save_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    store = ResultStore(blocker / "runs")

    run = _run()

    with pytest.raises(PersistenceError):
        store.save(run)

    assert run.id == ""


def test_list_all_with_only_foreign_json(tmp_path):
    (tmp_path / "other.json").write_text(json.dumps({"id": "x", "timestamp": 1700000000}))

    assert ResultStore(tmp_path).list_all() == []


def test_saved_run_keeps_terms_and_primary_keywords(tmp_path):
    store = ResultStore(tmp_path)
    run = _run()
    run.metadata.terms = ["shirt", "jersey"]
    run.metadata.primary_keywords = {"A": "A shirt"}

    loaded = store.get(store.save(run))

    assert loaded.metadata.terms == ["shirt", "jersey"]
    assert loaded.metadata.primary_keywords == {"A": "A shirt"}
