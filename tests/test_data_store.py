"""Unit tests for artifact writing and loading."""

import errno
import json

import pytest

from config import STATES
from data_store import DataLoadError, DataWriteError, MigrationDataStore, load_data_file, write_collection


def test_large_collections_are_written_line_delimited(data_dir):
    assert (data_dir / "migrationFlows.jsonl").exists()
    assert not (data_dir / "migrationFlows.json").exists()
    assert (data_dir / "stateData.json").exists()
    assert (data_dir / "policies.json").exists()
    assert (data_dir / "states.json").exists()


def test_jsonl_round_trip_preserves_records(generated, data_dir):
    loaded = load_data_file(str(data_dir), "migrationFlows")
    assert loaded == generated["migrationFlows"]


def test_json_round_trip_preserves_keyed_collection(generated, data_dir):
    assert load_data_file(str(data_dir), "stateData") == generated["stateData"]


def test_threshold_selects_encoding(tmp_path):
    records = [{"id": i} for i in range(5)]
    small = write_collection(str(tmp_path), "small", records, jsonl_threshold=5)
    large = write_collection(str(tmp_path), "large", records, jsonl_threshold=4)

    assert small.endswith("small.json")
    assert large.endswith("large.jsonl")
    assert len((tmp_path / "large.jsonl").read_text().splitlines()) == 5


def test_rewrite_removes_stale_encoding(tmp_path):
    write_collection(str(tmp_path), "flows", [{"value": 1}] * 3, jsonl_threshold=2)
    write_collection(str(tmp_path), "flows", [{"value": 2}], jsonl_threshold=2)

    assert not (tmp_path / "flows.jsonl").exists()
    assert load_data_file(str(tmp_path), "flows") == [{"value": 2}]


def test_jsonl_preferred_and_blank_lines_skipped(tmp_path):
    (tmp_path / "emotions.json").write_text(json.dumps([{"source": "json"}]))
    (tmp_path / "emotions.jsonl").write_text('{"source": "jsonl"}\n\n')

    assert load_data_file(str(tmp_path), "emotions") == [{"source": "jsonl"}]


def test_missing_artifact_raises(tmp_path):
    with pytest.raises(DataLoadError, match="Neither infodemic.json nor infodemic.jsonl"):
        load_data_file(str(tmp_path), "infodemic")


def test_malformed_artifact_raises(tmp_path):
    (tmp_path / "policies.json").write_text("{not json")
    with pytest.raises(DataLoadError):
        load_data_file(str(tmp_path), "policies")


def test_write_failure_raises(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    with pytest.raises(DataWriteError):
        write_collection(str(blocker), "states", STATES)


class _DiskFullRecords(list):
    """List that fails with ENOSPC after yielding a few records."""

    def __init__(self, records, fail_after):
        super().__init__(records)
        self.fail_after = fail_after

    def __iter__(self):
        for index, item in enumerate(list.__iter__(self)):
            if index == self.fail_after:
                raise OSError(errno.ENOSPC, "No space left on device")
            yield item


def test_failed_rewrite_keeps_previous_artifact(tmp_path):
    old = [{"id": n} for n in range(3)]
    write_collection(str(tmp_path), "flows", old)

    failing = _DiskFullRecords([{"id": n} for n in range(10)], fail_after=4)
    with pytest.raises(DataWriteError):
        write_collection(str(tmp_path), "flows", failing, jsonl_threshold=5)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["flows.json"]
    assert load_data_file(str(tmp_path), "flows") == old


def test_store_loads_all_collections(store, generated):
    counts = store.counts()
    assert counts["migrationFlows"] == len(generated["migrationFlows"])
    assert counts["stateData"] == len(generated["stateData"])
    assert counts["states"] == 50
    assert all(count > 0 for count in counts.values())


def test_store_load_fails_on_partial_data_dir(tmp_path):
    write_collection(str(tmp_path), "migrationFlows", [])
    with pytest.raises(DataLoadError):
        MigrationDataStore.load(str(tmp_path))
