"""
Reads and writes the generated artifacts, and holds the loaded collections.

A list collection larger than JSONL_THRESHOLD is stored as line-delimited JSON
(``<name>.jsonl``). Every other collection is stored as a single document
(``<name>.json``). Readers accept either encoding, and ``.jsonl`` wins when
both exist.
"""

import contextlib
import json
import os
from typing import Any, Dict, List

from config import (
    EMOTIONS_ARTIFACT,
    FLOWS_ARTIFACT,
    INFODEMIC_ARTIFACT,
    JSONL_THRESHOLD,
    POLICIES_ARTIFACT,
    RESILIENCE_ARTIFACT,
    STATE_DATA_ARTIFACT,
    STATES_ARTIFACT,
    TIME_SERIES_ARTIFACT,
)


class DataWriteError(Exception):
    """Raised when an artifact cannot be written; generation stops."""


class DataLoadError(Exception):
    """Raised when an artifact is missing or cannot be parsed; serving must not start."""


def _remove_if_exists(path: str) -> None:
    if os.path.exists(path):
        os.remove(path)


def write_collection(data_dir: str, name: str, data: Any, jsonl_threshold: int = JSONL_THRESHOLD) -> str:
    """
    Writes one collection to data_dir and returns the path written.

    Args:
        data_dir: Target directory; created if missing.
        name: Artifact stem, e.g. "migrationFlows".
        data: A list of records or a keyed dict of records.
        jsonl_threshold: Lists longer than this are streamed one record per line.

    Raises:
        DataWriteError: If the directory or file cannot be written.
    """
    json_path = os.path.join(data_dir, f"{name}.json")
    jsonl_path = os.path.join(data_dir, f"{name}.jsonl")
    print(f"Writing {name}...")

    use_jsonl = isinstance(data, list) and len(data) > jsonl_threshold
    target, stale = (jsonl_path, json_path) if use_jsonl else (json_path, jsonl_path)
    # The previous artifact stays in place until the new one is complete.
    tmp_path = target + ".tmp"

    try:
        os.makedirs(data_dir, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as handle:
            if use_jsonl:
                for item in data:
                    handle.write(json.dumps(item) + "\n")
            else:
                json.dump(data, handle, indent=2)
        os.replace(tmp_path, target)
        _remove_if_exists(stale)
    except OSError as exc:
        raise DataWriteError(f"Could not write {name} to {data_dir}: {exc}") from exc
    finally:
        with contextlib.suppress(OSError):
            _remove_if_exists(tmp_path)

    if use_jsonl:
        print(f"  ✓ Wrote {name}.jsonl (JSONL format for large data)")
    else:
        print(f"  ✓ Wrote {name}.json")
    return target


def load_jsonl(path: str) -> List[Any]:
    records: List[Any] = []
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                records.append(json.loads(line))
    return records


def load_data_file(data_dir: str, name: str) -> Any:
    """Loads ``<name>.jsonl`` if present, otherwise ``<name>.json``."""
    json_path = os.path.join(data_dir, f"{name}.json")
    jsonl_path = os.path.join(data_dir, f"{name}.jsonl")

    try:
        if os.path.exists(jsonl_path):
            print(f"Loading {name}.jsonl...")
            return load_jsonl(jsonl_path)
        if os.path.exists(json_path):
            print(f"Loading {name}.json...")
            with open(json_path, "r", encoding="utf-8") as handle:
                return json.load(handle)
    except (OSError, ValueError) as exc:
        raise DataLoadError(f"Could not parse {name} in {data_dir}: {exc}") from exc

    raise DataLoadError(f"Neither {name}.json nor {name}.jsonl found in {data_dir}")


class MigrationDataStore:
    """Immutable snapshot of every collection, loaded once before serving."""

    def __init__(
        self,
        migration_flows: List[Dict[str, Any]],
        state_data: Dict[str, Dict[str, Any]],
        time_series: List[Dict[str, Any]],
        infodemic: List[Dict[str, Any]],
        policies: List[Dict[str, Any]],
        resilience: List[Dict[str, Any]],
        emotions: List[Dict[str, Any]],
        states: Dict[str, Dict[str, Any]],
    ):
        self.migration_flows = migration_flows
        self.state_data = state_data
        self.time_series = time_series
        self.infodemic = infodemic
        self.policies = policies
        self.resilience = resilience
        self.emotions = emotions
        self.states = states

    @classmethod
    def load(cls, data_dir: str) -> "MigrationDataStore":
        """Loads all artifacts from data_dir. Any missing or malformed file raises DataLoadError."""
        print("Loading data files...")
        store = cls(
            migration_flows=load_data_file(data_dir, FLOWS_ARTIFACT),
            state_data=load_data_file(data_dir, STATE_DATA_ARTIFACT),
            time_series=load_data_file(data_dir, TIME_SERIES_ARTIFACT),
            infodemic=load_data_file(data_dir, INFODEMIC_ARTIFACT),
            policies=load_data_file(data_dir, POLICIES_ARTIFACT),
            resilience=load_data_file(data_dir, RESILIENCE_ARTIFACT),
            emotions=load_data_file(data_dir, EMOTIONS_ARTIFACT),
            states=load_data_file(data_dir, STATES_ARTIFACT),
        )
        if not isinstance(store.state_data, dict) or not isinstance(store.states, dict):
            raise DataLoadError(f"{STATE_DATA_ARTIFACT} and {STATES_ARTIFACT} must be keyed documents")

        for name, count in store.counts().items():
            print(f"  ✓ Loaded {count} {name} records")
        print("✓ All data loaded successfully!")
        return store

    def counts(self) -> Dict[str, int]:
        return {
            FLOWS_ARTIFACT: len(self.migration_flows),
            STATE_DATA_ARTIFACT: len(self.state_data),
            TIME_SERIES_ARTIFACT: len(self.time_series),
            INFODEMIC_ARTIFACT: len(self.infodemic),
            POLICIES_ARTIFACT: len(self.policies),
            RESILIENCE_ARTIFACT: len(self.resilience),
            EMOTIONS_ARTIFACT: len(self.emotions),
            STATES_ARTIFACT: len(self.states),
        }
