import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import STATES, STATES_ARTIFACT
from data_store import MigrationDataStore, write_collection
from generator import generate_all


@pytest.fixture(scope="session")
def generated():
    """One seeded run of every collection, shared across the suite."""
    return generate_all(seed=2020)


@pytest.fixture(scope="session")
def data_dir(generated, tmp_path_factory):
    directory = tmp_path_factory.mktemp("data")
    for name, data in generated.items():
        write_collection(str(directory), name, data)
    write_collection(str(directory), STATES_ARTIFACT, STATES)
    return directory


@pytest.fixture(scope="session")
def store(data_dir):
    return MigrationDataStore.load(str(data_dir))
