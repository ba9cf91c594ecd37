import json

import generate_data


def _small_collections(seed=None):
    return {
        "migrationFlows": [{"from": "Ohio", "to": "Texas", "value": 10}],
        "stateData": {},
        "timeSeries": [],
        "infodemic": [],
        "policies": [],
        "resilience": [],
        "emotions": [],
    }


def test_cli_writes_every_artifact(tmp_path, monkeypatch):
    monkeypatch.setattr(generate_data, "generate_all", _small_collections)

    assert generate_data.main(["--seed", "3", "--output-dir", str(tmp_path)]) == 0

    written = sorted(path.name for path in tmp_path.iterdir())
    assert written == [
        "emotions.json", "infodemic.json", "migrationFlows.json", "policies.json",
        "resilience.json", "stateData.json", "states.json", "timeSeries.json",
    ]
    assert len(json.loads((tmp_path / "states.json").read_text())) == 50


def test_cli_exits_non_zero_on_write_failure(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(generate_data, "generate_all", _small_collections)
    blocker = tmp_path / "occupied"
    blocker.write_text("")

    assert generate_data.main(["--output-dir", str(blocker)]) == 1
    assert "Data generation failed" in capsys.readouterr().err


def test_output_dir_defaults_to_env(tmp_path, monkeypatch):
    monkeypatch.setattr(generate_data, "generate_all", _small_collections)
    monkeypatch.setenv("MIGRATION_DATA_DIR", str(tmp_path / "from_env"))

    assert generate_data.main([]) == 0
    assert (tmp_path / "from_env" / "states.json").exists()
