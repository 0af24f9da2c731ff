import json
from pathlib import Path

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, validate_config


def write_config(tmp_path, data):
    path = tmp_path / "runtime_config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config() == DEFAULT_CONFIG


def test_default_path_is_used_when_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "runtime_config.json").write_text('{"verbose": true}', encoding="utf-8")
    assert load_config()["verbose"] is True


def test_explicit_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"))


def test_overrides_are_merged(tmp_path):
    config = load_config(str(write_config(tmp_path, {"log_results": True, "log_file_prefix": "tm_"})))
    assert config["log_results"] is True
    assert config["log_file_prefix"] == "tm_"
    assert config["output_directory"] == DEFAULT_CONFIG["output_directory"]


def test_wrong_type(tmp_path):
    with pytest.raises(TypeError):
        load_config(str(write_config(tmp_path, {"verbose": "yes"})))


def test_unknown_key(tmp_path):
    with pytest.raises(ValueError):
        load_config(str(write_config(tmp_path, {"max_steps": 10})))


def test_missing_key():
    config = DEFAULT_CONFIG.copy()
    del config["verbose"]
    with pytest.raises(ValueError):
        validate_config(config)


def test_echo_prints_summary(tmp_path, capsys):
    load_config(str(write_config(tmp_path, {})), echo=True)
    out = capsys.readouterr().out
    assert "Loaded config:" in out
    assert "log_results: False" in out


def test_checkout_config_matches_defaults(monkeypatch):
    monkeypatch.chdir(Path(__file__).resolve().parent.parent)
    assert load_config() == DEFAULT_CONFIG
