from __future__ import annotations

import json

from flux_tui import config


def test_missing_config_is_created_with_defaults(tmp_path):
    path = tmp_path / "flux" / "config.json"
    loaded = config.load_config(str(path))

    assert path.exists()
    with open(path) as f:
        assert json.load(f) == config.DEFAULT_CONFIG
    assert loaded == config.DEFAULT_CONFIG


def test_user_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "server_url": "https://flux.example.com",
        "api_key": "abc",
        "page_size": 20,
    }))
    loaded = config.load_config(str(path))

    assert loaded["server_url"] == "https://flux.example.com"
    assert loaded["page_size"] == 20
    assert loaded["theme"] == config.DEFAULT_THEME
    assert config.validate_config(loaded) == []


def test_corrupt_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert config.load_config(str(path)) == config.DEFAULT_CONFIG


def test_validate_reports_missing_credentials():
    problems = config.validate_config(dict(config.DEFAULT_CONFIG))
    assert "'server_url' is not set" in problems
    assert "'api_key' is not set" in problems


def test_validate_rejects_bad_numbers():
    settings = dict(config.DEFAULT_CONFIG, server_url="https://x", api_key="k",
                    page_size=0, tick_interval="fast")
    problems = config.validate_config(settings)
    assert "'page_size' must be a positive number" in problems
    assert "'tick_interval' must be a positive number" in problems
    assert len(problems) == 2
