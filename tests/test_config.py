"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from dutyroster.io.config import DEFAULT_STATE_PATH, RosterConfig, load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg.slot_count == 47
    assert cfg.step == 2
    assert cfg.state_path == DEFAULT_STATE_PATH
    assert cfg.check_interval_minutes == 30.0
    assert cfg.presence_interval_seconds == 1.5
    assert cfg.use_ntp is False
    assert "pool.ntp.org" in cfg.ntp_servers


def test_load_yaml(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text(
        "slot_count: 30\n"
        "state_path: /tmp/roster.ini\n"
        "use_ntp: true\n"
        "ntp_servers:\n"
        "  - time.example.org\n"
    )

    cfg = load_config(path)

    assert cfg.slot_count == 30
    assert cfg.step == 2
    assert cfg.state_path == "/tmp/roster.ini"
    assert cfg.use_ntp is True
    assert cfg.ntp_servers == ["time.example.org"]


def test_load_json(tmp_path):
    path = tmp_path / "roster.json"
    path.write_text(json.dumps({"step": 3, "check_interval_minutes": 5}))

    cfg = load_config(path)

    assert cfg.step == 3
    assert cfg.check_interval_minutes == 5


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == RosterConfig()


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text("slot_count: 20\ncolour: blue\n")
    assert load_config(path).slot_count == 20


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    ["slot_count: 1\n", "step: 0\n", "check_interval_minutes: 0\n", "presence_interval_seconds: -1\n"],
)
def test_invalid_values(tmp_path, content):
    path = tmp_path / "roster.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(path)


def test_non_mapping_root(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_sample_config_loads():
    cfg = load_config(Path(__file__).resolve().parent.parent / "roster_config.yaml")
    assert cfg == RosterConfig(state_path="duty_config.ini")


def test_quoted_values_are_coerced(tmp_path):
    path = tmp_path / "roster.yaml"
    path.write_text('slot_count: "47"\nstep: "2"\ncheck_interval_minutes: "15"\nuse_ntp: "yes"\nntp_servers: time.example.org\n')

    cfg = load_config(path)

    assert cfg.slot_count == 47
    assert cfg.step == 2
    assert cfg.check_interval_minutes == 15.0
    assert cfg.use_ntp is True
    assert cfg.ntp_servers == ["time.example.org"]


@pytest.mark.parametrize(
    "content",
    ['slot_count: "many"\n', "step: 2.5\n", "use_ntp: maybe\n", "presence_interval_seconds: [1]\n", "slot_count: true\n"],
)
def test_wrong_types_raise_value_error(tmp_path, content):
    path = tmp_path / "roster.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(path)
