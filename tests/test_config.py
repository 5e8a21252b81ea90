"""Tests for backend configuration loading."""

import json

import pytest

from r1cs_gadgets.config import DEFAULT_CONFIG, BackendConfig, load_config


def test_defaults() -> None:
    assert DEFAULT_CONFIG.capacity == 65536
    assert DEFAULT_CONFIG.check_satisfaction is False


def test_invalid_capacity() -> None:
    with pytest.raises(ValueError):
        BackendConfig(capacity=0)


def test_from_dict_overlays_defaults() -> None:
    config = BackendConfig.from_dict({"check_satisfaction": True})
    assert config.check_satisfaction is True
    assert config.capacity == DEFAULT_CONFIG.capacity


def test_from_dict_overlays_base() -> None:
    base = BackendConfig(capacity=128)
    config = BackendConfig.from_dict({"check_satisfaction": True}, base=base)
    assert config == BackendConfig(capacity=128, check_satisfaction=True)


def test_unknown_keys_rejected() -> None:
    with pytest.raises(ValueError, match="bogus"):
        BackendConfig.from_dict({"bogus": 1})


def test_to_dict_round_trip() -> None:
    config = BackendConfig(capacity=7, check_satisfaction=True)
    assert BackendConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:

    def test_load(self, tmp_path) -> None:
        path = tmp_path / "backend.json"
        path.write_text(json.dumps({"capacity": 2048}))
        config = load_config(str(path))
        assert config.capacity == 2048
        assert config.check_satisfaction is False

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_non_object(self, tmp_path) -> None:
        path = tmp_path / "backend.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "backend.json"
        path.write_text("{capacity: 1")
        with pytest.raises(json.JSONDecodeError):
            load_config(str(path))
