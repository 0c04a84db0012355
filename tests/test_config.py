"""Tests for configuration handling"""
import pytest

from gitree.config import Config
from gitree.utils.threading import get_optimal_worker_count, get_threading_info


class TestConfig:
    """Test Config defaults and validation."""

    def test_defaults(self):
        config = Config()
        assert config.timeout == 10.0
        assert config.max_concurrency is None
        assert config.scan_timeout == 300.0
        assert config.color == "auto"
        assert config.show_root is True
        assert config.root_label == "."

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timeout": 0},
            {"timeout": -1},
            {"scan_timeout": 0},
            {"max_concurrency": 0},
            {"color": "sometimes"},
            {"root_label": "   "},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_root_label_stripped(self):
        assert Config(root_label=" top ").root_label == "top"

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"timeout": 3, "color": "never", "legacy_option": "x"})
        assert config.timeout == 3
        assert config.color == "never"

    def test_to_dict_round_trip(self):
        config = Config(timeout=4.0, max_concurrency=2, verbose=True)
        assert Config.from_dict(config.to_dict()) == config

    def test_get(self):
        config = Config(debug=True)
        assert config.get("debug") is True
        assert config.get("missing", "fallback") == "fallback"

    def test_explicit_workers(self):
        assert Config(max_concurrency=4).workers == 4

    def test_auto_workers_capped(self):
        assert 1 <= Config().workers <= 10


class TestWorkerCount:
    """Test pool sizing."""

    def test_user_value_wins(self):
        assert get_optimal_worker_count(25) == 25

    def test_auto_respects_cap(self, monkeypatch):
        monkeypatch.setattr("os.cpu_count", lambda: 64)
        assert get_optimal_worker_count(cap=10) == 10

    def test_auto_small_machine(self, monkeypatch):
        monkeypatch.setattr("os.cpu_count", lambda: 2)
        monkeypatch.setattr(
            "gitree.utils.threading.is_free_threading_enabled", lambda: False
        )
        assert get_optimal_worker_count(cap=10) == 6

    def test_threading_info_keys(self):
        info = get_threading_info()
        assert {"mode", "free_threading", "cpu_count", "optimal_workers", "python_version"} <= set(info)
