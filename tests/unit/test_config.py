"""
Unit tests for bootstrap/config.py and bootstrap/logging_setup.py
"""

import json
import logging

import pytest

from initsort.bootstrap.config import (
    ExecutionConfig,
    InitSortConfig,
    LoggingConfig,
    ResolutionConfig,
    load_config,
)
from initsort.bootstrap.logging_setup import HANDLER_MARK, JSONFormatter, setup_logging
from initsort.core.enums import StartOrder
from initsort.errors.taxonomy import ConfigurationError


ENV_VARS = [
    "INITSORT_BASE_PRIORITY",
    "INITSORT_PRIORITY_STEP",
    "INITSORT_NORMALIZE",
    "INITSORT_START_ORDER",
    "INITSORT_UNIT_TIMEOUT",
    "INITSORT_LOG_LEVEL",
    "INITSORT_LOG_FILE",
    "INITSORT_JSON_LOGS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestResolutionConfig:
    """Test resolution settings."""

    def test_defaults(self):
        config = ResolutionConfig()
        assert config.base_priority == 1000
        assert config.priority_step == 10
        assert config.normalize_non_negative is True
        assert config.start_order == StartOrder.DECLARATION

    def test_start_order_string_parsed(self):
        assert ResolutionConfig(start_order="lexicographic-id").start_order == StartOrder.LEXICOGRAPHIC

    def test_invalid_start_order(self):
        with pytest.raises(ConfigurationError):
            ResolutionConfig(start_order="shuffled")

    @pytest.mark.parametrize("step", [0, -1])
    def test_invalid_step(self, step):
        with pytest.raises(ConfigurationError):
            ResolutionConfig(priority_step=step)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("INITSORT_BASE_PRIORITY", "500")
        monkeypatch.setenv("INITSORT_PRIORITY_STEP", "5")
        monkeypatch.setenv("INITSORT_NORMALIZE", "false")
        monkeypatch.setenv("INITSORT_START_ORDER", "lexicographic")

        config = ResolutionConfig.from_env()
        assert config.base_priority == 500
        assert config.priority_step == 5
        assert config.normalize_non_negative is False
        assert config.start_order == StartOrder.LEXICOGRAPHIC

    def test_from_env_invalid_number(self, monkeypatch):
        monkeypatch.setenv("INITSORT_BASE_PRIORITY", "lots")
        with pytest.raises(ConfigurationError):
            ResolutionConfig.from_env()

    @pytest.mark.parametrize("field_name", ["base_priority", "priority_step"])
    @pytest.mark.parametrize("value", ["ten", None, [10]])
    def test_non_numeric_values(self, field_name, value):
        with pytest.raises(ConfigurationError):
            ResolutionConfig(**{field_name: value})

    def test_numeric_strings_converted(self):
        config = ResolutionConfig(base_priority="500", priority_step="5")
        assert config.base_priority == 500
        assert config.priority_step == 5


class TestExecutionConfig:

    def test_default_no_timeout(self):
        assert ExecutionConfig.from_env().unit_timeout_seconds is None

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("INITSORT_UNIT_TIMEOUT", "2.5")
        assert ExecutionConfig.from_env().unit_timeout_seconds == 2.5

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("INITSORT_UNIT_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError):
            ExecutionConfig.from_env()

    @pytest.mark.parametrize("timeout", ["soon", [1], 0, -2.5])
    def test_invalid_timeout_value(self, timeout):
        with pytest.raises(ConfigurationError):
            ExecutionConfig(unit_timeout_seconds=timeout)

    def test_timeout_converted_to_float(self):
        assert ExecutionConfig(unit_timeout_seconds="1.5").unit_timeout_seconds == 1.5


class TestInitSortConfig:
    """Test file loading and serialization."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "initsort.json"
        path.write_text(json.dumps({
            "resolution": {"base_priority": 200, "start_order": "lexicographic"},
            "execution": {"unit_timeout_seconds": 3},
            "logging": {"level": "DEBUG"},
        }))
        config = InitSortConfig.from_file(str(path))

        assert config.resolution.base_priority == 200
        assert config.resolution.priority_step == 10
        assert config.resolution.start_order == StartOrder.LEXICOGRAPHIC
        assert config.execution.unit_timeout_seconds == 3
        assert config.logging.level == "DEBUG"

    def test_file_invalid_values(self, tmp_path):
        path = tmp_path / "initsort.json"
        path.write_text(json.dumps({"resolution": {"priority_step": 0}}))
        with pytest.raises(ConfigurationError):
            InitSortConfig.from_file(str(path))

    @pytest.mark.parametrize("data", [
        {"resolution": {"priority_step": "ten"}},
        {"resolution": {"base_priority": None}},
        {"execution": {"unit_timeout_seconds": "soon"}},
        {"execution": {"unit_timeout_seconds": -1}},
        {"logging": {"level": "LOUD"}},
        {"logging": {"level": 10}},
        {"resolution": ["priority_step", 5]},
        ["resolution"],
    ])
    def test_file_invalid_sections(self, tmp_path, data):
        path = tmp_path / "initsort.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigurationError):
            InitSortConfig.from_file(str(path))

    def test_file_invalid_json(self, tmp_path):
        path = tmp_path / "initsort.json"
        path.write_text("{")
        with pytest.raises(ConfigurationError):
            InitSortConfig.from_file(str(path))

    def test_missing_file_falls_back(self, tmp_path):
        config = InitSortConfig.from_file(str(tmp_path / "absent.json"))
        assert config.resolution.base_priority == 1000

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = tmp_path / "initsort.json"
        path.write_text(json.dumps({"resolution": {"mystery": 1}}))
        with caplog.at_level(logging.WARNING):
            config = InitSortConfig.from_file(str(path))
        assert not hasattr(config.resolution, "mystery")
        assert "resolution.mystery" in caplog.text

    def test_to_dict(self):
        data = InitSortConfig().to_dict()
        assert data["resolution"]["start_order"] == "declaration"
        assert data["execution"]["unit_timeout_seconds"] is None

    def test_load_config_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"resolution": {"priority_step": 25}}))
        assert load_config(str(path)).resolution.priority_step == 25

    def test_load_config_search_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "initsort.json").write_text(json.dumps({"resolution": {"base_priority": 77}}))
        assert load_config().resolution.base_priority == 77

    def test_load_config_not_cached(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() is not load_config()


class TestLoggingSetup:
    """Test logging configuration."""

    def test_json_formatter(self):
        record = logging.LogRecord("initsort.test", logging.WARNING, __file__, 1, "hello %s", ("x",), None)
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello x"
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "initsort.test"

    def test_setup_logging_replaces_own_handlers(self, tmp_path):
        root = logging.getLogger()
        original_level = root.level
        try:
            setup_logging("DEBUG")
            setup_logging("WARNING", log_file=str(tmp_path / "initsort.log"))
            ours = [h for h in root.handlers if getattr(h, HANDLER_MARK, False)]
            assert len(ours) == 2
            assert root.level == logging.WARNING
        finally:
            for handler in [h for h in root.handlers if getattr(h, HANDLER_MARK, False)]:
                root.removeHandler(handler)
                handler.close()
            root.setLevel(original_level)

    def test_logging_config_from_env(self, monkeypatch):
        monkeypatch.setenv("INITSORT_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("INITSORT_JSON_LOGS", "true")
        config = LoggingConfig.from_env()
        assert config.level == "ERROR"
        assert config.json_logs is True

    def test_logging_level_normalized(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    def test_logging_level_invalid(self, monkeypatch):
        monkeypatch.setenv("INITSORT_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigurationError):
            LoggingConfig.from_env()
