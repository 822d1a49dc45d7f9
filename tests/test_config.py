"""
Configuration and Logging Tests
"""

from __future__ import annotations

import logging

import pytest

from analytic_meg.config import (
    DEFAULT_CONFIG_PATH,
    get_config_path,
    get_default_config,
    load_config,
    load_config_safe,
)
from analytic_meg.logging_config import PACKAGE_LOGGER, setup_logging, setup_logging_from_config
from analytic_meg.physics.constants import DEFAULT_SCALING_FACTOR, MAG_FACTOR, MU0


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestConstants:
    """Test that physical constants are correctly defined."""

    def test_permeability(self) -> None:
        assert 1.2566e-6 < MU0 < 1.2567e-6

    def test_mag_factor(self) -> None:
        """mu0 / 4pi is 1e-7 to within CODATA revisions."""
        assert abs(MAG_FACTOR - 1e-7) < 1e-15


class TestLoadConfig:
    """Test YAML loading with fallback to defaults."""

    def test_default_config_structure(self) -> None:
        cfg = get_default_config()
        assert cfg["sphere"]["center"] == [0.0, 0.0, 0.0]
        assert cfg["sphere"]["scaling_factor"] == DEFAULT_SCALING_FACTOR
        assert cfg["evaluation"]["component"] == "total"

    def test_get_config_path_adds_extension(self) -> None:
        assert get_config_path("custom") == DEFAULT_CONFIG_PATH.parent / "custom.yaml"
        assert get_config_path("custom.yaml").name == "custom.yaml"

    def test_load_default(self) -> None:
        """Shipped file and hardcoded fallback agree."""
        cfg = load_config()
        assert cfg["sphere"]["center"] == [0.0, 0.0, 0.0]
        assert cfg["sphere"]["scaling_factor"] == 1.0
        assert cfg["evaluation"]["component"] == "total"

    def test_load_custom(self, tmp_path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("sphere:\n  center: [0.0, 0.0, 0.04]\n  scaling_factor: 2.0\n")

        cfg, errors = load_config_safe(path)

        assert errors == []
        assert cfg["sphere"]["scaling_factor"] == 2.0

    def test_missing_file_falls_back(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="analytic_meg.config"):
            cfg = load_config(tmp_path / "missing.yaml")

        assert cfg == get_default_config()
        assert "not found" in caplog.text

    def test_malformed_file_falls_back(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("sphere: [unclosed\n")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert len(errors) == 1
        assert "YAML parse error" in errors[0]

    def test_non_mapping_file_falls_back(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- 0.0\n- 1.0\n")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert "mapping" in errors[0]

    def test_missing_and_invalid_sections_filled(self, tmp_path) -> None:
        path = tmp_path / "partial.yaml"
        path.write_text("sphere: 3\n")

        cfg, errors = load_config_safe(path)

        assert cfg["sphere"] == get_default_config()["sphere"]
        assert cfg["evaluation"]["component"] == "total"
        assert len(errors) == 1
        assert "sphere" in errors[0]

    def test_empty_file_falls_back(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        cfg, errors = load_config_safe(path)

        assert cfg == get_default_config()
        assert "empty" in errors[0]


class TestLogging:
    """Test the package logger setup."""

    def test_setup_level_and_handler(self, package_logger) -> None:
        logger = setup_logging(logging.DEBUG)

        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_duplicate(self, package_logger) -> None:
        setup_logging()
        setup_logging()
        assert len(package_logger.handlers) == 1

    def test_string_level(self, package_logger) -> None:
        assert setup_logging("warning").level == logging.WARNING

    def test_unknown_level(self, package_logger) -> None:
        with pytest.raises(ValueError, match="Unknown logging level"):
            setup_logging("chatty")

    def test_log_file(self, package_logger, tmp_path) -> None:
        log_file = tmp_path / "meg.log"
        logger = setup_logging(logging.INFO, log_file=str(log_file))
        logging.getLogger("analytic_meg.physics").info("field evaluated")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "field evaluated" in log_file.read_text(encoding="utf-8")
        for handler in logger.handlers:
            handler.close()

    def test_repeated_setup_closes_file_handlers(self, package_logger, tmp_path) -> None:
        setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"))
        first = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)][0]

        setup_logging(logging.INFO, log_file=str(tmp_path / "second.log"))

        assert first.stream is None
        assert first not in package_logger.handlers
        for handler in package_logger.handlers:
            handler.close()

    def test_from_config(self, package_logger) -> None:
        logger = setup_logging_from_config({"logging": {"level": "ERROR"}})
        assert logger.level == logging.ERROR
        assert setup_logging_from_config({}).level == logging.INFO


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
