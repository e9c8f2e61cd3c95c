"""
Tests for the rotating-file logging setup.
"""

import logging
import logging.handlers

import pytest

from simlab import run_inventory
from simlab.utils.logging_config import setup_logging


@pytest.fixture
def app_logger(tmp_path):
    name = f"simlab_test_{tmp_path.name}"
    logger = setup_logging(log_dir=tmp_path / "logs", app_name=name)
    yield logger, tmp_path / "logs"
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def library_log_dir(tmp_path):
    """Configure the package logger itself, restoring its state afterwards."""
    root = logging.getLogger("simlab")
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)

    log_dir = tmp_path / "logs"
    setup_logging(log_dir=log_dir)
    yield log_dir

    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


class TestSetupLogging:

    def test_creates_log_dir_and_handlers(self, app_logger):
        logger, log_dir = app_logger
        assert log_dir.is_dir()
        kinds = {type(h) for h in logger.handlers}
        assert logging.handlers.RotatingFileHandler in kinds
        assert logging.StreamHandler in kinds

    def test_handler_levels(self, app_logger):
        logger, _ = app_logger
        for handler in logger.handlers:
            if isinstance(handler, logging.handlers.RotatingFileHandler):
                assert handler.level == logging.WARNING
                assert handler.maxBytes == 5 * 1024 * 1024
                assert handler.backupCount == 3
            else:
                assert handler.level == logging.CRITICAL

    def test_idempotent(self, app_logger, tmp_path):
        logger, log_dir = app_logger
        again = setup_logging(log_dir=log_dir, app_name=logger.name)
        assert again is logger
        assert len(again.handlers) == 2

    def test_debug_not_written(self, app_logger):
        logger, log_dir = app_logger
        logger.debug("noise")
        for handler in logger.handlers:
            handler.flush()
        content = next(log_dir.glob("*.log")).read_text(encoding="utf-8")
        assert "noise" not in content


class TestLibraryWarnings:
    """Simulator warnings reach the rotating file through the package logger."""

    def test_lead_time_exhaustion_written_to_file(self, library_log_dir):
        run_inventory(
            [(0, 0.5), (3, 0.5)],
            [(1, 1.0)],
            demand_digits=[60, 10, 10],
            lead_time_digits=[],
            cycles=1,
            days_per_cycle=3,
            initial_inventory=0,
            inventory_limit=10,
        )
        for handler in logging.getLogger("simlab").handlers:
            handler.flush()

        files = list(library_log_dir.glob("simlab_*.log"))
        assert len(files) == 1
        content = files[0].read_text(encoding="utf-8")
        assert "WARNING" in content
        assert "simlab.simulation.inventory" in content
        assert "exhausted" in content

    def test_debug_run_lines_not_written(self, library_log_dir):
        run_inventory(
            [(0, 0.5), (3, 0.5)],
            [(1, 1.0)],
            demand_digits=[10, 10, 10],
            lead_time_digits=[5],
            cycles=1,
            days_per_cycle=3,
            initial_inventory=5,
            inventory_limit=10,
        )
        for handler in logging.getLogger("simlab").handlers:
            handler.flush()

        content = next(library_log_dir.glob("simlab_*.log")).read_text(encoding="utf-8")
        assert "Inventory run" not in content
