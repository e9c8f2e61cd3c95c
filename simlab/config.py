"""
Project configuration and constants.

Defaults live here as module-level constants. A JSON settings file may
override a subset of them through load_settings(); invalid entries fall
back to the defaults instead of raising.
"""
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Optional, Union
import json
import logging
import os

logger = logging.getLogger(__name__)

# Distribution tables
PROBABILITY_TOLERANCE = 0.001
TWO_DIGIT_SCALE = 100   # "01".."00" random numbers
ONE_DIGIT_SCALE = 10    # "1".."0" random numbers

# Random number generators
DEFAULT_MID_SQUARE_DIGITS = 4

# Randomness tests
DEFAULT_SIGNIFICANCE = 0.05
DEFAULT_CHI_SQUARE_INTERVALS = 10

# Multi-server queue
DEFAULT_PRIORITY_SERVER = 1
VALID_SERVERS = (1, 2)

# Two-tailed standard normal critical values from the printed tables
Z_CRITICAL_TABLE = MappingProxyType({
    0.10: 1.645,
    0.05: 1.96,
    0.01: 2.576,
})

# Validation bounds for settings overrides
MIN_SIGNIFICANCE = 0.001
MAX_SIGNIFICANCE = 0.5
MAX_MID_SQUARE_DIGITS = 12

SETTINGS_ENV_VAR = "SIMLAB_HOME"
SETTINGS_FILENAME = "settings.json"


@dataclass(frozen=True)
class SimulationSettings:
    """Tunable defaults consumed by the presentation shell."""
    significance_level: float = DEFAULT_SIGNIFICANCE
    mid_square_digits: int = DEFAULT_MID_SQUARE_DIGITS
    chi_square_intervals: int = DEFAULT_CHI_SQUARE_INTERVALS
    priority_server: int = DEFAULT_PRIORITY_SERVER


def default_settings_path() -> Path:
    """
    Resolve the settings file location.

    Uses $SIMLAB_HOME when set, otherwise the current working directory.
    """
    base = os.environ.get(SETTINGS_ENV_VAR)
    root = Path(base) if base else Path.cwd()
    return root / SETTINGS_FILENAME


def _clamped_float(raw: Any, default: float, low: float, high: float) -> float:
    try:
        value = float(raw)
    except (ValueError, TypeError):
        return default
    if value != value:  # NaN
        return default
    return max(low, min(high, value))


def _clamped_int(raw: Any, default: int, low: int, high: Optional[int] = None) -> int:
    if isinstance(raw, bool):
        return default
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return default
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def normalize_settings(section: Dict[str, Any]) -> SimulationSettings:
    """
    Validate and normalize the "simulation" settings section.

    Applies fallback defaults and clamps values to valid ranges.
    Does not raise.

    Args:
        section: Raw "simulation" mapping (possibly empty or partial)

    Returns:
        SimulationSettings with every field valid
    """
    defaults = SimulationSettings()
    if not isinstance(section, dict):
        return defaults

    priority = section.get("priority_server", defaults.priority_server)
    if priority not in VALID_SERVERS or isinstance(priority, bool):
        priority = defaults.priority_server

    return replace(
        defaults,
        significance_level=_clamped_float(
            section.get("significance_level", defaults.significance_level),
            defaults.significance_level,
            MIN_SIGNIFICANCE,
            MAX_SIGNIFICANCE,
        ),
        mid_square_digits=_clamped_int(
            section.get("mid_square_digits", defaults.mid_square_digits),
            defaults.mid_square_digits,
            1,
            MAX_MID_SQUARE_DIGITS,
        ),
        chi_square_intervals=_clamped_int(
            section.get("chi_square_intervals", defaults.chi_square_intervals),
            defaults.chi_square_intervals,
            1,
        ),
        priority_server=priority,
    )


def load_settings(path: Optional[Union[str, Path]] = None) -> SimulationSettings:
    """
    Load simulation settings from settings.json.

    Args:
        path: Explicit settings file (defaults to default_settings_path())

    Returns:
        SimulationSettings; defaults when the file is missing or unreadable
    """
    settings_file = Path(path) if path is not None else default_settings_path()
    if not settings_file.exists():
        return SimulationSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable settings file {settings_file}: {e}")
        return SimulationSettings()

    if not isinstance(data, dict):
        return SimulationSettings()
    return normalize_settings(data.get("simulation", {}))
