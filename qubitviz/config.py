import os
from dataclasses import dataclass

MIN_QUBITS = 1
MAX_QUBITS = 4


def _int_from_env(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    """Return a floating-point value parsed from the environment."""

    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _bool_from_env(name: str, default: bool) -> bool:
    """Return a boolean value parsed from the environment."""

    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    val = val.strip().lower()
    if val in {"1", "true", "yes", "on"}:
        return True
    if val in {"0", "false", "no", "off"}:
        return False
    return default


def _qubits_from_env(name: str, default: int) -> int:
    """Return a qubit count from the environment clamped to the supported range."""

    value = _int_from_env(name, default)
    return max(MIN_QUBITS, min(MAX_QUBITS, value))


@dataclass
class Config:
    """Runtime configuration defaults for qubitviz.

    Values may be overridden via environment variables or by supplying
    explicit arguments to :class:`~qubitviz.simulation_engine.SimulationEngine`
    and :class:`~qubitviz.circuit_stats.CircuitStats`.
    """

    default_num_qubits: int = _qubits_from_env("QUBITVIZ_DEFAULT_QUBITS", 2)
    probability_tolerance: float = _float_from_env(
        "QUBITVIZ_PROBABILITY_TOLERANCE", 1e-6
    )
    ket_threshold: float = _float_from_env("QUBITVIZ_KET_THRESHOLD", 1e-6)
    ket_digits: int = _int_from_env("QUBITVIZ_KET_DIGITS", 2)
    strict_swap_columns: bool = _bool_from_env("QUBITVIZ_STRICT_SWAP_COLUMNS", False)
    verbose_simulation: bool = _bool_from_env("QUBITVIZ_VERBOSE_SIMULATION", False)


# Global configuration instance used when modules import ``qubitviz.config``.
DEFAULT = Config()


def from_environment() -> Config:
    """Return a fresh :class:`Config` reflecting the current environment.

    Dataclass defaults are evaluated once at import time, so a changed
    environment is only visible through this helper.
    """

    return Config(
        default_num_qubits=_qubits_from_env("QUBITVIZ_DEFAULT_QUBITS", 2),
        probability_tolerance=_float_from_env("QUBITVIZ_PROBABILITY_TOLERANCE", 1e-6),
        ket_threshold=_float_from_env("QUBITVIZ_KET_THRESHOLD", 1e-6),
        ket_digits=_int_from_env("QUBITVIZ_KET_DIGITS", 2),
        strict_swap_columns=_bool_from_env("QUBITVIZ_STRICT_SWAP_COLUMNS", False),
        verbose_simulation=_bool_from_env("QUBITVIZ_VERBOSE_SIMULATION", False),
    )
