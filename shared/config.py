"""
PassWarden Configuration Management
====================================

Centralised configuration for the PassWarden toolkit using Python
dataclasses and TOML-based persistence.

Configuration is kept separate from code so that brute-force speed
tables, breach-lookup endpoints, and generator parameters can be tuned
per deployment without touching the analyzers.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
    - hashcat benchmark tables (RTX 4090, hashcat 6.2.6).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

# shortest length whose best-case entropy can still reach score 5 (128 bits)
MIN_RELIABLE_LENGTH = 20


def _default_crack_speeds() -> dict[str, float]:
    """Single-GPU guesses per second for each supported hash algorithm."""
    return {
        "MD5": 164.1e9,
        "SHA1": 50.6e9,
        "SHA2_224": 21.9e9,
        "SHA3_224": 4.7e9,
        "BCRYPT": 184.0e3,
        "SCRYPT": 7.1e3,
    }


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across all PassWarden components.

    Controls logging verbosity and the default report directory.
    """

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    output_dir: str = "output"
    debug: bool = False


@dataclass(frozen=False, slots=True)
class BreachConfig:
    """Settings for the k-anonymity breach-corpus lookup.

    Only the first five hex characters of the SHA-1 digest ever leave
    the process; the remaining suffix is matched locally.

    Reference:
        Hunt, T. (2018). I've Just Launched "Pwned Passwords" V2 With
        Half a Billion Passwords for Download.
    """

    api_url: str = "https://api.pwnedpasswords.com"
    request_timeout: float = 10.0
    max_retries: int = 3
    backoff_base: float = 0.5
    backoff_max: float = 8.0
    add_padding: bool = True
    user_agent: str = "PassWarden/1.0"


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Parameters for the password generators.

    Raises ``ValueError`` when ``reliable_length`` is below 20,
    ``required_score`` lies outside 1 to 5 or ``max_attempts`` is negative.

    ``max_attempts`` of ``0`` leaves the reliable-random loop unbounded;
    it then only ends on success, cancellation, or a failed lookup.
    """

    reliable_length: int = 20
    required_score: int = 5
    max_attempts: int = 0
    seed: Optional[int] = None
    word_list: str = ""

    def __post_init__(self) -> None:
        if self.reliable_length < MIN_RELIABLE_LENGTH:
            raise ValueError(
                f"generator.reliable_length must be at least {MIN_RELIABLE_LENGTH}, got {self.reliable_length}"
            )
        if not 1 <= self.required_score <= 5:
            raise ValueError(f"generator.required_score must be between 1 and 5, got {self.required_score}")
        if self.max_attempts < 0:
            raise ValueError(f"generator.max_attempts must not be negative, got {self.max_attempts}")


@dataclass(frozen=False, slots=True)
class EstimatorConfig:
    """Defaults for brute-force time estimation."""

    default_algorithm: str = "SHA1"
    default_time_unit: str = "days"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class PassWardenConfig:
    """Master configuration aggregating all section settings.

    Usage:
        >>> config = PassWardenConfig.load()                 # default path
        >>> config = PassWardenConfig.load("custom.toml")    # custom path
        >>> config.crack_speeds["SHA1"]
        50600000000.0
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    breach: BreachConfig = field(default_factory=BreachConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    crack_speeds: dict[str, float] = field(default_factory=_default_crack_speeds)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> PassWardenConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.  A
        ``[crack_speeds]`` table, when present, replaces the default speed
        table entirely so that omitted algorithms become unconfigured.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`PassWardenConfig` instance.

        Raises:
            FileNotFoundError: If an explicitly provided path does not exist.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        speeds = raw.get("crack_speeds")
        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            breach=cls._build_section(BreachConfig, raw.get("breach", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            estimator=cls._build_section(EstimatorConfig, raw.get("estimator", {})),
            crack_speeds=(
                {str(k).upper(): float(v) for k, v in speeds.items()}
                if speeds is not None
                else _default_crack_speeds()
            ),
        )

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)

