"""Configuration management for Sheetwright.

Loads configuration from environment variables and .env file.
Provides validation and sensible defaults.

Usage:
    from sheetwright.core.config import get_config, validate_config

    config = get_config()
    issues = validate_config(config)
    if issues:
        for issue in issues:
            print(f"Config issue: {issue}")
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from sheetwright.core.exceptions import ConfigurationError

COMPILE_MODES = ("auto", "manual")
DOCUMENT_MODES = ("solution", "review")

# Default paths (defined once, used by both Config and load_config)
DEFAULT_LOG_PATH = Path.home() / ".sheetwright" / "logs"
DEFAULT_TEMPLATE_PATH = Path(__file__).parent.parent / "templates" / "latex" / "sheet.tex"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        log_path: Directory for log files
        template_path: Carrier template the editor content is embedded into
        pdflatex_path: Executable name or path of the LaTeX compiler
        compile_timeout: Seconds allowed for a single compiler pass
        compile_delay: Quiet period before an auto-compile fires
        min_autocompile_length: Documents shorter than this never auto-compile
        compile_mode: "auto" (debounced on edit) or "manual"
        document_mode: "solution" or "review"
        trigger_char: Character that opens the command palette
        debug: Enable debug logging
    """

    log_path: Path = field(default_factory=lambda: DEFAULT_LOG_PATH)
    template_path: Path = field(default_factory=lambda: DEFAULT_TEMPLATE_PATH)
    pdflatex_path: str = "pdflatex"
    compile_timeout: float = 30.0
    compile_delay: float = 2.0
    min_autocompile_length: int = 50
    compile_mode: str = "auto"
    document_mode: str = "solution"
    trigger_char: str = "/"
    debug: bool = False


def load_env_file(path: Path) -> dict[str, str]:
    """Parse .env file.

    Handles:
        - KEY=VALUE format
        - Comments (lines starting with #)
        - Blank lines
        - Quoted values

    Args:
        path: Path to .env file

    Returns:
        Dictionary of environment variables
    """
    env_vars: dict[str, str] = {}

    if not path.exists():
        return env_vars

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()

                if value and value[0] in ('"', "'") and value[-1] == value[0]:
                    value = value[1:-1]

                if key:
                    env_vars[key] = value

    return env_vars


def _lookup(key: str, env_vars: dict[str, str]) -> Optional[str]:
    return os.environ.get(key) or env_vars.get(key) or None


def _get_path(key: str, default: Path, env_vars: dict[str, str]) -> Path:
    """Get path from environment, expanding ~ and resolving."""
    value = _lookup(key, env_vars)
    if value:
        return Path(value).expanduser().resolve()
    return default


def _get_str(key: str, default: str, env_vars: dict[str, str]) -> str:
    return _lookup(key, env_vars) or default


def _get_bool(key: str, default: bool, env_vars: dict[str, str]) -> bool:
    """Get boolean from environment."""
    value = _lookup(key, env_vars)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _get_float(key: str, default: float, env_vars: dict[str, str]) -> float:
    """Get number from environment.

    Raises:
        ConfigurationError: If the value is not a number
    """
    value = _lookup(key, env_vars)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e


def _get_int(key: str, default: int, env_vars: dict[str, str]) -> int:
    """Get whole number from environment.

    Raises:
        ConfigurationError: If the value is not an integer
    """
    value = _lookup(key, env_vars)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a whole number, got {value!r}") from e


def load_config(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment and .env file.

    Priority:
        1. Environment variables (highest)
        2. .env file
        3. Default values (lowest)

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If a numeric setting is malformed
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"

    env_vars = load_env_file(Path(env_file))

    return Config(
        log_path=_get_path("SHEETWRIGHT_LOG_PATH", DEFAULT_LOG_PATH, env_vars),
        template_path=_get_path("SHEETWRIGHT_TEMPLATE_PATH", DEFAULT_TEMPLATE_PATH, env_vars),
        pdflatex_path=_get_str("SHEETWRIGHT_PDFLATEX", "pdflatex", env_vars),
        compile_timeout=_get_float("SHEETWRIGHT_COMPILE_TIMEOUT", 30.0, env_vars),
        compile_delay=_get_float("SHEETWRIGHT_COMPILE_DELAY", 2.0, env_vars),
        min_autocompile_length=_get_int("SHEETWRIGHT_MIN_AUTOCOMPILE_LENGTH", 50, env_vars),
        compile_mode=_get_str("SHEETWRIGHT_COMPILE_MODE", "auto", env_vars).lower(),
        document_mode=_get_str("SHEETWRIGHT_DOCUMENT_MODE", "solution", env_vars).lower(),
        trigger_char=_get_str("SHEETWRIGHT_TRIGGER_CHAR", "/", env_vars),
        debug=_get_bool("SHEETWRIGHT_DEBUG", False, env_vars),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration.

    Checks:
        - Log directory exists or can be created
        - Carrier template exists
        - Compiler is on PATH (warning only, editing still works)
        - Modes and numeric settings are in range

    Args:
        config: Configuration to validate

    Returns:
        List of issues (empty if valid). Issues that make the app
        unusable are prefixed with "CRITICAL:".
    """
    issues: list[str] = []

    try:
        config.log_path.mkdir(parents=True, exist_ok=True)
        if not os.access(config.log_path, os.W_OK):
            issues.append(f"Log directory not writable: {config.log_path}")
    except OSError as e:
        issues.append(f"Cannot create log directory {config.log_path}: {e}")

    if not config.template_path.is_file():
        issues.append(f"CRITICAL: Carrier template not found: {config.template_path}")

    if shutil.which(config.pdflatex_path) is None:
        issues.append(
            f"LaTeX compiler not found on PATH: {config.pdflatex_path} (compilation disabled)"
        )

    if config.compile_mode not in COMPILE_MODES:
        issues.append(
            f"CRITICAL: Unknown compile mode {config.compile_mode!r}. "
            f"Expected one of: {', '.join(COMPILE_MODES)}."
        )
    if config.document_mode not in DOCUMENT_MODES:
        issues.append(
            f"CRITICAL: Unknown document mode {config.document_mode!r}. "
            f"Expected one of: {', '.join(DOCUMENT_MODES)}."
        )

    if config.compile_timeout <= 0:
        issues.append(f"Compile timeout must be positive, got {config.compile_timeout}")
    if config.compile_delay < 0:
        issues.append(f"Compile delay cannot be negative, got {config.compile_delay}")
    if len(config.trigger_char) != 1 or config.trigger_char.isspace():
        issues.append(
            f"CRITICAL: Trigger must be a single visible character, got {config.trigger_char!r}"
        )

    return issues


# Singleton config
_config: Optional[Config] = None


def get_config() -> Config:
    """Return cached configuration singleton.

    Loads configuration on first call, returns cached version thereafter.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration.

    Used primarily for testing.
    """
    global _config
    _config = None
