# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to the CLI, the storage client and the schema store.
#
# CLASSES:
# --------
# - InferenceDefaults (dataclass)
#     strongly_type_arrays: bool      (default False)
#     decimal128_rules: tuple[str]    (default ())
#     max_depth: int | None           (default None)
#
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "docschema")
#
# - AppConfig (dataclass)
#     inference: InferenceDefaults
#     mongo: MongoConfig
#     metadata_dir: str  (default "metadata/")
#     log_level: str     (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (tests, reloading after env changes).
#
# USAGE:
# ------
#   from docschema.config import get_config
#   config = get_config()
#   print(config.mongo.host)
#   print(config.inference.decimal128_rules)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class InferenceDefaults:
    """Default inference options used when the caller supplies none."""
    strongly_type_arrays: bool = False
    decimal128_rules: Tuple[str, ...] = ()
    max_depth: Optional[int] = None


@dataclass
class MongoConfig:
    """MongoDB database configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "docschema"


@dataclass
class AppConfig:
    """Main application configuration."""
    inference: InferenceDefaults = field(default_factory=InferenceDefaults)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    metadata_dir: str = "metadata/"
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_list(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build inference defaults
    inference_defaults = InferenceDefaults(
        strongly_type_arrays=_env_bool("DOCSCHEMA_STRONGLY_TYPE_ARRAYS"),
        decimal128_rules=_env_list("DOCSCHEMA_DECIMAL128_RULES"),
        max_depth=_env_optional_int("DOCSCHEMA_MAX_DEPTH")
    )

    # Build MongoDB configuration
    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=int(os.getenv("MONGO_PORT", "27017")),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "docschema")
    )

    # Build main application configuration
    _config_instance = AppConfig(
        inference=inference_defaults,
        mongo=mongo_config,
        metadata_dir=os.getenv("METADATA_DIR", "metadata/"),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper()
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
