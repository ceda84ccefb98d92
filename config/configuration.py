"""
Connection Profile Management Module.
Loads named connection profiles from a YAML file and renders them through
the matching connection string builder.
"""
import yaml
from pathlib import Path
from typing import Annotated, Dict, Literal, Optional, Union
from pydantic import BaseModel, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
import structlog

from config.settings import get_settings
from connstring.builders.postgres import PostgresConnectionString
from connstring.builders.sqlserver import SqlServerConnectionString
from connstring.builders.models import MAX_PORT, MAX_RETRY_COUNT
from connstring.common.exceptions import ConfigurationError

logger = structlog.get_logger()

# --- Profile Models ---

# YAML values may be quoted, so these are the lax forms of the builder constraints
ProfilePort = Annotated[int, Field(ge=0, le=MAX_PORT)]
ProfileSeconds = Annotated[int, Field(ge=0)]
ProfileRetryCount = Annotated[int, Field(ge=0, le=MAX_RETRY_COUNT)]

class PostgresProfile(BaseModel):
    engine: Literal["postgres"]
    host: Optional[str] = None
    port: Optional[ProfilePort] = None
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    connect_timeout: Optional[ProfileSeconds] = None
    parameters: Dict[str, str] = Field(default_factory=dict)

class SqlServerProfile(BaseModel):
    engine: Literal["sqlserver"]
    host: Optional[str] = None
    port: Optional[ProfilePort] = None  # None means the default port 1433
    database: Optional[str] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    connect_timeout: Optional[ProfileSeconds] = None
    command_timeout: Optional[ProfileSeconds] = None
    connect_retry_count: Optional[ProfileRetryCount] = None
    connect_retry_interval: Optional[int] = None
    encrypt: bool = False
    trust_server_certificate: bool = False
    parameters: Dict[str, str] = Field(default_factory=dict)

Profile = Annotated[Union[PostgresProfile, SqlServerProfile], Field(discriminator="engine")]

class ProfilesConfig(BaseModel):
    profiles: Dict[str, Profile] = Field(default_factory=dict)

# --- Loader Logic ---

def load_profiles(config_path: Optional[str] = None) -> ProfilesConfig:
    """
    Load connection profiles from YAML.

    Args:
        config_path: Path to the YAML file (default: PROFILES_PATH setting)

    Returns:
        Validated profiles; empty when the file does not exist

    Raises:
        ConfigurationError: If the file cannot be parsed or does not validate
    """
    if not config_path:
        config_path = get_settings().PROFILES_PATH

    path = Path(config_path)
    if not path.is_absolute():
        path = Path.cwd() / config_path

    if not path.exists():
        logger.warning("profiles_file_not_found", path=str(path))
        return ProfilesConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("profiles_load_error", error=str(e), path=str(path))
        raise ConfigurationError(f"Failed to load profiles file at {path}: {e}", details={"path": str(path)}) from e

    try:
        config = ProfilesConfig(**data)
    except (PydanticValidationError, TypeError) as e:
        logger.error("profiles_validation_error", error=str(e), path=str(path))
        raise ConfigurationError(f"Invalid profiles file at {path}: {e}", details={"path": str(path)}) from e

    logger.info("profiles_loaded", path=str(path), count=len(config.profiles))
    return config


def _build_postgres(profile: PostgresProfile) -> PostgresConnectionString:
    builder = PostgresConnectionString()
    if profile.username is not None:
        if profile.password is not None:
            builder.set_username_and_password(profile.username, profile.password.get_secret_value())
        else:
            builder.set_username_without_password(profile.username)
    if profile.host is not None:
        if profile.port is not None:
            builder.set_host_with_port(profile.host, profile.port)
        else:
            builder.set_host_with_default_port(profile.host)
    if profile.database is not None:
        builder.set_database_name(profile.database)
    if profile.connect_timeout is not None:
        builder.set_connect_timeout(profile.connect_timeout)
    for key, value in profile.parameters.items():
        builder.dangerously_set_parameter(key, value)
    return builder


def _build_sqlserver(profile: SqlServerProfile) -> SqlServerConnectionString:
    builder = SqlServerConnectionString()
    if profile.username is not None:
        if profile.password is not None:
            builder.set_username_and_password(profile.username, profile.password.get_secret_value())
        else:
            builder.set_username_without_password(profile.username)
    if profile.host is not None:
        if profile.port is not None:
            builder.set_host_with_port(profile.host, profile.port)
        else:
            builder.set_host_with_default_port(profile.host)
    if profile.database is not None:
        builder.set_database_name(profile.database)
    if profile.connect_timeout is not None:
        builder.set_connect_timeout(profile.connect_timeout)
    if profile.command_timeout is not None:
        builder.set_command_timeout(profile.command_timeout)
    if profile.connect_retry_count is not None:
        builder.set_connect_retry_count(profile.connect_retry_count)
    if profile.connect_retry_interval is not None:
        builder.set_connect_retry_interval(profile.connect_retry_interval)
    if profile.trust_server_certificate:
        builder.enable_encryption_and_trust_server_certificate()
    elif profile.encrypt:
        builder.enable_encryption()
    for key, value in profile.parameters.items():
        builder.dangerously_set_parameter(key, value)
    return builder


def build_connection_string(profile: Union[PostgresProfile, SqlServerProfile]) -> str:
    """Render a profile through the builder for its engine."""
    if isinstance(profile, PostgresProfile):
        return _build_postgres(profile).render()
    return _build_sqlserver(profile).render()
