"""
State records for the connection string builders.

Each builder keeps one of these models and replaces it on every setter call,
so a rejected argument never leaves a half-updated builder behind.
"""
from typing import Annotated, Any, Dict, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from connstring.common.exceptions import ValidationError

logger = structlog.get_logger()

MAX_PORT = 65535
MAX_RETRY_COUNT = 255

Text = Annotated[str, Field(strict=True)]
Port = Annotated[int, Field(strict=True, ge=0, le=MAX_PORT)]
Seconds = Annotated[int, Field(strict=True, ge=0)]
RetryCount = Annotated[int, Field(strict=True, ge=0, le=MAX_RETRY_COUNT)]

MIN_RETRY_INTERVAL = 1
MAX_RETRY_INTERVAL = 60


class PostgresParameters(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    username: Optional[Text] = None
    password: Optional[SecretStr] = None
    host: Optional[Text] = None
    port: Optional[Port] = None
    database: Optional[Text] = None
    connect_timeout: Optional[Seconds] = None
    extra_parameters: Dict[Text, Text] = Field(default_factory=dict)


class SqlServerParameters(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    username: Optional[Text] = None
    password: Optional[SecretStr] = None
    host: Optional[Text] = None
    port: Optional[Port] = None
    database: Optional[Text] = None
    connect_timeout: Optional[Seconds] = None
    command_timeout: Optional[Seconds] = None
    connect_retry_count: Optional[RetryCount] = None
    connect_retry_interval: Optional[Annotated[int, Field(strict=True)]] = None
    encrypt: Optional[bool] = None
    trust_server_certificate: Optional[bool] = None
    extra_parameters: Dict[Text, Text] = Field(default_factory=dict)

    @field_validator("connect_retry_interval")
    @classmethod
    def clip_retry_interval(cls, value: Optional[int]) -> Optional[int]:
        """SQL Server only accepts 1..60 seconds; out-of-range values are clipped."""
        if value is None:
            return None
        return min(max(MIN_RETRY_INTERVAL, value), MAX_RETRY_INTERVAL)


M = TypeVar("M", bound=BaseModel)


def replace_fields(current: M, **changes: Any) -> M:
    """
    Return a re-validated copy of ``current`` with ``changes`` applied.

    Raises:
        ValidationError: If any resulting field violates its type constraints
    """
    model_cls: Type[M] = type(current)
    data = dict(current)
    data.update(changes)
    try:
        return model_cls(**data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        fields = [".".join(str(loc) for loc in err["loc"]) for err in errors]
        logger.warning("invalid_builder_argument", model=model_cls.__name__, fields=fields)
        raise ValidationError(
            f"Invalid value for {', '.join(fields)}",
            details={"errors": errors},
        ) from e
