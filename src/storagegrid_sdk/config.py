"""Configuration loading and logging setup for applications embedding the client.

The client itself takes plain constructor arguments; this module offers the
usual ways of collecting them (a JSON file or environment variables) and a
structlog setup matching the log events the client emits.
"""

import json
import logging
import os
import pathlib
from collections.abc import Mapping
from typing import TextIO

import pydantic
import structlog

from .client import DEFAULT_TIMEOUT
from .errors import ConfigurationError
from .types import Credentials

CONFIG_ENV_VAR = "STORAGEGRID_CONFIG_PATH"

ENDPOINT_ENV_VAR = "STORAGEGRID_ENDPOINT"
USERNAME_ENV_VAR = "STORAGEGRID_USERNAME"
PASSWORD_ENV_VAR = "STORAGEGRID_PASSWORD"  # noqa: S105
ACCOUNT_ID_ENV_VAR = "STORAGEGRID_ACCOUNT_ID"
SKIP_SSL_ENV_VAR = "STORAGEGRID_SKIP_SSL"


class ClientConfig(pydantic.BaseModel):
    """Connection settings for a StorageGRID client."""

    endpoint: str = pydantic.Field(
        description="Admin node address, https:// is assumed without a scheme",
    )
    username: str = pydantic.Field(description="User to sign in as")
    password: str = pydantic.Field(description="Password of the user", repr=False)
    account_id: str | None = pydantic.Field(
        None,
        description="Tenant account ID, required for the tenant API",
    )
    skip_ssl: bool = pydantic.Field(
        False,
        description="Disable TLS certificate verification",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            username=self.username,
            password=self.password,
            account_id=self.account_id,
        )


def configure_logging(log_level_name: str, stream: TextIO | None = None) -> None:
    """Configure structlog for logfmt output.

    Args:
        log_level_name: Minimum level, e.g. "INFO". Unknown names mean INFO.
        stream: Where log lines go (default: stdout).
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load client settings from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not JSON or its settings are
            invalid.
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("r") as f:
            data = json.load(f)
        return ClientConfig.model_validate(data)
    except json.JSONDecodeError as exc:
        msg = f"Configuration file {config_path} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc
    except pydantic.ValidationError as exc:
        msg = f"Invalid settings in {config_path}: {exc}"
        raise ConfigurationError(msg) from exc


def config_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Build configuration from STORAGEGRID_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ.

    Raises:
        ConfigurationError: If endpoint, username or password is missing.
    """
    env = os.environ if environ is None else environ

    required = (ENDPOINT_ENV_VAR, USERNAME_ENV_VAR, PASSWORD_ENV_VAR)
    missing = [name for name in required if not env.get(name)]
    if missing:
        msg = f"Required environment variables not set: {', '.join(missing)}"
        raise ConfigurationError(msg)

    return ClientConfig(
        endpoint=env[ENDPOINT_ENV_VAR],
        username=env[USERNAME_ENV_VAR],
        password=env[PASSWORD_ENV_VAR],
        account_id=env.get(ACCOUNT_ID_ENV_VAR) or None,
        skip_ssl=env.get(SKIP_SSL_ENV_VAR, "").lower() == "true",
    )


def resolve_config(config_path: str | None = None) -> ClientConfig:
    """Load configuration from a file if one is named, else from the environment.

    The file is ``config_path`` or the path in STORAGEGRID_CONFIG_PATH.
    """
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if resolved_path:
        return load_config(resolved_path)
    return config_from_env()
