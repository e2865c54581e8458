"""Account configuration for zoom_registration.

Loads the Zoom account table from ``server.{APP_ENV}.yaml`` (falling back to
``server.yaml``). Each account names the environment variables holding its
credentials, so secrets stay out of the YAML:

    zoom:
      default_account: primary
      accounts:
        primary:
          env_client_id: ZOOM_CLIENT_ID
          env_client_secret: ZOOM_CLIENT_SECRET
          env_account_id: ZOOM_ACCOUNT_ID

Without an accounts section a single ``default`` account is built from
ZOOM_CLIENT_ID / ZOOM_CLIENT_SECRET / ZOOM_ACCOUNT_ID.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

from .errors import ConfigError
from .types import AccountCredential

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_NAME = "default"

ENV_CLIENT_ID = "ZOOM_CLIENT_ID"
ENV_CLIENT_SECRET = "ZOOM_CLIENT_SECRET"
ENV_ACCOUNT_ID = "ZOOM_ACCOUNT_ID"


class ZoomAccountConfig(BaseModel):
    """One account entry. Literal values win over env lookups."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    account_id: Optional[str] = None

    env_client_id: Optional[str] = None
    env_client_secret: Optional[str] = None
    env_account_id: Optional[str] = None


class ZoomConfig(BaseModel):
    """The ``zoom`` section of server.yaml."""

    default_account: Optional[str] = None
    accounts: Dict[str, ZoomAccountConfig] = Field(default_factory=dict)


class ServerConfig(BaseModel):
    """Root configuration model for server.{APP_ENV}.yaml files."""

    zoom: ZoomConfig = Field(default_factory=ZoomConfig)


@dataclass
class LoadResult:
    """Result of loading configuration files."""
    files_loaded: List[str] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    config_file: Optional[str] = None
    app_env: Optional[str] = None
    config: ServerConfig = field(default_factory=ServerConfig)


class AccountTable:
    """
    Immutable table of configured accounts, one designated as default.

    Built once at startup and shared read-only by every request.
    """

    def __init__(self, credentials: Mapping[str, AccountCredential], default_name: str):
        if not credentials:
            raise ConfigError("At least one Zoom account must be configured")
        if default_name not in credentials:
            raise ConfigError(
                f"Default account '{default_name}' is not configured "
                f"(available: {sorted(credentials)})"
            )
        self._credentials = MappingProxyType(dict(credentials))
        self._default_name = default_name

    @property
    def default_name(self) -> str:
        return self._default_name

    @property
    def default(self) -> AccountCredential:
        return self._credentials[self._default_name]

    def get(self, name: str) -> Optional[AccountCredential]:
        return self._credentials.get(name)

    def names(self) -> List[str]:
        return sorted(self._credentials)

    def __contains__(self, name: object) -> bool:
        return name in self._credentials

    def __len__(self) -> int:
        return len(self._credentials)

    def __repr__(self) -> str:
        return f"AccountTable(names={self.names()!r}, default={self._default_name!r})"


def _find_config_path(base_path: Path, app_env: str) -> Path:
    """Find the configuration file path based on APP_ENV."""
    env_specific = base_path / f"server.{app_env}.yaml"
    if env_specific.exists():
        logger.debug(f"Using environment-specific config: {env_specific}")
        return env_specific

    default = base_path / "server.yaml"
    if default.exists():
        logger.debug(f"Using default config: {default}")
        return default

    raise FileNotFoundError(f"No config file found. Tried: {env_specific}, {default}")


def load_server_config(config_dir: Optional[str], app_env: Optional[str] = None) -> LoadResult:
    """
    Load server configuration from a YAML file.

    A missing directory or file is not fatal: the result records the error
    and carries an empty ServerConfig, so the env-only fallback applies.
    Malformed YAML or an invalid schema raises ConfigError.

    Args:
        config_dir: Path to the configuration directory
        app_env: Environment name (default: from APP_ENV env var or 'dev')
    """
    result = LoadResult()
    env = (app_env or os.environ.get("APP_ENV", "dev")).lower()
    result.app_env = env

    if not config_dir:
        logger.info("No config directory set, using environment-only account config")
        return result

    path = Path(config_dir)
    if not path.exists():
        error_msg = f"Config directory does not exist: {path}"
        logger.warning(error_msg)
        result.errors.append({"path": str(path), "error": error_msg})
        return result

    try:
        config_path = _find_config_path(path, env)
    except FileNotFoundError as e:
        logger.warning(str(e))
        result.errors.append({"path": str(path), "error": str(e)})
        return result

    result.config_file = str(config_path)
    logger.info(f"Loading static config for APP_ENV={env} from {config_path}")
    try:
        raw_data = yaml.safe_load(config_path.read_text()) or {}
        result.config = ServerConfig.model_validate(raw_data)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parsing error in {config_path}: {e}") from e
    except ValueError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e

    result.files_loaded.append(str(config_path))
    return result


def _resolve_value(
    account_name: str,
    field_name: str,
    literal: Optional[str],
    env_name: Optional[str],
    environ: Mapping[str, str],
) -> str:
    if literal:
        return literal
    if env_name:
        value = environ.get(env_name, "")
        if not value:
            logger.warning(
                f"Warning: Environment variable {env_name} is not set "
                f"(account '{account_name}', {field_name})."
            )
        return value
    logger.warning(f"Account '{account_name}' has no {field_name} configured.")
    return ""


def _credential_from_config(
    name: str, account: ZoomAccountConfig, environ: Mapping[str, str]
) -> AccountCredential:
    return AccountCredential(
        name=name,
        client_id=_resolve_value(name, "client_id", account.client_id, account.env_client_id, environ),
        client_secret=_resolve_value(
            name, "client_secret", account.client_secret, account.env_client_secret, environ
        ),
        account_id=_resolve_value(name, "account_id", account.account_id, account.env_account_id, environ),
    )


def build_account_table(
    server_config: ServerConfig,
    environ: Optional[Mapping[str, str]] = None,
) -> AccountTable:
    """
    Build the account table from config and environment.

    The default account is ``zoom.default_account`` when set, then an
    account literally named ``default``, then the only account when there
    is exactly one.
    """
    environ = os.environ if environ is None else environ
    zoom = server_config.zoom

    if not zoom.accounts:
        logger.info("No zoom.accounts configured, building 'default' account from environment")
        fallback = ZoomAccountConfig(
            env_client_id=ENV_CLIENT_ID,
            env_client_secret=ENV_CLIENT_SECRET,
            env_account_id=ENV_ACCOUNT_ID,
        )
        accounts = {DEFAULT_ACCOUNT_NAME: fallback}
    else:
        accounts = zoom.accounts

    credentials = {
        name: _credential_from_config(name, account, environ)
        for name, account in accounts.items()
    }

    default_name = zoom.default_account
    if default_name is None:
        if DEFAULT_ACCOUNT_NAME in credentials:
            default_name = DEFAULT_ACCOUNT_NAME
        elif len(credentials) == 1:
            default_name = next(iter(credentials))
        else:
            raise ConfigError(
                "zoom.default_account is required when more than one account is configured"
            )

    table = AccountTable(credentials, default_name)
    logger.info(f"Loaded Zoom accounts: {table.names()} (default={table.default_name})")
    return table
