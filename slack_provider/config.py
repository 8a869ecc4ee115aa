# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Provider configuration.

The provider has a single setting, the Slack ``token``.  The host passes it
in as provider configuration; when absent, it falls back to the
``SLACK_TOKEN`` environment variable.

For the command-line harness the same setting is read from a YAML file at
the XDG location:

    ``$XDG_CONFIG_HOME/slack-provider/provider.yaml``
    (typically ``~/.config/slack-provider/provider.yaml``)

``!env`` tags resolve values from environment variables.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from platformdirs import user_config_path

from slack_provider.dotenv_loader import load_dotenv_once
from slack_provider.logging import SecretFilter


logger = logging.getLogger(__name__)

#: Application name for XDG path resolution.
_APP_NAME = "slack-provider"

#: Environment variable used when ``token`` is not configured.
TOKEN_ENV_VAR = "SLACK_TOKEN"


def get_config_path() -> Path:
    """Return the default provider config file path.

    Returns:
        ``$XDG_CONFIG_HOME/slack-provider/provider.yaml``.
    """
    return user_config_path(_APP_NAME) / "provider.yaml"


def get_dotenv_path() -> Path:
    """Return the ``.env`` file path inside the XDG config directory."""
    return user_config_path(_APP_NAME) / ".env"


class ConfigError(Exception):
    """Base exception for configuration errors."""


# ---------------------------------------------------------------------------
# YAML ``!env`` support
# ---------------------------------------------------------------------------


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)  # type: ignore[arg-type]
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


def _resolve_str(value: object, *, field_name: str) -> str | None:
    """Resolve a raw config value to a string.

    Args:
        value: Literal value, ``_EnvVar`` placeholder, or None.
        field_name: Name used in error messages.

    Returns:
        The resolved string, or None when the value (or the referenced
        environment variable) is absent.

    Raises:
        ConfigError: If the value is not a scalar.
    """
    if isinstance(value, _EnvVar):
        return os.environ.get(value.var_name)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigError(
            f"Config '{field_name}' must be a string, "
            f"got {type(value).__name__}"
        )
    return str(value)


# ---------------------------------------------------------------------------
# Provider config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderConfig:
    """Provider-scoped settings shared by every resource operation.

    Built once at configure time and passed explicitly into each handler
    call.  Immutable.

    Attributes:
        token: Slack token sent as ``Authorization: Bearer``.  The legacy
            ``users.admin.*`` methods require the ``client`` scope.
    """

    token: str

    def __post_init__(self) -> None:
        """Validate the token and register it for log redaction.

        Raises:
            ConfigError: If the token is empty.
        """
        if not self.token:
            raise ConfigError(
                f"Required config 'token' is missing "
                f"(set it in the provider block or via {TOKEN_ENV_VAR})"
            )
        SecretFilter.register_secret(self.token)


def load_provider_block(config_path: Path | None = None) -> dict[str, object]:
    """Load the provider block from a YAML file.

    ``.env`` files are loaded first so ``!env`` tags and the ``SLACK_TOKEN``
    fallback can see their variables.  A missing file yields an empty
    block; the environment fallback still applies at configure time.

    Args:
        config_path: Config file path.  Defaults to :func:`get_config_path`.

    Returns:
        Mapping of setting name to resolved value (``!env`` tags whose
        variable is unset resolve to None).

    Raises:
        ConfigError: If the file cannot be parsed.
    """
    load_dotenv_once()

    path = config_path or get_config_path()
    if not path.exists():
        logger.debug("No config file at %s, using environment", path)
        return {}

    try:
        with open(path) as f:
            raw = yaml.load(f, Loader=_make_loader())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a YAML mapping: {path}")

    logger.debug("Loaded provider config from %s", path)
    return {
        str(key): _resolve_str(value, field_name=str(key))
        for key, value in raw.items()
    }
