# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Provider registration.

Declares the provider-level settings and the resource types the host may
manage.  Only ``slack_user`` is registered; user groups are not supported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from slack_provider.config import TOKEN_ENV_VAR, ConfigError, ProviderConfig
from slack_provider.resource import Resource
from slack_provider.schema import Attribute, Schema, SchemaError
from slack_provider.user import RESOURCE_TYPE, UserResource


logger = logging.getLogger(__name__)

PROVIDER_SCHEMA = Schema(
    attributes={
        "token": Attribute(
            required=True,
            env_default=TOKEN_ENV_VAR,
            description="Authentication token (Requires scope: 'client')",
        ),
    }
)


class Provider:
    """The Slack provider as seen by the host.

    Args:
        resources: Resource implementations by type name.  Defaults to
            the ``slack_user`` resource.
    """

    def __init__(self, resources: Mapping[str, Resource] | None = None) -> None:
        if resources is None:
            resources = {RESOURCE_TYPE: UserResource()}
        self._resources = dict(resources)

    @property
    def schema(self) -> Schema:
        return PROVIDER_SCHEMA

    @property
    def resource_types(self) -> list[str]:
        return sorted(self._resources)

    def resource(self, type_name: str) -> Resource:
        """Return the implementation for a resource type.

        Raises:
            KeyError: If the type is not registered.
        """
        try:
            return self._resources[type_name]
        except KeyError:
            raise KeyError(
                f"Unknown resource type '{type_name}' "
                f"(supported: {', '.join(self.resource_types)})"
            ) from None

    def configure(self, raw: Mapping[str, object]) -> ProviderConfig:
        """Build the provider configuration from the provider block.

        ``token`` falls back to the ``SLACK_TOKEN`` environment variable.

        Args:
            raw: Provider settings supplied by the host.

        Returns:
            Immutable configuration passed to every resource operation.

        Raises:
            ConfigError: If the settings do not satisfy the schema.
        """
        values = self.schema.apply_defaults(raw)
        try:
            self.schema.validate(values)
        except SchemaError as e:
            raise ConfigError(str(e)) from e

        config = ProviderConfig(token=str(values["token"]).strip())
        logger.debug("Provider configured")
        return config
