# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""The ``slack_user`` resource.

Lifecycle mapping:

* create -> ``users.admin.invite``, then a lookup by email
* read   -> ``users.list``, match by id
* update -> read (Slack exposes no profile update here)
* delete -> ``users.admin.setInactive``

Error policy differs per operation.  A refused invite is logged and leaves
the resource absent without failing the apply; a refused deactivation is a
hard error.  Transport failures always propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from slack_sdk.errors import SlackApiError

from slack_provider.config import ProviderConfig
from slack_provider.directory import (
    InviteRequest,
    SlackDirectory,
    describe_error,
)
from slack_provider.resource import ResourceData, ResourceError
from slack_provider.schema import Attribute, Schema


logger = logging.getLogger(__name__)

#: Resource type name as registered with the host.
RESOURCE_TYPE = "slack_user"

DirectoryFactory = Callable[[ProviderConfig], SlackDirectory]

USER_SCHEMA = Schema(
    attributes={
        "email": Attribute(required=True, description="Email to invite"),
        "full_name": Attribute(required=True, description="Real name"),
    }
)


class UserResource:
    """Handlers for ``slack_user``.

    Args:
        directory_factory: Builds a :class:`SlackDirectory` for the given
            config; called once per operation.  Defaults to
            :meth:`SlackDirectory.from_config`.
    """

    def __init__(
        self,
        directory_factory: DirectoryFactory | None = None,
    ) -> None:
        self._directory_factory = (
            directory_factory or SlackDirectory.from_config
        )

    @property
    def schema(self) -> Schema:
        return USER_SCHEMA

    def create(self, data: ResourceData, config: ProviderConfig) -> None:
        """Invite the user and adopt the resulting member as this resource.

        Leaves *data* absent, without raising, when Slack refuses the
        invite or the invited member cannot be found afterwards.
        """
        directory = self._directory_factory(config)
        request = InviteRequest(
            email=data.get("email"), real_name=data.get("full_name")
        )

        data.set_id("")

        try:
            directory.invite(request)
        except SlackApiError as e:
            logger.warning(
                "Error while trying to invite %s to Slack: %s",
                request.email,
                describe_error(e),
            )
            return

        member = directory.find_by_email(request.email)
        if member is None:
            logger.warning(
                "Invited %s but no matching member was listed", request.email
            )
            return

        data.set_id(member.id)
        logger.info("Invited %s as %s", request.email, member.id)
        self._read_with(directory, data)

    def read(self, data: ResourceData, config: ProviderConfig) -> None:
        """Refresh email and full name from the member with ``data.id``.

        Clears the id when no active member has it.
        """
        self._read_with(self._directory_factory(config), data)

    def update(self, data: ResourceData, config: ProviderConfig) -> None:
        # Attribute changes have no remote effect; just resync
        self.read(data, config)

    def delete(self, data: ResourceData, config: ProviderConfig) -> None:
        """Deactivate the member.

        Raises:
            ResourceError: If Slack refuses the deactivation.
        """
        directory = self._directory_factory(config)
        try:
            directory.set_inactive(data.id)
        except SlackApiError as e:
            raise ResourceError(
                f"Error while trying delete user: {describe_error(e)}"
            ) from e
        logger.info("Deactivated %s", data.id)

    def _read_with(self, directory: SlackDirectory, data: ResourceData) -> None:
        member = directory.find_by_id(data.id)
        if member is None:
            logger.info("No active Slack member with id %r", data.id)
            data.set_id("")
            return

        data.set("email", member.email)
        data.set("full_name", member.real_name)
