# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Slack member directory access.

Thin wrapper over the legacy user-management Web API methods:

* ``users.list`` for lookups,
* ``users.admin.invite`` to invite a new member,
* ``users.admin.setInactive`` to deactivate one.

The synchronous ``WebClient`` sends every method as POST, including
``users.list``.  Nothing is cached; every lookup fetches the member list
again.  Only the first page of ``users.list`` is considered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from slack_provider.config import ProviderConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Member:
    """A member entry from ``users.list``.

    Attributes:
        id: Slack user ID.
        name: Username handle.
        real_name: Full display name.
        deleted: Whether the account is deactivated.
        email: ``profile.email``; empty when the token cannot see it.
    """

    id: str
    name: str = ""
    real_name: str = ""
    deleted: bool = False
    email: str = ""

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Member:
        """Build a member from one ``members`` array element."""
        profile = raw.get("profile") or {}
        return cls(
            id=raw.get("id", ""),
            name=raw.get("name", ""),
            real_name=raw.get("real_name", ""),
            deleted=bool(raw.get("deleted", False)),
            email=profile.get("email", ""),
        )


@dataclass(frozen=True)
class InviteRequest:
    """Parameters of a ``users.admin.invite`` call."""

    email: str
    real_name: str

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email, "real_name": self.real_name}


def describe_error(err: SlackApiError) -> str:
    """Return the ``error`` code of a failed Slack response.

    Falls back to the exception text when the body carries no code.
    """
    try:
        code = err.response.get("error")
    except AttributeError:
        code = None
    return str(code) if code else str(err)


class SlackDirectory:
    """Member lookups and lifecycle calls against one workspace.

    Args:
        client: Slack ``WebClient`` authenticated with the provider token.
    """

    def __init__(self, client: WebClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: ProviderConfig) -> SlackDirectory:
        """Create a directory bound to the configured token."""
        return cls(WebClient(token=config.token))

    def list_members(self) -> list[Member]:
        """Fetch the member list (first page only).

        A response with ``ok: false`` is logged and treated as an empty
        list.  Transport errors propagate.
        """
        try:
            response = self._client.users_list()
        except SlackApiError as e:
            logger.warning("users.list not ok: %s", describe_error(e))
            return []

        members = response.get("members") or []
        logger.debug("users.list returned %d member(s)", len(members))
        return [Member.from_api(m) for m in members]

    def find_member(
        self, predicate: Callable[[Member], bool]
    ) -> Member | None:
        """Return the first non-deleted member matching *predicate*.

        Args:
            predicate: Match condition (e.g. by id or by email).

        Returns:
            The member, or None when nothing matches.
        """
        for member in self.list_members():
            if member.deleted:
                continue
            if predicate(member):
                return member
        return None

    def find_by_id(self, user_id: str) -> Member | None:
        return self.find_member(lambda m: m.id == user_id)

    def find_by_email(self, email: str) -> Member | None:
        return self.find_member(lambda m: m.email == email)

    def invite(self, request: InviteRequest) -> None:
        """Send an invite.

        The parameters go both in the query string and as a JSON body.
        ``WebClient`` moves ``params`` into the body, so the query is
        carried in the method path instead.

        Raises:
            SlackApiError: If Slack answers ``ok: false``.
        """
        self._client.api_call(
            _with_query("users.admin.invite", request.to_dict()),
            http_verb="POST",
            json=request.to_dict(),
        )

    def set_inactive(self, user_id: str) -> None:
        """Deactivate a member (``user`` goes in the query string).

        Raises:
            SlackApiError: If Slack answers ``ok: false``.
        """
        self._client.api_call(
            _with_query("users.admin.setInactive", {"user": user_id}),
            http_verb="POST",
        )


def _with_query(api_method: str, params: dict[str, str]) -> str:
    return f"{api_method}?{urlencode(params)}"
