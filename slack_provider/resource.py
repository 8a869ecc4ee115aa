# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Resource contract between the host and resource implementations.

The host invokes four operations on a resource, each with the resource's
current state and the provider configuration.  Operations mutate the state
in place; an empty ``id`` means the resource does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from slack_provider.config import ProviderConfig
from slack_provider.schema import Schema


class ResourceError(Exception):
    """Raised when a remote operation fails in a way the host must see."""


@dataclass
class ResourceData:
    """State of one resource instance.

    Attributes:
        id: Remote identifier.  Empty when the resource is absent.
        attributes: Attribute values keyed by schema name.
    """

    id: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        """Return an attribute value, or an empty string if unset."""
        return self.attributes.get(name, "")

    def set(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def set_id(self, value: str) -> None:
        self.id = value

    @property
    def exists(self) -> bool:
        """Whether the resource is tracked (has an id)."""
        return bool(self.id)

    def to_dict(self) -> dict[str, str]:
        """Flatten to a mapping including ``id``."""
        return {"id": self.id, **self.attributes}


class Resource(Protocol):
    """Interface every managed resource type implements.

    Create and update implementations end with a read so the state
    reflects the remote record rather than the declared values.
    """

    @property
    def schema(self) -> Schema:
        """Declared attributes of this resource type."""
        ...

    def create(self, data: ResourceData, config: ProviderConfig) -> None:
        """Create the remote object and populate *data*.

        Raises:
            ResourceError: If creation fails in a way the host must see.
        """
        ...

    def read(self, data: ResourceData, config: ProviderConfig) -> None:
        """Refresh *data* from the remote object.

        Clears ``data.id`` when the remote object no longer exists.
        """
        ...

    def update(self, data: ResourceData, config: ProviderConfig) -> None:
        """Apply attribute changes and refresh *data*."""
        ...

    def delete(self, data: ResourceData, config: ProviderConfig) -> None:
        """Remove the remote object.

        Raises:
            ResourceError: If the remote service refuses the removal.
        """
        ...
