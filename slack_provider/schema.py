# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Declarative attribute schemas for the provider and its resources.

The host owns plan/apply and state diffing; it only needs to know which
attributes exist, their types, and which are required.  Validation here
mirrors the host's "required" check so the command-line harness rejects the
same inputs the host would.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class AttributeType(Enum):
    """Value type of a schema attribute."""

    STRING = "string"


class SchemaError(ValueError):
    """Raised when values do not satisfy a schema."""


@dataclass(frozen=True)
class Attribute:
    """A single schema attribute.

    Attributes:
        type: Value type.
        required: Whether a non-empty value must be present.
        env_default: Environment variable consulted when the value is
            absent.
        description: Human-readable description.
    """

    type: AttributeType = AttributeType.STRING
    required: bool = False
    env_default: str | None = None
    description: str = ""

    def default(self) -> str | None:
        """Return the environment default, or None."""
        if self.env_default is None:
            return None
        return os.environ.get(self.env_default)


@dataclass(frozen=True)
class Schema:
    """Named attributes of a provider or resource.

    The implicit ``id`` attribute of resources is not listed.
    """

    attributes: Mapping[str, Attribute] = field(default_factory=dict)

    def apply_defaults(self, values: Mapping[str, object]) -> dict[str, object]:
        """Return a copy of *values* with environment defaults filled in."""
        result = dict(values)
        for name, attr in self.attributes.items():
            if result.get(name) is None:
                default = attr.default()
                if default is not None:
                    result[name] = default
        return result

    def validate(self, values: Mapping[str, object]) -> None:
        """Check *values* against the schema.

        Args:
            values: Attribute values (defaults already applied).

        Raises:
            SchemaError: On unknown attributes, wrong types, or missing
                required values.
        """
        unknown = sorted(set(values) - set(self.attributes))
        if unknown:
            raise SchemaError(f"Unsupported argument(s): {', '.join(unknown)}")

        for name, attr in self.attributes.items():
            value = values.get(name)
            if value is None or value == "":
                if attr.required:
                    raise SchemaError(
                        f"The argument '{name}' is required, "
                        f"but no definition was found"
                    )
                continue
            if attr.type is AttributeType.STRING and not isinstance(
                value, str
            ):
                raise SchemaError(
                    f"Attribute '{name}' must be a string, "
                    f"got {type(value).__name__}"
                )
