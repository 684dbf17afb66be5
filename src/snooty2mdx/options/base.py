#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for converter and renderer options.

Options objects are frozen dataclasses; modified copies are produced with
``create_updated``. Field metadata carries the help text used by the command
line and by configuration file validation.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from snooty2mdx.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        ValidationError
            If a keyword does not name a field of this options class

        """
        known = set(self.field_names())
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)  # type: ignore[type-var]

    @classmethod
    def field_names(cls) -> list[str]:
        """Return the option names in declaration order."""
        return [f.name for f in fields(cls)]  # type: ignore[arg-type]
