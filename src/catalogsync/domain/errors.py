"""Error taxonomy for catalog reconciliation.

Every error can carry the qualified name and the operation it was raised for.
The reconciler fills these in on the way out when the raiser did not, so the
caller of a batch always learns which item failed and during which call.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for reconciliation failures."""

    def __init__(
        self,
        message: str,
        *,
        qualified_name: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.qualified_name = qualified_name
        self.operation = operation

    def attach(self, *, qualified_name: str | None, operation: str | None) -> None:
        """Fill in diagnostic context without overwriting what the raiser set."""

        if self.qualified_name is None:
            self.qualified_name = qualified_name
        if self.operation is None:
            self.operation = operation

    def __str__(self) -> str:
        context = [
            f"{label}={value!r}"
            for label, value in (
                ("operation", self.operation),
                ("qualified_name", self.qualified_name),
            )
            if value is not None
        ]
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class ValidationError(CatalogError):
    """Payload is incomplete, e.g. a blank qualified name or display name."""


class NotFoundError(CatalogError):
    """Parent, source, or target of an update/remove does not exist."""


class ConflictError(CatalogError):
    """The repository rejected a create because the qualified name is taken."""


class UnsupportedOperationError(CatalogError):
    """The requested delete semantic cannot be honoured for the target."""


class AuthorizationError(CatalogError):
    """The repository boundary refused the call for this user."""
