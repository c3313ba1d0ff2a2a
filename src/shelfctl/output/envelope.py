"""CommandResult: what a CLI command hands to the output layer.

Built at the program boundary after the service Result has been
extracted, so it always carries a usable ``data`` payload (the real
value, or the substituted default when the service failed).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from shelfctl.domain.errors import ShelfError


class ErrorPayload(BaseModel):
    """Structured error within a CommandResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, error: ShelfError) -> ErrorPayload:
        return cls.model_validate(error.to_dict())


class CommandResult(BaseModel):
    """Envelope rendered by :func:`shelfctl.output.formatters.format_result`.

    Attributes:
        ok: Whether the service call succeeded.
        op: Name of the operation (e.g. ``"list_books"``).
        data: Operation payload; defaults stand in when ``ok`` is False.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ErrorPayload | None = None
