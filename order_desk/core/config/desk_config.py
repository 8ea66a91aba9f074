"""Configuration model for the orders view core."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from order_desk.core.domain.reject_reasons import RejectReason
from order_desk.core.domain.roles import DEFAULT_ELEVATED_ROLES
from order_desk.core.search.search_index import DEFAULT_INDEX_FIELDS

DEFAULT_REJECT_MESSAGES: dict[RejectReason, str] = {
    RejectReason.TERMINAL_STATE: "This order is in a final state.",
    RejectReason.ROLE_FORBIDDEN: "You do not have permission to make this change.",
    RejectReason.INVALID_TRANSITION: "That transition is not allowed.",
    RejectReason.REQUEST_IN_FLIGHT: "A status change for this order is already in progress.",
    RejectReason.SERVICE_ERROR: "Failed to update order status.",
}

_INDEXABLE_FIELDS: frozenset[str] = frozenset({"name", "sku", "id"})


class DeskConfig(BaseModel):
    """Structured configuration for role mapping, indexing and messages.

    JSON example:
        {
          "elevated_roles": ["admin", "ops"],
          "index_fields": ["name", "sku"],
          "reject_messages": {"ROLE_FORBIDDEN": "Ask an administrator."}
        }

    Unset reject messages fall back to the defaults.
    """

    elevated_roles: list[str] = Field(default_factory=lambda: list(DEFAULT_ELEVATED_ROLES))
    index_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_INDEX_FIELDS))
    reject_messages: dict[RejectReason, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, cfg_obj: dict[str, Any]) -> DeskConfig:
        """Create a DeskConfig instance from a JSON-compatible object."""
        return cls.model_validate(cfg_obj)

    @field_validator("elevated_roles")
    @classmethod
    def _strip_role_names(cls, value: list[str]) -> list[str]:
        return [name.strip() for name in value if name.strip()]

    @model_validator(mode="after")
    def validate_consistency(self) -> DeskConfig:
        """Validate internal consistency of the configuration."""
        if not self.elevated_roles:
            raise ValueError("elevated_roles must name at least one role")
        if not self.index_fields:
            raise ValueError("index_fields must not be empty")
        unknown = set(self.index_fields) - _INDEXABLE_FIELDS
        if unknown:
            raise ValueError(f"unknown index_fields: {sorted(unknown)}")
        return self

    def reject_message(self, reason: RejectReason) -> str:
        """Return the user-visible message for ``reason``."""
        override = self.reject_messages.get(reason)
        if override:
            return override
        return DEFAULT_REJECT_MESSAGES[reason]
