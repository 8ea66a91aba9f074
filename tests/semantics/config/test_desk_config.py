"""
Semantic test: configuration parsing.

Invariant:
DeskConfig rejects unknown keys and inconsistent values, and falls back to
default messages for reasons it does not override.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from order_desk.core.config.desk_config import DEFAULT_REJECT_MESSAGES, DeskConfig
from order_desk.core.domain.reject_reasons import RejectReason


def test_defaults() -> None:
    cfg = DeskConfig()

    assert cfg.elevated_roles == ["admin"]
    assert cfg.index_fields == ["name", "sku"]
    for reason in RejectReason:
        assert cfg.reject_message(reason) == DEFAULT_REJECT_MESSAGES[reason]


def test_from_json_obj_with_overrides() -> None:
    cfg = DeskConfig.from_json_obj(
        {
            "elevated_roles": [" admin ", "ops", ""],
            "reject_messages": {"ROLE_FORBIDDEN": "Ask an administrator."},
        }
    )

    assert cfg.elevated_roles == ["admin", "ops"]
    assert cfg.reject_message(RejectReason.ROLE_FORBIDDEN) == "Ask an administrator."
    assert cfg.reject_message(RejectReason.TERMINAL_STATE) == DEFAULT_REJECT_MESSAGES[RejectReason.TERMINAL_STATE]


@pytest.mark.parametrize(
    "bad",
    [
        {"elevated_roles": []},
        {"elevated_roles": ["  "]},
        {"index_fields": []},
        {"index_fields": ["name", "colour"]},
        {"reject_messages": {"NOT_A_REASON": "x"}},
        {"unexpected": True},
    ],
)
def test_invalid_config_is_rejected(bad: dict) -> None:
    with pytest.raises(ValidationError):
        DeskConfig.from_json_obj(bad)
