"""Domain models shared across ps3ipcontrol components."""

from ps3ipcontrol.domain.models import (
    KEY_DOWN,
    KEY_UP,
    Action,
    ActionType,
    ControllerKey,
    PowerState,
)

__all__ = [
    "KEY_DOWN",
    "KEY_UP",
    "Action",
    "ActionType",
    "ControllerKey",
    "PowerState",
]
