"""Core domain models for ps3ipcontrol.

Controller keys as understood by the GIMX emulator, the abstract actions
an HTTP request can map to, and the inferred power state of the console.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, model_validator

# Intensity arguments for GIMX button events
KEY_DOWN = 255
KEY_UP = 0


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ControllerKey(str, enum.Enum):
    """Sixaxis buttons. The value is the GIMX event token."""

    SELECT = "select"
    START = "start"
    PS = "PS"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"
    TRIANGLE = "triangle"
    CIRCLE = "circle"
    CROSS = "cross"
    SQUARE = "square"
    L1 = "l1"
    R1 = "r1"
    L2 = "l2"
    R2 = "r2"
    L3 = "l3"
    R3 = "r3"

    @property
    def path_name(self) -> str:
        """Name used in the ``/ps3/key/<name>`` URL path."""
        return self.value.lower()

    def event(self, intensity: int) -> str:
        """Render a GIMX event string, e.g. ``cross(255)``."""
        return f"{self.value}({intensity})"


class ActionType(str, enum.Enum):
    POWER_ON = "power_on"
    POWER_OFF = "power_off"
    POWER_TOGGLE = "power_toggle"
    KEY_PRESS = "key_press"


class PowerState(str, enum.Enum):
    """Tracked power state of the console."""

    UNKNOWN = "unknown"
    OFF = "off"
    ON = "on"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class Action(BaseModel):
    """A single control command derived from a request path."""

    model_config = ConfigDict(frozen=True)

    type: ActionType
    key: ControllerKey | None = None

    @model_validator(mode="after")
    def _key_matches_type(self) -> Action:
        if (self.type == ActionType.KEY_PRESS) != (self.key is not None):
            raise ValueError("key is required for key_press actions and only for them")
        return self

    @classmethod
    def power_on(cls) -> Action:
        return cls(type=ActionType.POWER_ON)

    @classmethod
    def power_off(cls) -> Action:
        return cls(type=ActionType.POWER_OFF)

    @classmethod
    def power_toggle(cls) -> Action:
        return cls(type=ActionType.POWER_TOGGLE)

    @classmethod
    def key_press(cls, key: ControllerKey) -> Action:
        return cls(type=ActionType.KEY_PRESS, key=key)

    def __str__(self) -> str:
        if self.key is not None:
            return f"{self.type.value}({self.key.path_name})"
        return self.type.value
