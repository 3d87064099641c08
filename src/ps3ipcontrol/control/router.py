"""Request path to action mapping.

Paths are matched by exact string equality against a fixed table;
anything else is unsupported.
"""

from __future__ import annotations

from ps3ipcontrol.domain.models import Action, ControllerKey

ROUTES: dict[str, Action] = {
    "/ps3/power/on": Action.power_on(),
    "/ps3/power/off": Action.power_off(),
    "/ps3/power/toggle": Action.power_toggle(),
    **{f"/ps3/key/{key.path_name}": Action.key_press(key) for key in ControllerKey},
}


def resolve_action(path: str) -> Action | None:
    """Return the action for ``path``, or None if the path is unsupported."""
    return ROUTES.get(path)
