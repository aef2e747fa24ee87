from __future__ import annotations

from panda3d.core import ButtonHandle, KeyboardButton

from jumparc.physics.motion.intent import JumpIntent


def is_key_down(host, key_name: str) -> bool:
    if host.mouseWatcherNode is None:
        return False
    k = (key_name or "").lower().strip()
    if not k:
        return False
    if k in {"space", "spacebar"}:
        return bool(host.mouseWatcherNode.isButtonDown(KeyboardButton.space()))
    if k == "arrow_left":
        return bool(host.mouseWatcherNode.isButtonDown(KeyboardButton.left()))
    if k == "arrow_right":
        return bool(host.mouseWatcherNode.isButtonDown(KeyboardButton.right()))
    if len(k) == 1 and ord(k) < 128:
        # ASCII key (layout-dependent) + raw key (layout-independent).
        if host.mouseWatcherNode.isButtonDown(KeyboardButton.ascii_key(k)):
            return True
        return bool(host.mouseWatcherNode.isButtonDown(ButtonHandle(f"raw-{k}")))
    return bool(host.mouseWatcherNode.isButtonDown(ButtonHandle(k)))


def horizontal_axis_from_keyboard(host) -> int:
    left = is_key_down(host, "a") or is_key_down(host, "arrow_left")
    right = is_key_down(host, "d") or is_key_down(host, "arrow_right")
    return int(right) - int(left)


def sample_jump_intent(host, *, menu_open: bool = False) -> JumpIntent:
    """
    Sample one frame of input into a `JumpIntent`.

    Jump edges are derived from `host._prev_jump_down`, which this call updates. An open menu
    reads as all keys up, so closing it over a held key does not fire a fresh press.
    """

    jump_down = (not menu_open) and is_key_down(host, "space")
    move_x = 0 if menu_open else horizontal_axis_from_keyboard(host)
    prev = bool(host._prev_jump_down)
    intent = JumpIntent(
        move_x=move_x,
        jump_pressed=jump_down and not prev,
        jump_released=prev and not jump_down,
    )
    host._prev_jump_down = jump_down
    return intent


__all__ = [
    "horizontal_axis_from_keyboard",
    "is_key_down",
    "sample_jump_intent",
]
