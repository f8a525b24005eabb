"""An in-memory display: windows with framebuffers, event hooks and a loop."""

from __future__ import annotations

import queue
from enum import IntEnum
from typing import Any, Callable, Optional

from fractol.colors import good_color, mask_shifts
from fractol.image import Image

Callback = Callable[..., Any]

KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
ENTER_WINDOW_MASK = 1 << 4
LEAVE_WINDOW_MASK = 1 << 5
POINTER_MOTION_MASK = 1 << 6
KEYMAP_STATE_MASK = 1 << 14
EXPOSURE_MASK = 1 << 15
VISIBILITY_CHANGE_MASK = 1 << 16
STRUCTURE_NOTIFY_MASK = 1 << 17
RESIZE_REDIRECT_MASK = 1 << 18
SUBSTRUCTURE_REDIRECT_MASK = 1 << 20
FOCUS_CHANGE_MASK = 1 << 21
PROPERTY_CHANGE_MASK = 1 << 22
COLORMAP_CHANGE_MASK = 1 << 23

ALL_EVENTS_MASK = 0xFFFFFF
DELETE_WINDOW = "WM_DELETE_WINDOW"


class Event(IntEnum):
    """Event types, numbered as the X protocol numbers them."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


LAST_EVENT = 36

# The mask a window must select to receive an event; unlisted events are
# always delivered.
_SELECTING_MASK = {
    Event.KEY_PRESS: KEY_PRESS_MASK,
    Event.KEY_RELEASE: KEY_RELEASE_MASK,
    Event.BUTTON_PRESS: BUTTON_PRESS_MASK,
    Event.BUTTON_RELEASE: BUTTON_RELEASE_MASK,
    Event.MOTION_NOTIFY: POINTER_MOTION_MASK,
    Event.ENTER_NOTIFY: ENTER_WINDOW_MASK,
    Event.LEAVE_NOTIFY: LEAVE_WINDOW_MASK,
    Event.FOCUS_IN: FOCUS_CHANGE_MASK,
    Event.FOCUS_OUT: FOCUS_CHANGE_MASK,
    Event.KEYMAP_NOTIFY: KEYMAP_STATE_MASK,
    Event.EXPOSE: EXPOSURE_MASK,
    Event.VISIBILITY_NOTIFY: VISIBILITY_CHANGE_MASK,
    Event.CIRCULATE_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.CONFIGURE_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.DESTROY_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.GRAVITY_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.MAP_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.REPARENT_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.UNMAP_NOTIFY: STRUCTURE_NOTIFY_MASK,
    Event.RESIZE_REQUEST: RESIZE_REDIRECT_MASK,
    Event.MAP_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    Event.CONFIGURE_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    Event.CIRCULATE_REQUEST: SUBSTRUCTURE_REDIRECT_MASK,
    Event.PROPERTY_NOTIFY: PROPERTY_CHANGE_MASK,
    Event.COLORMAP_NOTIFY: COLORMAP_CHANGE_MASK,
}


def _check_event(event: int) -> int:
    if not 0 <= event < LAST_EVENT:
        raise ValueError(f"event number out of range: {event}")
    return int(event)


class Hooks:
    """The callbacks of one window, one per event type, with their masks."""

    def __init__(self) -> None:
        self._table: dict[int, tuple[Callback, int]] = {}

    def set(self, event: int, callback: Optional[Callback], mask: int) -> None:
        """Install ``callback`` for ``event``; ``None`` removes the hook."""
        event = _check_event(event)
        if callback is None:
            self._table.pop(event, None)
        else:
            self._table[event] = (callback, mask)

    def __contains__(self, event: object) -> bool:
        return event in self._table

    def event_mask(self) -> int:
        """The union of the masks of all installed hooks."""
        mask = 0
        for _, hook_mask in self._table.values():
            mask |= hook_mask
        return mask

    def dispatch(self, event: int, *args: Any) -> Any:
        """Call the hook for ``event`` with the arguments that event carries.

        Key events pass ``(keysym,)``, button events ``(button, x, y)``,
        motion ``(x, y)``; an expose is delivered only when its count
        (first argument, default 0) is zero; other events pass nothing.
        Returns the hook's result, or None when no hook ran.
        """
        event = _check_event(event)
        entry = self._table.get(event)
        if entry is None or event < Event.KEY_PRESS:
            return None
        callback = entry[0]
        if event in (Event.KEY_PRESS, Event.KEY_RELEASE):
            return callback(args[0])
        if event in (Event.BUTTON_PRESS, Event.BUTTON_RELEASE):
            return callback(args[0], args[1], args[2])
        if event == Event.MOTION_NOTIFY:
            return callback(args[0], args[1])
        if event == Event.EXPOSE:
            count = args[0] if args else 0
            return callback() if count == 0 else None
        return callback()


class Window:
    """A window on a :class:`Display`, drawn into a framebuffer."""

    def __init__(self, display: "Display", width: int, height: int, title: str) -> None:
        self.display = display
        self.width = width
        self.height = height
        self.title = title
        self.hooks = Hooks()
        self.event_mask = ALL_EVENTS_MASK
        self.framebuffer = Image(width, height)
        self.texts: list[tuple[int, int, int, str]] = []
        self.destroyed = False

    def _alive(self) -> None:
        if self.destroyed:
            raise RuntimeError(f"window {self.title!r} has been destroyed")

    def hook(self, event: int, mask: int, callback: Optional[Callback]) -> None:
        """Install a callback for any event type, selecting it with ``mask``."""
        self.hooks.set(event, callback, mask)

    def key_hook(self, callback: Optional[Callback]) -> None:
        """Call ``callback(keysym)`` when a key is released."""
        self.hooks.set(Event.KEY_RELEASE, callback, KEY_RELEASE_MASK)

    def mouse_hook(self, callback: Optional[Callback]) -> None:
        """Call ``callback(button, x, y)`` when a mouse button is pressed."""
        self.hooks.set(Event.BUTTON_PRESS, callback, BUTTON_PRESS_MASK)

    def expose_hook(self, callback: Optional[Callback]) -> None:
        """Call ``callback()`` when the window needs redrawing."""
        self.hooks.set(Event.EXPOSE, callback, EXPOSURE_MASK)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Draw one pixel; points outside the window are clipped."""
        self._alive()
        if self._inside(x, y):
            self.framebuffer.put_pixel(x, y, self.display.pixel_value(color))

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` with its top-left corner at (x, y), clipped."""
        self._alive()
        for row, values in enumerate(image.rows()):
            wy = y + row
            if not 0 <= wy < self.height:
                continue
            for col, value in enumerate(values):
                wx = x + col
                if 0 <= wx < self.width:
                    self.framebuffer.put_pixel(wx, wy, value)

    def clear(self) -> None:
        """Reset the window to its black background."""
        self._alive()
        self.framebuffer.fill(0)
        self.texts.clear()

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        self._alive()
        self.texts.append((x, y, self.display.pixel_value(color), text))

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value shown at (x, y)."""
        return self.framebuffer.get_pixel(x, y)

    def destroy(self) -> None:
        """Remove the window from its display; later drawing raises."""
        if not self.destroyed:
            self.display._forget(self)
            self.destroyed = True


class Display:
    """A screen holding windows and a queue of pending events."""

    def __init__(
        self,
        width: int = 1920,
        height: int = 1080,
        depth: int = 24,
        red_mask: int = 0xFF0000,
        green_mask: int = 0x00FF00,
        blue_mask: int = 0x0000FF,
    ) -> None:
        self.width = width
        self.height = height
        self.depth = depth
        self.shifts = mask_shifts(red_mask, green_mask, blue_mask)
        self._windows: list[Window] = []
        self._events: "queue.Queue[tuple[Window, int, tuple[Any, ...]]]" = queue.Queue()
        self._loop_hook: Optional[Callback] = None
        self._end_loop = False
        self.closed = False

    @property
    def windows(self) -> tuple[Window, ...]:
        """Open windows, most recently created first."""
        return tuple(self._windows)

    def pixel_value(self, color: int) -> int:
        """Convert 0xRRGGBB to a pixel value for this display's visual."""
        return good_color(color, self.depth, self.shifts)

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window of the given size and title."""
        if self.closed:
            raise RuntimeError("display is closed")
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        window = Window(self, width, height, title)
        self._windows.insert(0, window)
        return window

    def _forget(self, window: Window) -> None:
        self._windows = [w for w in self._windows if w is not window]

    def post(self, window: Window, event: int, *args: Any) -> None:
        """Queue an event for ``window``, with the arguments its hook takes."""
        self._events.put((window, _check_event(event), args))

    def loop_hook(self, callback: Optional[Callback]) -> None:
        """Call ``callback()`` whenever the event queue has been drained."""
        self._loop_hook = callback

    def loop_end(self) -> None:
        """Make :meth:`loop` return after the current event."""
        self._end_loop = True

    def _deliver(self, window: Window, event: int, args: tuple[Any, ...]) -> None:
        if window not in self._windows:
            return
        if (
            event == Event.CLIENT_MESSAGE
            and args[:1] == (DELETE_WINDOW,)
            and Event.DESTROY_NOTIFY in window.hooks
        ):
            window.hooks.dispatch(Event.DESTROY_NOTIFY)
        required = _SELECTING_MASK.get(event)
        if required is not None and not window.event_mask & required:
            return
        window.hooks.dispatch(event, *args)

    def loop(self) -> None:
        """Dispatch events until every window is gone or :meth:`loop_end` runs.

        Without a loop hook this waits for events to be posted.
        """
        for window in self._windows:
            window.event_mask = window.hooks.event_mask()
        while self._windows and not self._end_loop:
            while not self._end_loop and (
                self._loop_hook is None or not self._events.empty()
            ):
                window, event, args = self._events.get()
                self._deliver(window, event, args)
            if self._loop_hook is not None and not self._end_loop:
                self._loop_hook()

    def screen_size(self) -> tuple[int, int]:
        """Return the screen's width and height."""
        return self.width, self.height

    def close(self) -> None:
        """Close the display, dropping pending events."""
        while not self._events.empty():
            self._events.get_nowait()
        self._end_loop = True
        self.closed = True