import random

import pytest

from fractol.image import Image
from fractol.window import (
    BUTTON_PRESS_MASK,
    DELETE_WINDOW,
    EXPOSURE_MASK,
    KEY_PRESS_MASK,
    STRUCTURE_NOTIFY_MASK,
    Display,
    Event,
    Hooks,
)


def test_new_windows_are_listed_newest_first():
    display = Display()
    win1 = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")
    assert display.windows == (win2, win1)
    assert (win2.width, win2.height, win2.title) == (600, 600, "win2")


def test_mouse_event_replaces_window():
    display = Display()
    state = {}
    rng = random.Random(0)
    win1 = display.new_window(300, 300, "win1")
    win2 = display.new_window(600, 600, "win2")

    def gere_mouse(button, x, y):
        old = state.get("win1", win1)
        old.destroy()
        new = display.new_window(rng.randrange(1, 500), rng.randrange(1, 500), "new win")
        new.mouse_hook(gere_mouse)
        state["win1"] = new
        display.loop_end()

    win1.mouse_hook(gere_mouse)
    win2.mouse_hook(gere_mouse)
    display.post(win1, Event.BUTTON_PRESS, 1, 10, 10)
    display.loop()
    assert win1.destroyed
    assert state["win1"].title == "new win"
    assert set(display.windows) == {state["win1"], win2}


def test_key_hook_listens_to_release_only():
    display = Display()
    win = display.new_window(10, 10, "w")
    keys = []
    win.key_hook(keys.append)
    win.hook(Event.BUTTON_PRESS, BUTTON_PRESS_MASK, lambda b, x, y: win.destroy())
    display.post(win, Event.KEY_PRESS, 0xFF1B)
    display.post(win, Event.KEY_RELEASE, 0x61)
    display.post(win, Event.BUTTON_PRESS, 1, 0, 0)
    display.loop()
    assert keys == [0x61]
    assert display.windows == ()


def test_unselected_destroy_notify_is_not_delivered_but_delete_calls_it():
    display = Display()
    win = display.new_window(10, 10, "w")
    calls = []

    def on_close():
        calls.append("close")
        win.destroy()

    win.hook(Event.DESTROY_NOTIFY, 0, on_close)
    win.hook(Event.KEY_PRESS, KEY_PRESS_MASK, lambda key: calls.append(key))
    display.post(win, Event.DESTROY_NOTIFY)
    display.post(win, Event.KEY_PRESS, 5)
    display.post(win, Event.CLIENT_MESSAGE, DELETE_WINDOW)
    display.loop()
    assert calls == [5, "close"]


def test_selected_destroy_notify_is_delivered():
    display = Display()
    win = display.new_window(10, 10, "w")
    win.hook(Event.DESTROY_NOTIFY, STRUCTURE_NOTIFY_MASK, win.destroy)
    display.post(win, Event.DESTROY_NOTIFY)
    display.loop()
    assert win.destroyed is True


def test_expose_only_when_count_is_zero():
    hooks = Hooks()
    seen = []
    hooks.set(Event.EXPOSE, lambda: seen.append("expose") or 7, EXPOSURE_MASK)
    assert hooks.dispatch(Event.EXPOSE, 2) is None
    assert hooks.dispatch(Event.EXPOSE) == 7
    assert seen == ["expose"]


def test_hooks_event_mask_and_dispatch_arguments():
    hooks = Hooks()
    hooks.set(Event.KEY_PRESS, lambda k: ("key", k), KEY_PRESS_MASK)
    hooks.set(Event.BUTTON_PRESS, lambda b, x, y: (b, x, y), BUTTON_PRESS_MASK)
    hooks.set(Event.MOTION_NOTIFY, lambda x, y: (x, y), 1 << 6)
    assert hooks.event_mask() == KEY_PRESS_MASK | BUTTON_PRESS_MASK | (1 << 6)
    assert hooks.dispatch(Event.KEY_PRESS, 42) == ("key", 42)
    assert hooks.dispatch(Event.BUTTON_PRESS, 3, 4, 5) == (3, 4, 5)
    assert hooks.dispatch(Event.MOTION_NOTIFY, 8, 9) == (8, 9)
    assert hooks.dispatch(Event.FOCUS_IN) is None


def test_removing_a_hook_clears_its_mask():
    hooks = Hooks()
    hooks.set(Event.KEY_PRESS, print, KEY_PRESS_MASK)
    hooks.set(Event.KEY_PRESS, None, 0)
    assert hooks.event_mask() == 0


def test_hook_event_out_of_range():
    with pytest.raises(ValueError):
        Hooks().set(36, print, 0)


def test_loop_hook_runs_until_loop_end():
    display = Display()
    win = display.new_window(5, 5, "w")
    ticks = []

    def tick():
        ticks.append(len(ticks))
        if len(ticks) == 3:
            display.loop_end()

    display.loop_hook(tick)
    display.loop()
    assert ticks == [0, 1, 2]
    assert display.windows == (win,)
    assert win.destroyed is False


def test_pixel_put_clips_and_converts_for_24_bit():
    display = Display()
    win = display.new_window(4, 4, "w")
    win.pixel_put(1, 2, 0xFF0000)
    win.pixel_put(10, 10, 0xFFFFFF)
    assert win.pixel(1, 2) == 0xFF0000
    assert win.pixel(0, 0) == 0


def test_pixel_put_on_16_bit_visual():
    display = Display(depth=16, red_mask=0xF800, green_mask=0x07E0, blue_mask=0x001F)
    win = display.new_window(2, 2, "w")
    win.pixel_put(0, 0, 0xFFFFFF)
    win.pixel_put(1, 0, 0xFF0000)
    assert win.pixel(0, 0) == 0xFFFF
    assert win.pixel(1, 0) == 0xF800


def test_put_image_copies_with_offset_and_clipping():
    display = Display()
    win = display.new_window(3, 3, "w")
    image = Image(2, 2)
    image.fill(0x123456)
    win.put_image(image, 2, 1)
    assert win.pixel(2, 1) == 0x123456
    assert win.pixel(2, 2) == 0x123456
    assert win.pixel(1, 1) == 0


def test_clear_resets_pixels_and_text():
    display = Display()
    win = display.new_window(3, 3, "w")
    win.pixel_put(0, 0, 0xFFFFFF)
    win.string_put(5, 121, 0xFF99FF, "String output")
    assert win.texts == [(5, 121, 0xFF99FF, "String output")]
    win.clear()
    assert win.pixel(0, 0) == 0
    assert win.texts == []


def test_drawing_on_destroyed_window_raises():
    display = Display()
    win = display.new_window(3, 3, "w")
    win.destroy()
    with pytest.raises(RuntimeError):
        win.pixel_put(0, 0, 1)


def test_screen_size_and_close():
    display = Display(1024, 768)
    assert display.screen_size() == (1024, 768)
    display.close()
    with pytest.raises(RuntimeError):
        display.new_window(10, 10, "late")


def test_new_window_rejects_bad_size():
    with pytest.raises(ValueError):
        Display().new_window(0, 10, "bad")