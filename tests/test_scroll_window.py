from scrollterm import ScrollWindow


def test_ensure_visible_scrolls_forward():
    """Active line 45 with 30 rows puts line 16 at the top."""
    s = ScrollWindow(viewport_height=30)
    s.ensure_visible(45)
    assert s.top == 16


def test_ensure_visible_scrolls_back():
    s = ScrollWindow(viewport_height=10, top=20)
    s.ensure_visible(5)
    assert s.top == 5


def test_ensure_visible_keeps_top_when_visible():
    s = ScrollWindow(viewport_height=10, top=3)
    s.ensure_visible(12)
    assert s.top == 3


def test_scroll_by_clamps_to_zero():
    s = ScrollWindow(viewport_height=10)
    s.ensure_visible(40)
    s.scroll_by(-100, 40)
    assert s.top == 0


def test_scroll_by_clamps_to_active_line():
    s = ScrollWindow(viewport_height=10)
    s.ensure_visible(40)
    s.scroll_by(-5, 40)
    assert s.top == 26
    s.scroll_by(50, 40)
    assert s.top == 31


def test_scroll_with_short_buffer_stays_at_top():
    s = ScrollWindow(viewport_height=10)
    s.scroll_by(3, 4)
    assert s.top == 0


def test_resize_reveals_active_line():
    s = ScrollWindow(viewport_height=30)
    s.ensure_visible(45)
    s.resize(10, 45)
    assert s.viewport_height == 10
    assert s.top == 36


def test_resize_never_below_one_row():
    s = ScrollWindow(viewport_height=5)
    s.resize(0, 7)
    assert s.viewport_height == 1
    assert s.top == 7


def test_visible_range():
    s = ScrollWindow(viewport_height=3, top=2)
    assert list(s.visible_range(4)) == [2, 3]
    assert s.contains(4)
    assert not s.contains(5)
