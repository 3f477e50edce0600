import pytest

from greatescape.ui import UI
from greatescape.ui_component import UIComponent


class Probe(UIComponent):
    def __init__(self, name, log):
        super().__init__()
        self.name = name
        self.log = log

    def update(self):
        self.log.append(("update", self.name))

    def draw(self, renderer):
        self.log.append(("draw", self.name, renderer))


@pytest.fixture
def log():
    return []


def test_register_returns_component(log):
    ui = UI(object())
    probe = Probe("a", log)
    assert ui.register(probe) is probe
    assert ui.component(0) is probe


def test_update_removes_destroyed(log):
    ui = UI(object())
    a = ui.register(Probe("a", log))
    b = ui.register(Probe("b", log))
    a.destroy()
    ui.update()
    assert list(ui) == [b]
    assert log == [("update", "b")]


def test_draw_skips_hidden_and_passes_renderer(log):
    renderer = object()
    ui = UI(renderer)
    a = ui.register(Probe("a", log))
    ui.register(Probe("b", log))
    a.hide()
    ui.draw()
    assert log == [("draw", "b", renderer)]


def test_move_to_top_moves_to_end(log):
    ui = UI(object())
    a = ui.register(Probe("a", log))
    b = ui.register(Probe("b", log))
    c = ui.register(Probe("c", log))
    ui.move_to_top(a)
    assert list(ui) == [b, c, a]
    assert len(ui) == 3


def test_move_to_top_unknown_raises(log):
    ui = UI(object())
    ui.register(Probe("a", log))
    with pytest.raises(ValueError):
        ui.move_to_top(Probe("x", log))