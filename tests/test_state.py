from greatescape.state import State


class _Recorder(State):
    def __init__(self):
        super().__init__()
        self.calls = []

    def handle_events(self, delta_time):
        self.calls.append(("events", delta_time))

    def update(self, delta_time):
        self.calls.append(("update", delta_time))
        self.complete()


def test_new_state_is_not_complete():
    assert State().is_complete() is False


def test_complete_marks_finished():
    state = State()
    state.complete()
    assert state.is_complete() is True


def test_subclass_hooks_and_completion():
    state = _Recorder()
    assert State.is_complete(state) is False
    state.handle_events(0.5)
    state.update(0.25)
    assert state.calls == [("events", 0.5), ("update", 0.25)]
    assert State.is_complete(state) is True


def test_base_hooks_leave_state_open():
    state = State()
    state.handle_events(0.1)
    state.update(0.1)
    state.render(0.1)
    assert state.is_complete() is False