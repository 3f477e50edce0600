"""Base class for the screens the state machine runs."""


class State:
    """A screen with per-frame hooks; it completes to hand over to the next."""

    def __init__(self) -> None:
        self._completed = False

    def handle_events(self, delta_time: float) -> None:
        """Process pending input for this frame."""

    def update(self, delta_time: float) -> None:
        """Advance this state by one frame."""

    def render(self, delta_time: float) -> None:
        """Draw this state."""

    def complete(self) -> None:
        """Mark this state as finished."""
        self._completed = True

    def is_complete(self) -> bool:
        """Whether this state has finished."""
        return self._completed