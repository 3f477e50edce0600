"""An ordered collection of widgets updated and drawn each frame."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from .ui_component import UIComponent

_C = TypeVar("_C", bound=UIComponent)


class UI:
    """Owns widgets; later widgets are drawn on top of earlier ones."""

    def __init__(self, renderer) -> None:
        self.renderer = renderer
        self._components: list[UIComponent] = []

    def __iter__(self) -> Iterator[UIComponent]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def register(self, component: _C) -> _C:
        """Add a widget on top of the others and return it."""
        self._components.append(component)
        return component

    def component(self, index: int) -> UIComponent:
        return self._components[index]

    def update(self) -> None:
        """Drop destroyed widgets, then update the rest."""
        self._components = [c for c in self._components if c.active]
        for component in self._components:
            component.update()

    def draw(self) -> None:
        """Draw every widget that is not hidden, bottom first."""
        for component in self._components:
            if not component.hidden:
                component.draw(self.renderer)

    def move_to_top(self, component: UIComponent) -> None:
        """Move a widget so it is drawn above all the others."""
        for index, candidate in enumerate(self._components):
            if candidate is component:
                self._components.append(self._components.pop(index))
                return
        raise ValueError("component is not registered with this UI")