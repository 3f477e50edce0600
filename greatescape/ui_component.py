"""On-screen widgets: rectangles, text, typewriter text, images and buttons."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, replace
from typing import ClassVar, Optional

import pygame

from . import animation


class FontManager:
    """Loads fonts once per (path, size) pair."""

    def __init__(self) -> None:
        self._fonts: dict[tuple[Optional[str], int], pygame.font.Font] = {}

    def get(self, path, size: int) -> pygame.font.Font:
        """Return the font at ``path`` (None for the default font) in ``size``."""
        if not pygame.font.get_init():
            pygame.font.init()
        key = (None if path is None else str(path), size)
        font = self._fonts.get(key)
        if font is None:
            font = pygame.font.Font(key[0], size)
            self._fonts[key] = font
        return font


class UIComponent(ABC):
    """A widget that can be updated, drawn, hidden and destroyed."""

    def __init__(self) -> None:
        self.active = True
        self.hidden = False

    def update(self) -> None:
        """Advance the widget by one frame."""

    @abstractmethod
    def draw(self, renderer) -> None:
        """Draw the widget."""

    def destroy(self) -> None:
        """Mark the widget for removal."""
        self.active = False

    def hide(self) -> None:
        self.hidden = True

    def show(self) -> None:
        self.hidden = False


def _to_rgba(color: Sequence[float]) -> tuple[int, int, int, int]:
    return tuple(max(0, min(255, int(c * 255.0))) for c in color)


class UIRectComponent(UIComponent):
    """A filled, possibly translucent rectangle."""

    def __init__(self, rect: Sequence[int], color: Sequence[float]) -> None:
        super().__init__()
        self.rect = tuple(rect)
        self.color = tuple(color)

    def draw(self, renderer) -> None:
        renderer.rect(self.rect, self.color)

    def set_alpha(self, alpha: float) -> None:
        """Change only the colour's alpha."""
        self.color = (*self.color[:3], alpha)


@dataclass
class Text:
    """A string with its location, colour and wrap width (negative for none)."""

    chars: str = ""
    location: tuple[float, float] = (0.0, 0.0)
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    wrap: int = -1


@dataclass
class _TextBackground:
    color: tuple[float, float, float, float]
    margin: int
    rect: Optional[tuple[int, int, int, int]] = None


class UITextComponent(UIComponent):
    """A line or block of text rendered with a font."""

    fonts: ClassVar[FontManager] = FontManager()

    def __init__(self, font, font_size: int, text: Text) -> None:
        super().__init__()
        self.text = replace(text)
        self.font = self.fonts.get(font, font_size)
        self.line_skip = self.font.get_linesize()
        self.text_rect: tuple[int, int, int, int] = (0, 0, 0, 0)
        self.surface: Optional[pygame.Surface] = None
        self.updated = True
        self.backgrounds: list[_TextBackground] = []
        self._bold = False
        self._italic = False
        self._underline = False
        self._outline = 0

    def _render(self, chars: str, rgba: Sequence[int], wrap: Optional[int]) -> pygame.Surface:
        font = self.font
        font.set_bold(self._bold)
        font.set_italic(self._italic)
        font.set_underline(self._underline)
        rgb = tuple(rgba[:3])
        if wrap is None:
            surface = font.render(chars, False, rgb)
        else:
            lines = [font.render(line, False, rgb) for line in self._wrap_lines(chars, wrap)]
            width = max(line.get_width() for line in lines)
            surface = pygame.Surface((width, self.line_skip * len(lines)), pygame.SRCALPHA)
            for row, line in enumerate(lines):
                surface.blit(line, (0, row * self.line_skip))
        if self._outline > 0:
            surface = self._thicken(surface, self._outline)
        return surface

    def _wrap_lines(self, chars: str, wrap: int) -> list[str]:
        lines: list[str] = []
        for paragraph in chars.split("\n"):
            line = ""
            for word in paragraph.split(" "):
                candidate = f"{line} {word}" if line else word
                if line and wrap > 0 and self.font.size(candidate)[0] > wrap:
                    lines.append(line)
                    line = word
                else:
                    line = candidate
            lines.append(line)
        return lines

    @staticmethod
    def _thicken(surface: pygame.Surface, outline: int) -> pygame.Surface:
        width, height = surface.get_size()
        result = pygame.Surface((width + 2 * outline, height + 2 * outline), pygame.SRCALPHA)
        for dx in range(-outline, outline + 1):
            for dy in range(-outline, outline + 1):
                if dx * dx + dy * dy <= outline * outline:
                    result.blit(surface, (dx + outline, dy + outline))
        return result

    def update(self) -> None:
        """Re-render the text if it changed since it was last drawn."""
        if not self.text.chars or not self.updated:
            return
        rgba = _to_rgba(self.text.color)
        wrap = None if self.text.wrap < 0 else self.text.wrap
        surface = self._render(self.text.chars, rgba, wrap)
        surface.set_alpha(rgba[3])
        self.surface = surface
        x, y = self.text.location
        self.text_rect = (int(x), int(y), surface.get_width(), surface.get_height())

    def draw(self, renderer) -> None:
        if not self.text.chars:
            return
        if self.backgrounds:
            self._render_backgrounds(renderer)
        if self.surface is not None:
            renderer.texture(self.surface, self.text_rect)
        self.updated = False

    def _render_backgrounds(self, renderer) -> None:
        for background in self.backgrounds:
            if background.rect is None or self.updated:
                x, y, w, h = self.text_rect
                margin = background.margin
                background.rect = (
                    x - margin,
                    y - (margin - 2),
                    int(w + margin * 1.8),
                    int(h + margin * 1.75),
                )
            renderer.rect(background.rect, background.color)

    def size_text(self, chars: str) -> tuple[int, int, int, int]:
        """The rectangle ``chars`` would fill at this component's location."""
        wrap = self.text.wrap if self.text.wrap > 0 else None
        surface = self._render(chars, (0, 0, 0, 0), wrap)
        x, y = self.text.location
        return (int(x), int(y), surface.get_width(), surface.get_height())

    def center(self, width: int, height: int) -> None:
        """Move the text to the middle of a ``width`` by ``height`` area."""
        _, _, w, h = self.size_text(self.text.chars)
        self.text.location = (width // 2 - w // 2, height // 2 - h // 2)
        self.updated = True

    def set_text(self, chars: str) -> None:
        self.text.chars = chars
        self.updated = True

    def set_style(self, bold: bool = False, italic: bool = False, underline: bool = False) -> None:
        self._bold = bold
        self._italic = italic
        self._underline = underline
        self.updated = True

    def set_outline(self, outline: int) -> None:
        """Thicken glyphs by ``outline`` pixels from the next re-render."""
        self._outline = outline

    def add_background(self, color: Sequence[float], margin: int) -> None:
        """Draw a rectangle of ``color`` behind the text, ``margin`` around it."""
        self.backgrounds.append(_TextBackground(tuple(color), margin))

    def mark_updated(self) -> None:
        """Re-render on the next update after ``text`` was changed directly."""
        self.updated = True


class UITypewriterTextComponent(UITextComponent):
    """Text that appears one character at a time while writing."""

    def __init__(self, font, font_size: int, text: Text, speed: int) -> None:
        super().__init__(font, font_size, text)
        if speed < 1:
            raise ValueError("typewriter speed must be at least 1")
        self.speed = speed
        self.end_text = text.chars
        self.current_text = ""
        self.current_index = 0
        self.writing = False
        self.end_text_bounds = self.size_text(text.chars)

    def update(self) -> None:
        if (
            animation.counter() % self.speed == 0
            and self.current_index < len(self.end_text)
            and self.writing
        ):
            self.current_text += self.end_text[self.current_index]
            self.current_index += 1
            self.set_text(self.current_text)
        super().update()

    def reset(self) -> None:
        """Clear the text and stop writing."""
        self.current_text = ""
        self.current_index = 0
        self.writing = False
        self.set_text("")

    def write(self) -> None:
        """Start or continue writing."""
        self.writing = True

    def set_end_text(self, chars: str) -> None:
        """Reset and set the text to write."""
        self.reset()
        self.end_text = chars
        self.end_text_bounds = self.size_text(chars)

    def recalculate_end_text_bounds(self) -> None:
        self.end_text_bounds = self.size_text(self.end_text)


class UIGroup:
    """A set of widgets shown, hidden and destroyed together."""

    def __init__(self) -> None:
        self._components: list[UIComponent] = []

    def __iter__(self) -> Iterator[UIComponent]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def add_component(self, component: UIComponent) -> None:
        self._components.append(component)

    def destroy(self) -> None:
        for component in self._components:
            component.destroy()

    def hide(self) -> None:
        for component in self._components:
            component.hide()

    def show(self) -> None:
        for component in self._components:
            component.show()

    def get(self, kind: type, index: Optional[int] = None):
        """The component at ``index``, or the first one of type ``kind``."""
        if index is None:
            for component in self._components:
                if isinstance(component, kind):
                    return component
            raise LookupError(f"no component of type {kind.__name__} in group")
        component = self._components[index]
        if not isinstance(component, kind):
            raise TypeError(f"component at index {index} is not of type {kind.__name__}")
        return component

    def of_type(self, kind: type) -> list:
        """Every component of type ``kind``, in order."""
        return [c for c in self._components if isinstance(c, kind)]


class UIImageComponent(UIComponent):
    """An image file drawn into a destination rectangle."""

    def __init__(self, path, dest: Sequence[int]) -> None:
        super().__init__()
        self.image = pygame.image.load(str(path))
        self.dest = tuple(dest)
        self.src: Optional[tuple[int, int, int, int]] = None
        self.color_mod: Optional[tuple[int, int, int, int]] = None

    def draw(self, renderer) -> None:
        image = self.image
        if self.color_mod is not None:
            r, g, b, a = self.color_mod
            image = image.copy()
            image.fill((r, g, b), special_flags=pygame.BLEND_RGB_MULT)
            image.set_alpha(a)
        renderer.texture(image, self.dest, self.src)

    def set_source(self, src: Sequence[int]) -> None:
        """Draw only the ``src`` part of the image."""
        self.src = tuple(src)

    def set_color_mod(self, color: Sequence[int]) -> None:
        """Multiply the image by an (r, g, b, a) byte colour when drawn."""
        self.color_mod = tuple(color)


ButtonCallback = Callable[["UITextButtonComponent"], None]


class UITextButtonComponent(UITextComponent):
    """Text that reacts to the pointer hovering over and clicking it."""

    def __init__(self, font, font_size: int, text: Text, callback: ButtonCallback) -> None:
        super().__init__(font, font_size, text)
        self.callback = callback
        self.on_hover: Optional[ButtonCallback] = None
        self.on_leave_hover: Optional[ButtonCallback] = None
        self.bounding_box = self.size_text(text.chars)
        self.clicked = False
        self.hovering = False
        self.static_bounding_box = False

    def update(self) -> None:
        """React to the current mouse state."""
        self.handle_pointer(pygame.mouse.get_pos(), pygame.mouse.get_pressed()[0])

    def handle_pointer(self, position: Sequence[int], pressed: bool) -> None:
        """React to the pointer at ``position`` with the left button ``pressed``."""
        if pygame.Rect(self.bounding_box).collidepoint(position):
            if self.on_hover is not None:
                self.on_hover(self)
                self.hovering = True
            if pressed and not self.clicked:
                self.callback(self)
                self.clicked = True
        elif self.on_leave_hover is not None and self.hovering:
            self.on_leave_hover(self)
            self.hovering = False
        if not pressed:
            self.clicked = False
        super().update()
        if not self.static_bounding_box:
            self.bounding_box = self.text_rect

    def recalculate_bounding_box(self) -> None:
        self.bounding_box = self.size_text(self.text.chars)

    def set_bounding_box_static(self) -> None:
        """Stop the bounding box from following the rendered text."""
        self.static_bounding_box = True