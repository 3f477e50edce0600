import pygame
import pytest

from greatescape.texture import Texture, TextureError
from greatescape.util import pack_rgba


def test_pixel_at_is_row_major():
    pixels = [pack_rgba(i, 0, 0, 255) for i in range(4)]
    texture = Texture(2, 2, pixels)
    assert texture.pixel_at(0, 0) == pixels[0]
    assert texture.pixel_at(1, 0) == pixels[1]
    assert texture.pixel_at(0, 1) == pixels[2]
    assert texture.pixel_at(1, 1) == pixels[3]


def test_pixel_at_vec_normalises():
    texture = Texture(1, 1, [pack_rgba(255, 0, 0, 255)])
    assert texture.pixel_at_vec(0, 0) == (1.0, 0.0, 0.0, 1.0)


def test_wrong_pixel_count_raises():
    with pytest.raises(TextureError):
        Texture(2, 2, [0, 0, 0])


def test_non_positive_size_raises():
    with pytest.raises(TextureError):
        Texture(0, 1, [])


def test_from_file_reads_pixels(tmp_path):
    colors = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (10, 20, 30)]
    surface = pygame.Surface((2, 2))
    for index, color in enumerate(colors):
        surface.set_at((index % 2, index // 2), color)
    path = tmp_path / "tex.bmp"
    pygame.image.save(surface, str(path))

    texture = Texture.from_file(path)
    assert (texture.width, texture.height) == (2, 2)
    for index, (r, g, b) in enumerate(colors):
        assert texture.pixel_at(index % 2, index // 2) == pack_rgba(r, g, b, 255)


def test_from_file_rejects_non_power_of_two(tmp_path):
    path = tmp_path / "odd.bmp"
    pygame.image.save(pygame.Surface((3, 4)), str(path))
    with pytest.raises(TextureError):
        Texture.from_file(path)


def test_from_file_missing_raises(tmp_path):
    with pytest.raises(TextureError):
        Texture.from_file(tmp_path / "missing.bmp")