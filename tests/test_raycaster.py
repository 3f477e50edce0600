import math

import pygame
import pytest

from greatescape.geometry import Camera
from greatescape.raycaster import Raycaster, angle_between
from greatescape.renderer import Renderer
from greatescape.sprite import Sprite
from greatescape.texture import Texture
from greatescape.util import unpack_rgba
from greatescape.world import World

SIZE = 40
RED = 0xFF0000FF
BLUE = 0x0000FFFF


def make_world(closed=True):
    world = World()
    world.width = 5
    world.height = 5
    room = []
    for y in range(5):
        for x in range(5):
            border = x in (0, 4) or y in (0, 4)
            room.append(1 if (border and closed) else 16)
    world.room = room
    world.textures[1] = Texture(2, 2, [RED] * 4)
    world.textures[16] = Texture(2, 2, [BLUE] * 4)
    return world


def make_renderer():
    renderer = Renderer(SIZE, SIZE)
    renderer.create_rendering_surface()
    return renderer


def camera():
    return Camera(position=(2.5, 2.5), yaw=0.0, pitch=0.0)


def green_sprite(tmp_path, position):
    path = tmp_path / "green.bmp"
    surface = pygame.Surface((2, 2))
    surface.fill((0, 255, 0))
    pygame.image.save(surface, str(path))
    sprite = Sprite(position)
    sprite.set_texture(path)
    return sprite


def test_angle_between_equal_vectors_is_zero():
    assert angle_between((1.0, 0.0), (1.0, 0.0)) == 0.0


def test_angle_between_perpendicular_and_opposite():
    assert angle_between((1.0, 0.0), (0.0, 1.0)) == pytest.approx(math.pi / 2)
    assert angle_between((1.0, 0.0), (-1.0, 0.0)) == pytest.approx(math.pi)


def test_center_column_distance_to_wall():
    renderer = make_renderer()
    with Raycaster(renderer, threads=2) as caster:
        caster.set_active_world(make_world())
        caster.cast_columns(camera())
        assert caster.z_buffer[SIZE // 2] == pytest.approx(1.5)
        assert all(0 < z < math.inf for z in caster.z_buffer)


def test_wall_ceiling_and_floor_colours():
    renderer = make_renderer()
    with Raycaster(renderer, threads=1) as caster:
        caster.set_active_world(make_world())
        caster.cast_columns(camera())
    pixels = renderer.surface_pixels
    col = SIZE // 2
    r, g, b, a = unpack_rgba(pixels[(SIZE // 2) * SIZE + col])
    assert 0 < r < 255 and g == 0 and b == 0 and a == 255
    assert pixels[col] == 0x000000FF
    fr, fg, fb, fa = unpack_rgba(pixels[(SIZE - 1) * SIZE + col])
    assert fr == 0 and fg == 0 and fb > 0 and fa == 255


def test_result_does_not_depend_on_thread_count():
    single = make_renderer()
    many = make_renderer()
    with Raycaster(single, threads=1) as caster:
        caster.set_active_world(make_world())
        caster.cast_columns(camera())
    with Raycaster(many, threads=3) as caster:
        caster.set_active_world(make_world())
        caster.cast_columns(camera())
    assert single.surface_pixels == many.surface_pixels


def test_open_world_draws_nothing():
    renderer = make_renderer()
    with Raycaster(renderer, threads=2) as caster:
        caster.set_active_world(make_world(closed=False))
        caster.cast_columns(camera())
        assert all(math.isinf(z) for z in caster.z_buffer)
    assert set(renderer.surface_pixels) == {0}


def test_draw_sprites_resets_hovered(tmp_path):
    sprite = green_sprite(tmp_path, (3.2, 2.5, 0.0))
    world = make_world()
    world.sprites.append(sprite)
    renderer = make_renderer()
    with Raycaster(renderer, threads=1) as caster:
        caster.set_active_world(world)
        caster.cast_columns(camera())
        caster.draw_sprites(camera())
        assert Sprite.hovered_sprite is sprite
        world.sprites.remove(sprite)
        caster.draw_sprites(camera())
    assert Sprite.hovered_sprite is None


def test_sprite_in_front_is_drawn_and_hovered(tmp_path):
    sprite = green_sprite(tmp_path, (3.2, 2.5, 0.0))
    assert (sprite.sprite_width, sprite.sprite_height) == (2, 2)
    world = make_world()
    world.sprites.append(sprite)
    renderer = make_renderer()
    with Raycaster(renderer, threads=2) as caster:
        caster.set_active_world(world)
        caster.cast_columns(camera())
        caster.draw_sprites(camera())
    assert Sprite.hovered_sprite is sprite
    assert Sprite.hovered_distance == pytest.approx(0.7)
    r, g, b, _ = unpack_rgba(renderer.surface_pixels[(SIZE // 2) * SIZE + SIZE // 2])
    assert g > 0 and r == 0 and b == 0


def test_draw_blits_to_target():
    renderer = Renderer(SIZE, SIZE)
    target = pygame.Surface((SIZE, SIZE))
    renderer.init(target)
    renderer.create_rendering_surface()
    with Raycaster(renderer, threads=2) as caster:
        caster.set_active_world(make_world())
        caster.draw(camera())
    color = target.get_at((SIZE // 2, SIZE // 2))
    assert color.r > 0 and color.g == 0 and color.b == 0


def test_requires_world():
    with Raycaster(make_renderer(), threads=1) as caster:
        with pytest.raises(RuntimeError):
            caster.cast_columns(camera())


def test_closed_raycaster_refuses_work():
    caster = Raycaster(make_renderer(), threads=1)
    caster.set_active_world(make_world())
    caster.close()
    with pytest.raises(RuntimeError):
        caster.cast_columns(camera())