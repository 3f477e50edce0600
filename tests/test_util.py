import pytest

from greatescape import util


@pytest.mark.parametrize(
    "channels", [(0, 0, 0, 0), (255, 255, 255, 255), (12, 34, 56, 78), (200, 1, 99, 7)]
)
def test_pack_unpack_round_trip(channels):
    assert util.unpack_rgba(util.pack_rgba(*channels)) == channels


def test_as_uint32_matches_pack():
    assert util.as_uint32(util.RED) == util.pack_rgba(255, 0, 0, 255)
    assert util.as_uint32(util.WHITE) == util.pack_rgba(255, 255, 255, 255)


def test_as_uint32_black_is_opaque_black():
    assert util.as_uint32(util.BLACK) == 0x000000FF


@pytest.mark.parametrize("channels", [(1, 2, 3, 4), (255, 0, 128, 64)])
def test_abgr_to_rgba_reorders(channels):
    r, g, b, a = channels
    assert util.abgr_to_rgba(util.pack_rgba(a, b, g, r)) == util.pack_rgba(r, g, b, a)


def test_abgr_to_rgba_is_involution():
    color = util.pack_rgba(10, 20, 30, 40)
    assert util.abgr_to_rgba(util.abgr_to_rgba(color)) == color


def test_pad_rect_zero_is_identity():
    assert util.pad_rect((5, 6, 7, 8), 0) == (5, 6, 7, 8)


def test_pad_rect_round_trip_and_growth():
    rect = (10, 20, 30, 40)
    padded = util.pad_rect(rect, 3)
    assert padded[2] == rect[2] + 2 * 3
    assert padded[0] == rect[0] - 3
    assert util.pad_rect(padded, -3) == rect


def test_lerp_endpoints_and_midpoint():
    assert util.lerp(2.0, 8.0, 0.0) == 2.0
    assert util.lerp(2.0, 8.0, 1.0) == 8.0
    assert util.lerp(2.0, 8.0, 0.5) == pytest.approx((2.0 + 8.0) / 2)


def test_lerp_byte_endpoints():
    assert util.lerp_byte(10, 200, 0.0) == 10
    assert util.lerp_byte(10, 200, 1.0) == 200
    assert util.lerp_byte(200, 10, 1.0) == 10


def test_multiply_rgba_negative_is_zero():
    assert util.multiply_rgba(util.pack_rgba(1, 2, 3, 4), -0.5) == 0


def test_multiply_rgba_identity_and_zero_keep_alpha():
    color = util.pack_rgba(100, 150, 200, 77)
    assert util.multiply_rgba(color, 1.0) == color
    assert util.multiply_rgba(color, 0.0) == util.pack_rgba(0, 0, 0, 77)


def test_multiply_rgba_never_brightens_when_below_one():
    color = util.pack_rgba(100, 150, 200, 255)
    scaled = util.unpack_rgba(util.multiply_rgba(color, 0.5))
    assert all(s <= c for s, c in zip(scaled, util.unpack_rgba(color)))


def test_multiply_rgba_all():
    pixels = [util.pack_rgba(10, 20, 30, 40), util.pack_rgba(50, 60, 70, 80)]
    assert util.multiply_rgba_all(pixels, -1.0) == [0, 0]
    assert util.multiply_rgba_all(pixels, 1.0) == pixels
    assert util.multiply_rgba_all(pixels, 0.0) == [0, 0]


def test_in_range_inclusive_bounds():
    assert util.in_range(5, 5, 10)
    assert util.in_range(10, 5, 10)
    assert not util.in_range(4, 5, 10)
    assert not util.in_range(11, 5, 10)


def test_blend_endpoints():
    first = util.pack_rgba(0, 50, 100, 150)
    second = util.pack_rgba(200, 250, 10, 20)
    assert util.blend(first, second, 0.0) == first
    assert util.blend(first, second, 1.0) == second
    assert util.blend(first, first) == first