import numpy as np

import pytest

from bmpgray.grayscale import luminance, luminance_map, apply_grayscale, render_ascii
from bmpgray.pixel_grid import ColorSample, PixelGrid


def grid_of(pixels) -> PixelGrid:
    """ `pixels` rows of (red, green, blue) """
    grid = PixelGrid.blank(len(pixels[0]), len(pixels))
    for y, row in enumerate(pixels):
        for x, (red, green, blue) in enumerate(row):
            grid.set_sample(y, x, ColorSample(blue, green, red))
    return grid


@pytest.mark.parametrize('red, green, blue, expected', [
    (255, 0, 0, 76),
    (0, 255, 0, 153),
    (0, 0, 255, 25),
    (255, 255, 255, 255),
    (0, 0, 0, 0),
])
def test_luminance(red, green, blue, expected):
    assert luminance(ColorSample(blue, green, red)) == expected


def test_luminance_map_matches_scalar_formula():
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(64, 64, 3)).tolist()
    grid = grid_of(pixels)

    gray = luminance_map(grid)

    for y, row in enumerate(pixels):
        for x, (red, green, blue) in enumerate(row):
            value = int(gray[y, x])
            assert 0 <= value <= 255
            assert value == int(0.3 * red + 0.6 * green + 0.1 * blue)
            assert value == luminance(ColorSample(blue, green, red))


@pytest.mark.parametrize('value', [0, 127, 255])
def test_gray_samples_stay_gray(value):
    grid = grid_of([[(value, value, value)]])

    apply_grayscale(grid)
    once = grid.sample(0, 0)
    apply_grayscale(grid)
    twice = grid.sample(0, 0)

    assert once.red == once.green == once.blue
    assert value - 1 <= once.red <= value
    assert twice.red == twice.green == twice.blue == luminance(once)


def test_apply_grayscale_uses_original_channels():
    grid = grid_of([[(255, 0, 0), (0, 255, 0)], [(0, 0, 255), (255, 255, 255)]])

    apply_grayscale(grid)

    assert [grid.sample(0, 0), grid.sample(0, 1), grid.sample(1, 0), grid.sample(1, 1)] == [
        ColorSample(76, 76, 76), ColorSample(153, 153, 153), ColorSample(25, 25, 25), ColorSample(255, 255, 255)]


def test_apply_grayscale_leaves_padding_alone():
    grid = grid_of([[(200, 100, 50)]])
    grid.rows[0, 3] = 0x7F

    apply_grayscale(grid)

    assert grid.rows[0, 3] == 0x7F


def test_render_ascii_mapping():
    # Luminance 255 is bucket 7 - 255 // 32 = 0, the densest character
    grid = grid_of([[(255, 255, 255), (0, 0, 0)]])

    assert render_ascii(grid) == ['@ ']


def test_render_ascii_buckets():
    row = [(value, value, value) for value in (0, 31, 32, 64, 96, 128, 160, 192, 224)]
    lines = render_ascii(grid_of([row, row]))

    expected = ''.join('@#%Oa-. '[7 - luminance(ColorSample(v, v, v)) // 32] for v, _, _ in row)
    assert lines == [expected, expected]
    assert lines[0][0] == ' '
    assert len(lines[0]) == 9
