from typing import List

import numpy as np

from bmpgray.pixel_grid import ColorSample, PixelGrid, BYTES_PER_SAMPLE

RED_WEIGHT = 0.3
GREEN_WEIGHT = 0.6
BLUE_WEIGHT = 0.1

# Darkest to lightest, one character per 32 levels of luminance
TEXT_PIXELS = '@#%Oa-. '


def luminance(sample: ColorSample) -> int:
    # Truncated, not rounded
    return int(RED_WEIGHT * sample.red + GREEN_WEIGHT * sample.green + BLUE_WEIGHT * sample.blue)


def luminance_map(grid: PixelGrid) -> np.ndarray:
    """
    Luminance of every sample as a (height, width) uint8 array.
    Same float64 operations in the same order as `luminance`, so both agree on every sample.
    """
    samples = grid.samples.astype(np.float64)
    blue, green, red = samples[:, :, 0], samples[:, :, 1], samples[:, :, 2]
    return (RED_WEIGHT * red + GREEN_WEIGHT * green + BLUE_WEIGHT * blue).astype(np.uint8)


def apply_grayscale(grid: PixelGrid):
    gray = luminance_map(grid)
    grid.rows[:, :grid.width * BYTES_PER_SAMPLE] = np.repeat(gray, BYTES_PER_SAMPLE, axis=1)


def render_ascii(grid: PixelGrid) -> List[str]:
    palette = np.array(list(TEXT_PIXELS))
    buckets = len(TEXT_PIXELS) - 1 - luminance_map(grid) // 32
    return [''.join(row) for row in palette[buckets]]
