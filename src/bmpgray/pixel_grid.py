import io

from typing import BinaryIO, NamedTuple

import numpy as np

from bmpgray.bitmap_header import BitmapHeaders
from bmpgray.errors import TruncatedInput

BYTES_PER_SAMPLE = 3


class ColorSample(NamedTuple):
    # On-disk channel order
    blue: int
    green: int
    red: int


def row_bytes(width: int, bits_per_pixel: int) -> int:
    """ Bytes per stored row, padded to a 4 byte boundary """
    return ((bits_per_pixel * width + 31) // 32) * 4


class PixelGrid:
    """
    The decoded pixel array of a bitmap.
    Rows are kept top to bottom, each one with the exact byte length it has on disk, padding included.
    Only the first `width` samples of a row carry image data.
    """

    def __init__(self, width: int, height: int, bits_per_pixel: int, rows: np.ndarray):
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.rows = rows

        expected_shape = (height, self.row_bytes)
        if self.rows.shape != expected_shape or self.rows.dtype != np.uint8:
            raise ValueError(f'Pixel rows must be uint8 {expected_shape}, got {self.rows.dtype} {self.rows.shape}')

    @staticmethod
    def blank(width: int, height: int, bits_per_pixel: int = 24) -> 'PixelGrid':
        return PixelGrid(width, height, bits_per_pixel,
                         np.zeros((height, row_bytes(width, bits_per_pixel)), dtype=np.uint8))

    @property
    def row_bytes(self) -> int:
        return row_bytes(self.width, self.bits_per_pixel)

    @property
    def samples(self) -> np.ndarray:
        """ A (height, width, 3) blue-green-red view of the rows without their padding """
        return self.rows[:, :self.width * BYTES_PER_SAMPLE].reshape(self.height, self.width, BYTES_PER_SAMPLE)

    def sample(self, row: int, column: int) -> ColorSample:
        return ColorSample(*(int(x) for x in self.samples[row, column]))

    def set_sample(self, row: int, column: int, sample: ColorSample):
        start = column * BYTES_PER_SAMPLE
        self.rows[row, start:start + BYTES_PER_SAMPLE] = sample


def decode_grid(stream: BinaryIO, offset: int, width: int, height: int, bits_per_pixel: int) -> PixelGrid:
    size = row_bytes(width, bits_per_pixel)

    # Dimensions come straight from the header: make sure the file holds them before allocating
    available = max(stream.seek(0, io.SEEK_END) - offset, 0)
    if available < size * height:
        raise TruncatedInput('pixel data', size * height, available)

    stream.seek(offset)
    rows = np.zeros((height, size), dtype=np.uint8)

    # Rows are stored bottom-up: the first one on disk is the last one on screen
    for index in range(height - 1, -1, -1):
        data = stream.read(size)
        if len(data) != size:
            raise TruncatedInput(f'pixel row {height - 1 - index}', size, len(data))
        rows[index] = np.frombuffer(data, dtype=np.uint8)

    return PixelGrid(width, height, bits_per_pixel, rows)


def encode_grid(writer: BinaryIO, headers: BitmapHeaders, grid: PixelGrid):
    header_bytes = headers.encode()
    writer.write(header_bytes)

    # Whatever the input carried between the headers and the pixels is not copied
    gap = headers.file.pixel_data_offset - len(header_bytes)
    if gap > 0:
        writer.write(bytes(gap))

    for index in range(grid.height - 1, -1, -1):
        writer.write(grid.rows[index].tobytes())
