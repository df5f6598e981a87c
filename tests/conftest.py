import struct

import pytest

from PIL import Image

from bmpgray.pixel_grid import row_bytes


def build_bmp(pixels, extra: bytes = b'', magic: bytes = b'BM', header_size: int = 40, bits_per_pixel: int = 24,
              compression: int = 0, padding_byte: int = 0) -> bytes:
    """
    A BMP file from `pixels`: rows top to bottom, each a list of (red, green, blue).
    `extra` is placed between the headers and the pixel data.
    """
    height = len(pixels)
    width = len(pixels[0])
    stride = row_bytes(width, 24)

    data = b''
    for row in reversed(pixels):
        raw = b''.join(bytes((blue, green, red)) for red, green, blue in row)
        data += raw + bytes([padding_byte]) * (stride - len(raw))

    offset = 54 + len(extra)
    file_header = magic + struct.pack('<IHHI', offset + len(data), 0, 0, offset)
    info_header = struct.pack('<IiiHHIIIIII', header_size, width, height, 1, bits_per_pixel, compression, len(data),
                              2835, 2835, 0, 0)
    return file_header + info_header + extra + data


@pytest.fixture
def write_bmp(tmp_path):
    def write(name: str, contents: bytes) -> str:
        path = tmp_path / name
        path.write_bytes(contents)
        return str(path)

    return write


@pytest.fixture
def pillow_bmp(tmp_path):
    """ A 5x3 image saved by Pillow: the width needs row padding """
    image = Image.new('RGB', (5, 3))
    for y in range(3):
        for x in range(5):
            image.putpixel((x, y), (x * 50, y * 100, (x + y) * 20))

    path = tmp_path / 'pillow.bmp'
    image.save(path, format='BMP')
    return str(path), image


def with_dimensions(data: bytes, width: int, height: int) -> bytes:
    """ `data` with the info header claiming another size, pixel data untouched """
    return data[:18] + struct.pack('<ii', width, height) + data[26:]
