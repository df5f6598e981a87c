from dataclasses import dataclass, astuple
from typing import BinaryIO, ClassVar, List, Tuple

from bmpgray.encoding import encode, decode, size_of, U16, I32, U32
from bmpgray.errors import NotBmp, UnsupportedFormat, TruncatedInput

BMP_MAGIC = b'BM'

INFO_HEADER_SIZE = 40
SUPPORTED_BITS_PER_PIXEL = 24
BI_RGB = 0


@dataclass
class FileHeader:
    """ | Magic | File Size | Reserved 1 | Reserved 2 | Pixel Data Offset | """
    LAYOUT: ClassVar[list] = [U16, U32, U16, U16, U32]
    SIZE: ClassVar[int] = size_of(LAYOUT)

    magic: int  # u16, b'BM' read as little endian
    file_size: int  # u32
    reserved1: int  # u16
    reserved2: int  # u16
    pixel_data_offset: int  # u32

    @property
    def magic_text(self) -> str:
        return self.magic.to_bytes(2, 'little').decode('latin-1')

    def encode(self) -> bytes:
        return encode([layout(value) for layout, value in zip(self.LAYOUT, astuple(self))])


@dataclass
class InfoHeader:
    """ The 40 byte BITMAPINFOHEADER """
    LAYOUT: ClassVar[list] = [U32, I32, I32, U16, U16, U32, U32, U32, U32, U32, U32]
    SIZE: ClassVar[int] = size_of(LAYOUT)

    header_size: int  # u32
    width: int  # i32
    height: int  # i32, positive for bottom-up rows
    color_planes: int  # u16
    bits_per_pixel: int  # u16
    compression_method: int  # u32
    image_size_bytes: int  # u32
    x_resolution_ppm: int  # u32
    y_resolution_ppm: int  # u32
    palette_color_count: int  # u32
    important_color_count: int  # u32

    def encode(self) -> bytes:
        return encode([layout(value) for layout, value in zip(self.LAYOUT, astuple(self))])


def decode_file_header(data: bytes) -> FileHeader:
    if data[:2] != BMP_MAGIC:
        raise NotBmp(bytes(data[:2]))

    if len(data) < FileHeader.SIZE:
        raise TruncatedInput('file header', FileHeader.SIZE, len(data))

    header = FileHeader(*decode(data[:FileHeader.SIZE], FileHeader.LAYOUT))
    if header.pixel_data_offset > header.file_size:
        raise NotBmp(bytes(data[:2]), f'Pixel data offset {header.pixel_data_offset} '
                                      f'is past the end of the file ({header.file_size} bytes)')
    return header


def decode_info_header(data: bytes) -> InfoHeader:
    if len(data) < InfoHeader.SIZE:
        raise TruncatedInput('info header', InfoHeader.SIZE, len(data))

    header = InfoHeader(*decode(data[:InfoHeader.SIZE], InfoHeader.LAYOUT))

    reasons = []
    if header.header_size != INFO_HEADER_SIZE:
        reasons.append(f'header size {header.header_size} (expected {INFO_HEADER_SIZE})')
    if header.compression_method != BI_RGB:
        reasons.append(f'compression method {header.compression_method} (expected none)')
    if header.bits_per_pixel != SUPPORTED_BITS_PER_PIXEL:
        reasons.append(f'{header.bits_per_pixel} bits per pixel (expected {SUPPORTED_BITS_PER_PIXEL})')
    if header.width <= 0:
        reasons.append(f'width {header.width}')
    if header.height <= 0:
        reasons.append(f'height {header.height} (only bottom-up images are supported)')

    if reasons:
        raise UnsupportedFormat(reasons)

    return header


@dataclass
class BitmapHeaders:
    file: FileHeader
    info: InfoHeader

    SIZE: ClassVar[int] = FileHeader.SIZE + InfoHeader.SIZE

    @staticmethod
    def read(stream: BinaryIO) -> 'BitmapHeaders':
        file_header = decode_file_header(stream.read(FileHeader.SIZE))
        info_header = decode_info_header(stream.read(InfoHeader.SIZE))

        if file_header.pixel_data_offset < BitmapHeaders.SIZE:
            raise UnsupportedFormat([f'pixel data offset {file_header.pixel_data_offset} '
                                     f'overlaps the {BitmapHeaders.SIZE} header bytes'])

        return BitmapHeaders(file_header, info_header)

    def encode(self) -> bytes:
        return self.file.encode() + self.info.encode()

    def describe(self) -> List[Tuple[str, object]]:
        return [
            ('Type', self.file.magic_text),
            ('Size', self.file.file_size),
            ('Reserved 1', self.file.reserved1),
            ('Reserved 2', self.file.reserved2),
            ('Offset', self.file.pixel_data_offset),
            ('Header size', self.info.header_size),
            ('Width', self.info.width),
            ('Height', self.info.height),
            ('Color planes', self.info.color_planes),
            ('Bits per pixel', self.info.bits_per_pixel),
            ('Compression method', self.info.compression_method),
            ('Image size(in bytes)', self.info.image_size_bytes),
            ('Horizontal resolution(in ppm)', self.info.x_resolution_ppm),
            ('Vertical resolution(in ppm)', self.info.y_resolution_ppm),
            ('Number of colors in palette', self.info.palette_color_count),
            ('Important colors', self.info.important_color_count),
        ]
