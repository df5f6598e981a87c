import argparse
import os
import sys
import tempfile

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from bmpgray.log import Log
from bmpgray.bitmap_header import BitmapHeaders
from bmpgray.errors import ConversionError, InputNotFound, OutputWriteFailed
from bmpgray.grayscale import apply_grayscale, render_ascii
from bmpgray.pixel_grid import PixelGrid, decode_grid, encode_grid

OUTPUT_FILE = 'new.bmp'

TABLE_WIDTH = 40


def load_bitmap(input_path: str) -> Tuple[BitmapHeaders, PixelGrid]:
    try:
        stream = open(input_path, 'rb')
    except OSError as e:
        raise InputNotFound(input_path, e.strerror or str(e))

    with stream:
        headers = BitmapHeaders.read(stream)
        info = headers.info
        Log.debug(f'{input_path}: {info.width}x{info.height}, {info.bits_per_pixel} bpp, '
                  f'pixel data at {headers.file.pixel_data_offset}')

        skipped = headers.file.pixel_data_offset - BitmapHeaders.SIZE
        if skipped > 0:
            Log.warning(f'{input_path}: skipping {skipped} bytes between the headers and the pixel data')

        grid = decode_grid(stream, headers.file.pixel_data_offset, info.width, info.height, info.bits_per_pixel)
        Log.debug(f'Decoded {grid.height} rows of {grid.row_bytes} bytes')

    return headers, grid


def write_bitmap(headers: BitmapHeaders, grid: PixelGrid, output_path: str = OUTPUT_FILE):
    output_dir = os.path.dirname(os.path.abspath(output_path))
    temp_path = None
    try:
        # Written next to the target and renamed, so a failure never leaves half an image behind
        with tempfile.NamedTemporaryFile('wb', dir=output_dir, prefix='.bmpgray-', suffix='.bmp', delete=False) as f:
            temp_path = f.name
            encode_grid(f, headers, grid)
        os.replace(temp_path, output_path)
    except OSError as e:
        if temp_path is not None and os.path.exists(temp_path):
            os.unlink(temp_path)
        raise OutputWriteFailed(output_path, e.strerror or str(e))

    Log.debug(f'Wrote {output_path}')


def convert_to_grayscale_bmp(input_path: str) -> BitmapHeaders:
    headers, grid = load_bitmap(input_path)
    apply_grayscale(grid)
    write_bitmap(headers, grid)
    return headers


def render_as_ascii(input_path: str) -> List[str]:
    _, grid = load_bitmap(input_path)
    return render_ascii(grid)


def format_header_table(headers: BitmapHeaders) -> List[str]:
    rule = '-' * (TABLE_WIDTH - 1)
    return [rule] + [f'{label}: {value}' for label, value in headers.describe()] + [rule]


class Converter:
    @dataclass
    class Config:
        input_path: str
        ascii: bool
        show_header: bool

        @staticmethod
        def add_arguments(parser: argparse.ArgumentParser):
            parser.add_argument('input_path', type=str, help='24-bit uncompressed BMP image')
            parser.add_argument('--ascii', action='store_true',
                                help=f'Print the image as ASCII art instead of writing {OUTPUT_FILE}')
            parser.add_argument('--show-header', action='store_true', help='Print the bitmap headers')

        @staticmethod
        def from_args(args) -> 'Converter.Config':
            return Converter.Config(args.input_path, args.ascii, args.show_header)

    def __init__(self, config: 'Converter.Config'):
        self.config = config

    @staticmethod
    def make(argv: Optional[Sequence[str]] = None) -> 'Converter':
        parser = argparse.ArgumentParser('bmpgray', description=f'Convert a BMP image to grayscale ({OUTPUT_FILE})')

        Log.add_args(parser)
        Converter.Config.add_arguments(parser)

        args = parser.parse_args(argv)
        Log.setup(args)

        return Converter(Converter.Config.from_args(args))

    def run(self) -> int:
        input_path = self.config.input_path
        try:
            if self.config.ascii:
                headers, grid = load_bitmap(input_path)
                self._print_header(headers)
                for line in render_ascii(grid):
                    print(line)
            else:
                headers = convert_to_grayscale_bmp(input_path)
                self._print_header(headers)
                Log.info(f'Created grayscale image of {input_path}: {OUTPUT_FILE}')
        except ConversionError as e:
            Log.error(str(e))
            return e.exit_code

        return 0

    def _print_header(self, headers: BitmapHeaders):
        if self.config.show_header:
            print('\n'.join(format_header_table(headers)))


def main():
    sys.exit(Converter.make().run())


if __name__ == '__main__':
    main()
