from typing import List


class ConversionError(Exception):
    """Base class for everything that aborts a bitmap conversion."""
    exit_code = 1


class InputNotFound(ConversionError):
    """Input bitmap cannot be opened for reading"""
    exit_code = 3

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        super().__init__(f'{path}: {reason}' if reason else f'{path}: cannot open input')


class NotBmp(ConversionError):
    """Magic tag mismatch or an inconsistent file header"""
    exit_code = 4

    def __init__(self, found: bytes, message: str = ''):
        self.found = found
        super().__init__(message or f'Not a BMP image (magic {found!r})')


class UnsupportedFormat(ConversionError):
    """Anything but an uncompressed 24-bit BITMAPINFOHEADER image"""
    exit_code = 5

    def __init__(self, reasons: List[str]):
        self.reasons = reasons
        super().__init__(f'Not in simple format: {"; ".join(reasons)}')


class OutputWriteFailed(ConversionError):
    """Output bitmap cannot be written"""
    exit_code = 6

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        self.reason = reason
        super().__init__(f'Error in creating grayscale image {path}: {reason}')


class TruncatedInput(ConversionError):
    """Fewer bytes available than a header or pixel row requires"""
    exit_code = 7

    def __init__(self, what: str, expected: int, actual: int):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f'Truncated {what}: need {expected} bytes, got {actual}')
