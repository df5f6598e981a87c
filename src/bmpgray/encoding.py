from enum import Enum
from functools import wraps
from typing import List, Sequence

import struct


class ByteOrder(Enum):
    Native = '='
    LittleEndian = '<'
    BigEndian = '>'
    Default = LittleEndian


class Format(Enum):
    u16 = 'H'
    i32 = 'i'
    u32 = 'I'


def packed_int(fmt: Format):
    def decorator(cls):
        is_signed = fmt.name[0] == 'i'
        num_bits = int(fmt.name[1:])
        if is_signed:
            min_value = -2 ** (num_bits - 1)
            max_value = (2 ** (num_bits - 1)) - 1
        else:
            min_value = 0
            max_value = (2 ** num_bits) - 1

        @wraps(cls)
        def wrapper(*args, **kwargs):
            instance = cls.__new__(cls)

            def __init__(self, value):
                if not isinstance(value, int):
                    raise TypeError(f'Value must be of type {int.__name__}')

                if value < min_value:
                    raise ValueError(f'Value must be at least {min_value}')

                if value > max_value:
                    raise ValueError(f'Value must be at most {max_value}')

                self.value = value
                self.format = fmt

            instance.__init__ = __init__.__get__(instance)
            instance.__init__(*args, **kwargs)
            return instance

        # The field layout of a header is a list of these wrappers, so they carry their format too
        wrapper.format = fmt
        return wrapper

    return decorator


@packed_int(Format.u16)
class U16:
    pass


@packed_int(Format.i32)
class I32:
    pass


@packed_int(Format.u32)
class U32:
    pass


def _layout(order: ByteOrder, types: Sequence) -> str:
    return f'{order.value}{"".join(x.format.value for x in types)}'


def size_of(types: Sequence) -> int:
    return struct.calcsize(_layout(ByteOrder.Default, types))


def encode(ints: List[packed_int]) -> bytes:
    return encode_with_order(ByteOrder.Default, ints)


def encode_with_order(order: ByteOrder, ints: List[packed_int]) -> bytes:
    formats = []
    values = []
    for x in ints:
        formats.append(x.format.value)
        values.append(x.value)

    return struct.pack(f'{order.value}{"".join(formats)}', *values)


def decode(data: bytes, types: Sequence) -> tuple:
    return decode_with_order(ByteOrder.Default, data, types)


def decode_with_order(order: ByteOrder, data: bytes, types: Sequence) -> tuple:
    """ Unpacks `data` field by field, `types` being the packed int classes (U16, U32, ...) in layout order """
    return struct.unpack(_layout(order, types), data)
