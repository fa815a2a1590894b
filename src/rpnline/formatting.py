from enum import Enum

from .util import INT_BITS


class IntFormat(Enum):
    DEC = 'd'
    HEX = 'h'


DEFAULT_FMT = IntFormat.DEC


def _hex(n):
    # Negatives show their two's complement, like any 64-bit register.
    return format(n & ((1 << INT_BITS) - 1), '#x')


RENDERERS = {
    IntFormat.DEC: str,
    IntFormat.HEX: _hex,
}


def render(stack, fmt=DEFAULT_FMT):
    '''
    Render stack bottom to top, every element followed by a space.
    '''
    convert = RENDERERS[fmt]
    return ''.join(convert(n) + ' ' for n in stack)
