'''
Binary integer operators, keyed by the symbol that invokes them.

The table is closed. Extending the language means adding entries here.
'''

from types import MappingProxyType
import operator

from .util import wrap_user_errors, wrapping


@wrapping
@wrap_user_errors('division by zero')
def divide(left, right):
    '''
    Integer division, truncating toward zero.
    '''
    # Python's // floors; i64 division doesn't.
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


add = wrapping(operator.__add__)
multiply = wrapping(operator.__mul__)


OPERATORS = MappingProxyType({
    'p': add,
    '+': add,
    'm': multiply,
    '*': multiply,
    'd': divide,
})


def lookup(symbol):
    '''
    Return the binary operator for symbol, or None.
    '''
    return OPERATORS.get(symbol)
