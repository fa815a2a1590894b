from functools import wraps


# Signed 64-bit range of every value on the stack.
INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


class RPNError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Ugly hack decorator that converts exceptions to advisory errors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def wrapping(f):
    '''
    Wrap integer results around into the signed 64-bit range.
    '''
    @wraps(f)
    def wrapper(*args):
        return ((f(*args) - INT_MIN) & ((1 << INT_BITS) - 1)) + INT_MIN
    return wrapper


def in_range(n):
    return INT_MIN <= n <= INT_MAX
