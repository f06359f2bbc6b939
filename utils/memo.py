from collections import OrderedDict
from functools import wraps

_BY_VALUE = (int, float, str, bool, bytes, type(None))


def _arg_key(arg):
    if isinstance(arg, _BY_VALUE):
        return (type(arg), arg)
    return ("id", id(arg))


def memoize_by_identity(maxsize: int = 256):
    """Memoize a function on the identity of its arguments.

    Plain scalars (numbers, strings, None) are compared by value, every other
    argument by id(). A cached entry holds on to its arguments, so an id
    cannot be recycled by another object while the entry is alive. The least
    recently used entry is dropped once `maxsize` is exceeded.
    """
    def decorator(func):
        cache = OrderedDict()

        @wraps(func)
        def wrapper(*args):
            key = tuple(_arg_key(a) for a in args)
            entry = cache.get(key)
            if entry is not None:
                cache.move_to_end(key)
                return entry[1]
            result = func(*args)
            cache[key] = (args, result)
            if len(cache) > maxsize:
                cache.popitem(last=False)
            return result

        wrapper.cache_clear = cache.clear
        wrapper.cache_size = lambda: len(cache)
        return wrapper

    return decorator
