from utils.memo import memoize_by_identity


def _counting(maxsize=256):
    calls = []

    @memoize_by_identity(maxsize)
    def build(*args):
        calls.append(args)
        return object()

    return build, calls


def test_same_objects_hit_the_cache():
    build, calls = _counting()
    key = object()
    assert build(key, 1) is build(key, 1)
    assert len(calls) == 1


def test_equal_but_distinct_objects_miss():
    build, calls = _counting()
    build([1], "a")
    build([1], "a")
    assert len(calls) == 2


def test_scalars_compare_by_value_and_type():
    build, calls = _counting()
    build(1.5, "x")
    build(1.5, "x")
    build(True)
    build(1)
    assert len(calls) == 3


def test_least_recently_used_is_evicted():
    build, calls = _counting(maxsize=2)
    build("a")
    build("b")
    build("a")
    build("c")
    assert build.cache_size() == 2
    build("a")
    assert len(calls) == 3
    build("b")
    assert len(calls) == 4


def test_cache_clear():
    build, calls = _counting()
    build("a")
    build.cache_clear()
    build("a")
    assert len(calls) == 2
