import pickle

import suite
from containor import Containor, Pair, Empty, EMPTY
from containor.types import adapt_callback, is_pair

test = suite.test
assert_that = suite.assert_that


# Pair tests

@test("pair unpacks, compares and converts")
def test_pair():
    pair = Pair('k', 1)
    key, value = pair
    assert_that((key, value) == ('k', 1), "unpacks as key, value")
    assert_that(pair == Pair('k', 1) and pair == ('k', 1), "equal to pairs and 2-tuples")
    assert_that(pair != ('k', 2), "different value is not equal")
    assert_that(pair.to_dict() == {'key': 'k', 'value': 1}, "dict form")
    assert_that(repr(pair) == "Pair(key='k', value=1)", repr(pair))
    assert_that(len({Pair('k', 1), Pair('k', 1)}) == 1, "hashable")


@test("is_pair accepts pairs and 2-item sequences only")
def test_is_pair():
    assert_that(is_pair(Pair(1, 2)) and is_pair((1, 2)) and is_pair([1, 2]), "pair shapes")
    assert_that(not is_pair((1, 2, 3)) and not is_pair('ab') and not is_pair(5), "non-pairs")


# EMPTY tests

@test("EMPTY is a falsy singleton distinct from None")
def test_empty():
    assert_that(Empty() is EMPTY, "single instance")
    assert_that(not EMPTY and EMPTY is not None, "falsy but not None")
    assert_that(repr(EMPTY) == "EMPTY", "readable repr")
    assert_that(pickle.loads(pickle.dumps(EMPTY)) is EMPTY, "survives pickling")


# callback adaptation tests

@test("callbacks receive only the arguments they declare")
def test_adapt_callback():
    full = adapt_callback(lambda a, b, c: (a, b, c), 3)
    short = adapt_callback(lambda a: a, 3)
    star = adapt_callback(lambda *args: args, 3)
    assert_that(full(1, 2, 3) == (1, 2, 3), "full arity untouched")
    assert_that(short(1, 2, 3) == 1, "extra arguments dropped")
    assert_that(star(1, 2, 3) == (1, 2, 3), "varargs receive everything")


@test("builtins work as containor callbacks")
def test_builtin_callbacks():
    c = Containor({'a': 1, 'b': 0})
    assert_that(c.map(str) == ['1', '0'], "str receives only the value")
    assert_that(c.filter(bool).keys() == ['a'], "bool as a predicate")


if __name__ == "__main__":
    suite.run(title="containor types test suite")
