import suite
from containor import Containor, ContainorArray, Pair, EMPTY, InvalidArgumentError
from dgen import from_schema

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

product_schema = {
    'sku': {'_qen_provider': 'sequence', 'start': 100},
    'name': 'word',
    'price': ('pyfloat', {'min_value': 5.0, 'max_value': 500.0}),
    'category': {'_qen_provider': 'choice', 'from': ['electronics', 'books', 'clothing']},
}

# helper data
letters = Containor({'a': 1, 'b': 2, 'c': 3, 'd': 4, 'e': 5})


# first() / last() tests

@test("first and last of the concrete scenario")
def test_first_last_scenario():
    c = Containor({'a': 1, 'b': 2}).set('c', 3)
    head = c.first(2)
    assert_that(isinstance(head, Containor), "first(2) is a containor")
    assert_that(head.entries() == [('a', 1), ('b', 2)], "holds a:1, b:2")
    assert_that(c.last() == Pair('c', 3), "last() is the c pair")
    assert_that(c.last().key == 'c' and c.last().value == 3, "pair exposes key and value")


@test("first and last with n <= 1 return a single pair")
def test_first_last_single():
    assert_that(letters.first() == Pair('a', 1), "first() -> a")
    assert_that(letters.first(1) == ('a', 1), "first(1) -> a, equal to a tuple too")
    assert_that(letters.first(0) == Pair('a', 1), "zero is treated as one")
    assert_that(letters.last(-3) == Pair('e', 5), "negative is treated as one")


@test("first and last on an empty containor return EMPTY")
def test_first_last_empty():
    assert_that(Containor().first() is EMPTY, "first of empty is EMPTY")
    assert_that(Containor().last() is EMPTY, "last of empty is EMPTY")


@test("last(n) keeps original relative order and clamps n")
def test_last_many():
    assert_that(letters.last(2).keys() == ['d', 'e'], "last two in order")
    assert_that(letters.last(50).keys() == ['a', 'b', 'c', 'd', 'e'], "n larger than size")
    assert_that(len(Containor().first(3)) == 0, "first(n) on empty gives an empty containor")


@test("first/last keys and values return arrays")
def test_keys_values_slices():
    assert_that(letters.first_keys() == ['a'], "default is one key")
    assert_that(letters.first_keys(3) == ['a', 'b', 'c'], "first three keys")
    assert_that(letters.first_values(2) == [1, 2], "first two values")
    assert_that(letters.last_keys(2) == ['d', 'e'], "last two keys")
    assert_that(isinstance(letters.last_values(3), ContainorArray), "returns ContainorArray")
    assert_that(letters.last_values(3) == [3, 4, 5], "last three values")


# at() tests

@test("at supports negative indices and clamps")
def test_at():
    assert_that(letters.at(0) == Pair('a', 1), "index 0")
    assert_that(letters.at(-1) == Pair('e', 5), "index -1 is last")
    assert_that(letters.at(2.7) == Pair('c', 3), "floats are floored")
    assert_that(letters.at(99) == Pair('e', 5), "clamped to the last entry")
    assert_that(letters.at(-99) == Pair('a', 1), "clamped to the first entry")
    assert_that(Containor().at(0) is EMPTY, "empty gives EMPTY")
    assert_raises(InvalidArgumentError, letters.at, 'x')


# random() tests

@test("random without n returns one existing pair")
def test_random_single():
    pair = letters.random(random_state=3)
    assert_that(isinstance(pair, Pair), "should be a pair")
    assert_that(letters.get(pair.key) == pair.value, "pair comes from the containor")
    assert_that(Containor().random() is EMPTY, "empty gives EMPTY")


@test("random with n samples distinct entries")
def test_random_many():
    sample = letters.random(3, random_state=11)
    assert_that(isinstance(sample, Containor) and len(sample) == 3, "three entries")
    assert_that(sample.every(lambda v, k: letters.get(k) == v), "entries come from the source")
    assert_that(len(letters.random(10)) == 5, "capped at size")
    assert_that(len(letters.random(0)) == 0, "zero gives an empty containor")


@test("random is reproducible with a random_state")
def test_random_seeded():
    assert_that(letters.random(3, random_state=5) == letters.random(3, random_state=5), "same seed, same sample")


# find() tests

@test("find returns the first match in insertion order")
def test_find():
    found = letters.find(lambda value, key, containor: value > 2)
    assert_that(found == Pair('c', 3), "c is the first value above 2")
    assert_that(letters.find(lambda v: v > 100) is EMPTY, "no match gives EMPTY")


@test("query methods reject non-callables")
def test_not_callable():
    for method in (letters.find, letters.filter, letters.partition, letters.map,
                   letters.some, letters.every, letters.for_each, letters.sort):
        assert_raises(InvalidArgumentError, method, 42)


# filter() / partition() tests

@test("filter keeps order and counts match")
def test_filter():
    evens = letters.filter(lambda v: v % 2 == 0)
    assert_that(evens.keys() == ['b', 'd'], "even entries in order")
    assert_that(len(evens) == sum(1 for v in letters.values() if v % 2 == 0), "size equals match count")


@test("filter over generated products by category")
def test_filter_generated():
    products = from_schema(product_schema, seed=555).keyed('sku', 40)
    books = products.filter(lambda p: p['category'] == 'books')
    assert_that(books.every(lambda p: p['category'] == 'books'), "only books kept")
    assert_that(books.keys() == [k for k in products.keys() if products[k]['category'] == 'books'],
                "relative order preserved")


@test("partition splits into disjoint matches and non-matches")
def test_partition():
    matches, rest = letters.partition(lambda v, k: k in 'ace')
    assert_that(matches.keys() == ['a', 'c', 'e'], "matches in order")
    assert_that(rest.keys() == ['b', 'd'], "non-matches in order")
    assert_that(len(matches) + len(rest) == len(letters), "sizes sum to the whole")
    assert_that(not matches.has('b', 'd').has_any, "disjoint")


# map() / some() / every() / for_each() tests

@test("map returns an array of transformed values")
def test_map():
    result = letters.map(lambda value, key, containor: f"{key}{value}")
    assert_that(isinstance(result, ContainorArray), "map returns ContainorArray")
    assert_that(result == ['a1', 'b2', 'c3', 'd4', 'e5'], "transform applied in order")
    assert_that(letters.map(lambda v: v % 2) == [1, 0, 1, 0, 1], "results need not be unique")


@test("some and every short circuit")
def test_some_every():
    visited = []

    def above_one(value, key):
        visited.append(key)
        return value > 1

    assert_that(letters.some(above_one), "b is above one")
    assert_that(visited == ['a', 'b'], "some stops at the first hit")

    visited.clear()
    assert_that(not letters.every(above_one), "a is not above one")
    assert_that(visited == ['a'], "every stops at the first miss")
    assert_that(Containor().every(lambda v: False), "every on empty is True")


@test("for_each passes value, key, containor and index")
def test_for_each():
    calls = []
    result = letters.for_each(lambda value, key, containor, index: calls.append((key, value, index)))
    assert_that(result is None, "for_each returns nothing")
    assert_that(calls[0] == ('a', 1, 0) and calls[-1] == ('e', 5, 4), "args in order with index")


@test("callbacks that mutate the containor do not change the pass")
def test_callback_mutation_snapshot():
    c = Containor({'a': 1, 'b': 2})
    seen = []

    def grow(value, key, containor):
        seen.append(key)
        containor.set(key * 2, value)

    c.for_each(grow)
    assert_that(seen == ['a', 'b'], "only the entries present at call start are visited")
    assert_that(c.keys() == ['a', 'b', 'aa', 'bb'], "mutations still apply")


# keys() / values() / entries() tests

@test("keys, values and entries accept a transform")
def test_keys_values_entries_transform():
    c = Containor({'a': 1, 'b': 2})
    assert_that(c.keys(lambda k, containor: k.upper()) == ['A', 'B'], "keys transformed")
    assert_that(c.values(lambda v: v * 10) == [10, 20], "values transformed")
    assert_that(c.entries(lambda k, v, containor: f"{k}={v}") == ['a=1', 'b=2'], "entries transformed")
    assert_that(c.entries() == [('a', 1), ('b', 2)], "plain entries are tuples")
    assert_raises(InvalidArgumentError, c.keys, 'x')


if __name__ == "__main__":
    suite.run(title="containor query test suite")
