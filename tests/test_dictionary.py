import pytest
from atoms import Number, Quotation, DictionaryConflict
from dictionary import Dictionary

def test_hash_values():
    assert Dictionary.hash('') == 0
    assert Dictionary.hash('a') == 98          # 7757^0 + 97
    assert Dictionary.hash('ab') == 17         # (1 + 97 + 7757 + 98) % 128
    assert all(0 <= Dictionary.hash(name) < Dictionary.BUCKETS for name in ('x', 'dumpster', 'a' * 50))

def test_lookup_missing():
    assert Dictionary().lookup('nothing') is None
    assert 'nothing' not in Dictionary()

def test_define_and_lookup():
    words = Dictionary()
    quotation = Quotation([Number(1)])
    words.define('one', quotation)
    assert words.lookup('one') is quotation
    assert 'one' in words
    assert len(words) == 1

def test_colliding_names_share_a_chain():
    names = ['a', 'JJ', 'IK']
    assert {Dictionary.hash(name) for name in names} == {98}
    words = Dictionary()
    for i, name in enumerate(names): words.define(name, Quotation([Number(i)]))
    assert [entry.name for entry in words.chain(98)] == names
    for i, name in enumerate(names):
        assert words.lookup(name) == Quotation([Number(i)])

def test_redefinition_replaces_in_place_and_releases():
    words = Dictionary()
    words.define('a', Quotation([Number(0)]))
    old = Quotation([Number(1), Number(2)])
    words.define('JJ', old)
    words.define('IK', Quotation([Number(3)]))
    new = Quotation([Number(9)])
    words.define('JJ', new)
    assert words.lookup('JJ') is new
    assert len(old) == 0
    assert [entry.name for entry in words.chain(98)] == ['a', 'JJ', 'IK']
    assert len(words) == 3

def test_redefining_with_same_quotation_keeps_it():
    words = Dictionary()
    quotation = Quotation([Number(1)])
    words.define('w', quotation)
    words.define('w', quotation)
    assert words.lookup('w') == Quotation([Number(1)])

def test_reserved_names_are_rejected():
    words = Dictionary(reserved=['dup', '+'])
    with pytest.raises(DictionaryConflict):
        words.define('dup', Quotation())
    assert 'dup' not in words

def test_clear_releases_everything():
    words = Dictionary()
    quotation = Quotation([Number(1)])
    words.define('w', quotation)
    words.clear()
    assert len(words) == 0
    assert len(quotation) == 0
    assert list(words.buckets) == [None] * Dictionary.BUCKETS
