import pytest
from atoms import Number, Text
from parsing import Tokenizer, Keyword, Identifier, UnknownToken, UnterminatedString, ParsingError

KEYWORDS = ['+', '-', '*', '/', 'dump', 'exit', 'pop', 'dup', 'rep', '.', 'begin', 'end']

def tokens(text):
    return list(Tokenizer(text, KEYWORDS).tokenize())

def describe(token):
    return (type(token).__name__, token.value)

def test_integers_and_decimals():
    assert tokens('3 42') == [Number(3), Number(42)]
    assert tokens('1.5')[0].value == pytest.approx(1.5)
    assert tokens('12.375')[0].value == pytest.approx(12.375)

def test_dot_after_whitespace_is_a_keyword():
    assert [describe(t) for t in tokens('3 4 + .')] == [
        ('Number', 3.0), ('Number', 4.0), ('Keyword', '+'), ('Keyword', '.')]

def test_malformed_numbers():
    with pytest.raises(UnknownToken):
        tokens('12abc')
    with pytest.raises(UnknownToken):
        tokens('3.')

def test_strings():
    assert tokens('"hello world" "x"') == [Text('hello world'), Text('x')]
    assert tokens('""') == [Text('')]

def test_unterminated_string():
    with pytest.raises(UnterminatedString):
        tokens('"never closed')
    assert issubclass(UnterminatedString, ParsingError)

def test_whitespace_is_skipped():
    assert [describe(t) for t in tokens(' \t dup\n')] == [('Keyword', 'dup')]
    assert tokens('   ') == []

def test_keyword_needs_a_boundary():
    assert [describe(t) for t in tokens('dump dumpster dup')] == [
        ('Keyword', 'dump'), ('Identifier', 'dumpster'), ('Keyword', 'dup')]
    assert [describe(t) for t in tokens('+5 -')] == [('Identifier', '+5'), ('Keyword', '-')]

def test_identifiers_extend_to_whitespace():
    assert [describe(t) for t in tokens('$ double.it')] == [('Identifier', '$'), ('Identifier', 'double.it')]

def test_next_advances_one_lexeme():
    tokenizer = Tokenizer('1 "a" pop', KEYWORDS)
    assert tokenizer.next() == Number(1)
    assert tokenizer.position == 1
    assert tokenizer.next() == Text('a')
    assert tokenizer.position == 5
    assert isinstance(tokenizer.next(), Keyword)
    assert tokenizer.next() is None

def test_identifier_token():
    (token,) = tokens('square')
    assert isinstance(token, Identifier)
    assert token.value == 'square'
