import pytest

from letterknife.errors import InvalidPattern
from letterknife.pattern import compile_pattern, match_pattern, regex_from_pattern


@pytest.mark.parametrize('pattern,expected', [
    ('*@gmail.com', r'^.+?@gmail\.com\Z'),
    ('/foobar/', 'foobar'),
    ('text/*', r'^text/.+?\Z'),
])
def test_regex_from_pattern(pattern, expected):
    assert regex_from_pattern(pattern) == expected


@pytest.mark.parametrize('middle', ['a', 'abc', '*', '.', 'x y'])
def test_glob_wildcard_matches_one_or_more(middle):
    matcher = compile_pattern('foo*bar')
    assert matcher.test('foo' + middle + 'bar')
    assert not matcher.test('foobar')


def test_glob_wildcard_never_matches_empty():
    assert not match_pattern('@gmail.com', '*@gmail.com')
    assert match_pattern('motemen@gmail.com', '*@gmail.com')


def test_glob_literal_runs_are_escaped():
    assert not match_pattern('motemen@gmailxcom', '*@gmail.com')
    assert match_pattern('a+b(c)', '*+b(c)')


def test_glob_is_anchored():
    assert not match_pattern('xtext/plain', 'text/*')
    assert match_pattern('text/plain', 'text/*')
    assert not match_pattern('text/', 'text/*')


def test_glob_does_not_match_before_trailing_newline():
    assert not match_pattern('a@gmail.com\n', '*@gmail.com')
    assert not match_pattern('text/plain\n', 'text/*')
    assert not match_pattern('a@gmail.com\n', 'a@gmail.com')


def test_regex_is_not_anchored():
    assert match_pattern('foobar', '/oo/')
    assert not match_pattern('foo', '/^oo/')
    assert match_pattern('text/html', r'/^text\/(html|plain)$/')


def test_literal_is_exact_equality():
    matcher = compile_pattern('a.b')
    assert matcher.regex is None
    assert matcher.test('a.b')
    assert not matcher.test('axb')
    assert not matcher.test('a.bc')


def test_literal_with_metacharacters():
    assert match_pattern('(re)[gex]?', '(re)[gex]?')
    assert not match_pattern('re', '(re)[gex]?')


def test_single_slash_is_literal():
    assert match_pattern('/', '/')
    assert not match_pattern('x', '/')


@pytest.mark.parametrize('pattern', ['', None])
def test_empty_pattern_is_invalid(pattern):
    with pytest.raises(InvalidPattern):
        compile_pattern(pattern)


def test_bad_regex_is_invalid():
    with pytest.raises(InvalidPattern):
        compile_pattern('/(/')
