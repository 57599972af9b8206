import pytest

from letterknife.envelope import match_envelope, match_header, split_spec
from letterknife.errors import AddressParseError, InvalidPattern, MalformedSpec
from letterknife.pattern import compile_pattern
from letterknife.tree import read_message

MAIL = '*mail \u2709\ufe0f'


@pytest.fixture(name='plain')
def fixture_plain(testdata):
    return read_message(testdata('plain.eml')).header


@pytest.fixture(name='multipart')
def fixture_multipart(testdata):
    return read_message(testdata('multipart.eml')).header


def test_split_spec():
    assert split_spec('Subject:a:b') == ('Subject', 'a:b')
    with pytest.raises(MalformedSpec):
        split_spec('Subject')


def test_address_match(plain):
    assert match_header(plain, 'From:*@gmail.com', True)
    assert match_header(plain, 'From:motemen@gmail.com', True)
    assert not match_header(plain, 'From:*@example.com', True)


def test_address_match_any_of_many(plain):
    assert match_header(plain, 'To:*@example.org', True)
    assert match_header(plain, 'To:someone@example.com', True)
    assert not match_header(plain, 'To:Someone*', True)


def test_address_match_ignores_display_name(multipart):
    assert match_header(multipart, 'From:sender@example.com', True)
    assert not match_header(multipart, 'From:sender@example.com', False)
    assert match_header(multipart, 'From:"Sender" <sender@example.com>', False)


def test_header_match_decodes_first(plain):
    assert match_header(plain, 'Subject:' + MAIL, False)
    assert not compile_pattern(MAIL).test(plain.get('Subject'))
    assert not match_header(plain, 'Subject:Hello', False)


def test_header_match_is_case_insensitive_on_name(plain):
    assert match_header(plain, 'subject:Test*', False)


def test_missing_header_matches_nothing(plain):
    assert not match_header(plain, 'X-Missing:*', False)
    with pytest.raises(AddressParseError):
        match_header(plain, 'Cc:*', True)


def test_empty_pattern(plain):
    with pytest.raises(InvalidPattern):
        match_header(plain, 'Subject:', False)


def test_envelope_requires_every_criterion(plain):
    assert match_envelope(plain, ['From:*@gmail.com'], ['Subject:' + MAIL])
    assert not match_envelope(plain, ['From:*@gmail.com'], ['Subject:nope'])
    assert not match_envelope(plain, ['From:nope@x.org'], ['Subject:' + MAIL])
    assert match_envelope(plain)


def test_envelope_reports_bad_spec_after_failure(plain):
    with pytest.raises(MalformedSpec):
        match_envelope(plain, ['From:nope@x.org'], ['Subject'])
