import pytest

from letterknife.errors import MediaTypeError
from letterknife.mediatype import extension_for_type, parse_media_type


@pytest.mark.parametrize('value,expected', [
    ('text/plain', ('text/plain', {})),
    ('text/plain; charset="utf-8"', ('text/plain', {'charset': 'utf-8'})),
    ('Multipart/Mixed; Boundary=AbC', ('multipart/mixed', {'boundary': 'AbC'})),
    ('text/plain; charset=utf-8;', ('text/plain', {'charset': 'utf-8'})),
    ('attachment; filename="a b.pdf"', ('attachment', {'filename': 'a b.pdf'})),
    ('attachment; filename="a\\"b"', ('attachment', {'filename': 'a"b'})),
    ('inline', ('inline', {})),
    ('text/html ; charset = "us-ascii"', ('text/html', {'charset': 'us-ascii'})),
])
def test_parse_media_type(value, expected):
    assert parse_media_type(value) == expected


@pytest.mark.parametrize('value', [
    '',
    '   ',
    'text/',
    '/plain',
    'text/plain foo',
    'text/plain; charset',
    'text/plain; charset=',
    'text/plain; a=1; a=2',
    'text/plain; charset=utf-8 junk',
    'attachment; filename=a b.pdf',
])
def test_parse_media_type_rejects(value):
    with pytest.raises(MediaTypeError):
        parse_media_type(value)


def test_extended_parameter():
    _, params = parse_media_type(
        "attachment; filename*=UTF-8''r%C3%A9sum%C3%A9.txt")
    assert params == {'filename': 'résumé.txt'}


def test_plain_and_extended_parameter_is_a_duplicate():
    with pytest.raises(MediaTypeError):
        parse_media_type(
            "attachment; filename=plain.txt; filename*=utf-8''fancy.txt")


def test_parameter_continuations():
    _, params = parse_media_type(
        'attachment; filename*0="long"; filename*1="name.txt"')
    assert params == {'filename': 'longname.txt'}


def test_encoded_parameter_continuations():
    _, params = parse_media_type(
        "attachment; filename*0*=utf-8''r%C3%A9; filename*1=sume.pdf")
    assert params == {'filename': 'résume.pdf'}


def test_extended_parameter_with_unknown_charset_keeps_ascii():
    _, params = parse_media_type("attachment; filename*=x-bogus''abc")
    assert params == {'filename': 'abc'}


def test_extended_parameter_with_unknown_charset_and_8bit_is_invalid():
    with pytest.raises(MediaTypeError):
        parse_media_type("attachment; filename*=x-bogus''%E9")



@pytest.mark.parametrize('mtype,ext', [
    ('text/html', '.html'),
    ('text/plain', '.txt'),
    ('application/pdf', '.pdf'),
    ('application/x-no-such-type', '.bin'),
])
def test_extension_for_type(mtype, ext):
    assert extension_for_type(mtype) == ext
