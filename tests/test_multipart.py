import pytest

from letterknife.errors import MultipartReadError
from letterknife.multipart import split_multipart


def test_split_skips_preamble_and_epilogue():
    body = (b'preamble\n'
            b'--xyz\n'
            b'Content-Type: text/plain\n'
            b'\n'
            b'first\n'
            b'--xyz\n'
            b'\n'
            b'second\n'
            b'--xyz--\n'
            b'epilogue\n')
    entities = list(split_multipart(body, 'xyz'))
    assert len(entities) == 2
    assert entities[0][0].get('Content-Type') == 'text/plain'
    assert entities[0][1] == b'first'
    assert len(entities[1][0]) == 0
    assert entities[1][1] == b'second'


def test_split_crlf():
    body = b'--b\r\nX-A: 1\r\n\r\nline one\r\nline two\r\n--b--\r\n'
    [(hdr, data)] = split_multipart(body, 'b')
    assert hdr.get('X-A') == '1'
    assert data == b'line one\r\nline two'


def test_split_keeps_inner_blank_lines():
    body = b'--b\n\nbody\n\n\n--b--'
    [(_, data)] = split_multipart(body, 'b')
    assert data == b'body\n\n'


def test_split_delimiter_with_trailing_space():
    body = b'--b  \n\nx\n--b-- \t\n'
    [(_, data)] = split_multipart(body, 'b')
    assert data == b'x'


def test_split_ignores_longer_boundaries():
    body = b'--b\n\n--bc\nstill here\n--b--\n'
    [(_, data)] = split_multipart(body, 'b')
    assert data == b'--bc\nstill here'


def test_split_empty_body_after_header():
    body = b'--b\nContent-Type: text/plain\n\n--b--\n'
    [(hdr, data)] = split_multipart(body, 'b')
    assert hdr.get('Content-Type') == 'text/plain'
    assert data == b''


def test_split_empty_entity():
    [(hdr, data)] = split_multipart(b'--b\n--b--\n', 'b')
    assert len(hdr) == 0
    assert data == b''


def test_split_no_entities():
    assert list(split_multipart(b'--b--\n', 'b')) == []


@pytest.mark.parametrize('body', [
    b'no delimiter at all\n',
    b'--b\n\nunterminated\n',
    b'--b\nnot a header\n--b--\n',
])
def test_split_rejects(body):
    with pytest.raises(MultipartReadError):
        list(split_multipart(body, 'b'))
