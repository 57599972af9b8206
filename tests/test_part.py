import pytest

from letterknife.errors import (CharsetDecodeError, ContentConsumedError,
                                TransferDecodeError)
from letterknife.headers import Header
from letterknife.part import Part, ReadState
from letterknife.tree import build_part_tree, read_message, whole_message_part


def leaf(body, **fields):
    hdr = Header([(k.replace('_', '-'), v) for k, v in fields.items()])
    return build_part_tree(hdr, body)


def test_plain_body_round_trip():
    body = b'line one\nline two\n\x00\xff binary is fine\n'
    assert leaf(body).read() == body


def test_base64_body():
    part = leaf(b'SGVsbG8hIPCfmIoK\n', Content_Transfer_Encoding='Base64')
    assert part.read() == 'Hello! \U0001F60A\n'.encode('utf-8')


def test_base64_spread_over_lines():
    part = leaf(b'SGVs\r\nbG8h\r\nIPCf\r\nmIoK\r\n',
                Content_Transfer_Encoding='base64')
    assert part.read() == 'Hello! \U0001F60A\n'.encode('utf-8')


@pytest.mark.parametrize('body', [b'SGVsbG8!!!!\n', b'SGVsbG8\n'])
def test_corrupt_base64_fails_on_read(body):
    part = leaf(body, Content_Transfer_Encoding='base64')
    with pytest.raises(TransferDecodeError):
        part.read()


def test_base64_data_after_padding_fails_across_chunks():
    body = b'A' * 8188 + b'QQ==QUJD'
    part = leaf(body, Content_Transfer_Encoding='base64')
    with pytest.raises(TransferDecodeError):
        part.read()


def test_base64_padding_followed_by_blank_lines():
    part = leaf(b'QQ==\r\n\r\n', Content_Transfer_Encoding='base64')
    assert part.read() == b'A'


def test_quoted_printable_decoded_while_building():
    part = leaf(b'caf=C3=A9 au =\nlait\n',
                Content_Transfer_Encoding='quoted-printable')
    assert part.body == 'café au lait\n'.encode('utf-8')
    assert part.state is ReadState.NOT_OPENED


def test_charset_converted_to_utf8():
    part = leaf(b'Caf\xe9 cr\xe8me\n',
                Content_Type='text/plain; charset=ISO-8859-1')
    assert part.read() == 'Café crème\n'.encode('utf-8')


def test_base64_then_charset():
    part = leaf(b'Q2Fm6SBjcuhtZQo=\n',
                Content_Type='text/plain; charset=iso-8859-1',
                Content_Transfer_Encoding='base64')
    assert part.read() == 'Café crème\n'.encode('utf-8')


def test_invalid_charset_bytes_fail_on_read():
    part = leaf(b'ok \xff\xfe\n', Content_Type='text/plain; charset=utf-8')
    with pytest.raises(CharsetDecodeError) as exc:
        part.read()
    assert 'utf-8' in str(exc.value)


def test_truncated_multibyte_sequence_fails():
    part = leaf(b'\xe2\x9c', Content_Type='text/plain; charset=utf-8')
    with pytest.raises(CharsetDecodeError):
        part.read()


def test_unknown_charset_fails_on_read():
    part = leaf(b'text', Content_Type='text/plain; charset=x-martian')
    with pytest.raises(CharsetDecodeError) as exc:
        part.read()
    assert 'x-martian' in str(exc.value)


def test_read_in_pieces():
    body = b'0123456789' * 2000
    part = leaf(body)
    pieces = []
    while True:
        chunk = part.read(7)
        if chunk == b'':
            break
        pieces.append(chunk)
    assert b''.join(pieces) == body
    assert part.state is ReadState.EXHAUSTED


def test_content_can_be_read_only_once():
    part = leaf(b'once')
    assert part.state is ReadState.NOT_OPENED
    assert part.read(2) == b'on'
    assert part.state is ReadState.OPENED
    assert part.read() == b'ce'
    assert part.state is ReadState.EXHAUSTED
    with pytest.raises(ContentConsumedError):
        part.read()


def test_whole_message_is_never_decoded():
    raw = (b'Content-Type: text/plain; charset=utf-8\n'
           b'Content-Transfer-Encoding: base64\n'
           b'\n'
           b'not base64 at all\xff\n')
    whole = whole_message_part(read_message(raw))
    assert whole.is_whole_message
    assert whole.read() == raw


def test_disposition():
    part = leaf(b'x', Content_Disposition='attachment; filename="a.pdf"')
    assert part.is_attachment
    assert part.attachment_filename == 'a.pdf'

    part = leaf(b'x', Content_Disposition='inline; filename="a.pdf"')
    assert not part.is_attachment
    assert part.attachment_filename is None


def test_part_defaults():
    part = Part(Header())
    assert part.media_type == 'text/plain'
    assert part.is_leaf
    assert part.read() == b''
