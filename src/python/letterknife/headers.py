## Copyright (c) 2022, Lancaster University
## All rights reserved.
##
## Redistribution and use in source and binary forms, with or without
## modification, are permitted provided that the following conditions
## are met:
##
## 1. Redistributions of source code must retain the above copyright
##    notice, this list of conditions and the following disclaimer.
##
## 2. Redistributions in binary form must reproduce the above
##    copyright notice, this list of conditions and the following
##    disclaimer in the documentation and/or other materials provided
##    with the distribution.
##
## 3. Neither the name of the copyright holder nor the names of its
##    contributors may be used to endorse or promote products derived
##    from this software without specific prior written permission.
##
## THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
## "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
## LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
## FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE
## COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
## INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
## (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
## SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION)
## HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT,
## STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
## ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED
## OF THE POSSIBILITY OF SUCH DAMAGE.

import re
import logging
import email.errors
import email.header
import email.parser
import email.policy
from collections import namedtuple

from .charset import resolve_charset
from .errors import HeaderParseError, MalformedEncodedWord, AddressParseError

logger = logging.getLogger(__name__)

## The empty line ending a header block.
header_end = re.compile(rb'(?:\A|\n)\r?\n')

## Characters allowed in a header field name.
field_name = re.compile(r'^[!-9;-~]+$')

## Whitespace separating the words of a header value.
blanks = re.compile(r'([ \t\r\n]+)')

## Text an encoded word may carry: printable ASCII other than '?'.
encoded_text = re.compile(r'^[!->@-~]*$')
b_text = re.compile(r'^(?:[A-Za-z0-9+/]{4})*'
                    r'(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$')
q_bad_escape = re.compile(r'=(?![0-9A-Fa-f]{2})')

Address = namedtuple('Address', ['display_name', 'address'])

class Header:
    """Header fields in order of appearance.

    Names are matched without regard to case.  A field may occur more
    than once; 'get' yields the first occurrence and 'get_all' every
    one.
    """

    def __init__(self, fields=None):
        self._fields = []
        for name, value in fields or []:
            self.add(name, value)
            continue
        pass

    def add(self, name, value):
        self._fields.append((name, value))
        pass

    def get(self, name, default=''):
        key = name.lower()
        for fname, fvalue in self._fields:
            if fname.lower() == key:
                return fvalue
            continue
        return default

    def get_all(self, name):
        key = name.lower()
        return [ v for n, v in self._fields if n.lower() == key ]

    def items(self):
        return list(self._fields)

    def keys(self):
        return [ n for n, v in self._fields ]

    def __contains__(self, name):
        key = name.lower()
        return any(n.lower() == key for n, v in self._fields)

    def __len__(self):
        return len(self._fields)

    def __iter__(self):
        return iter(self.keys())

    def __repr__(self):
        return 'Header(%r)' % self._fields

    pass

def _unfold(value):
    ## The parser hands over ASCII, with other bytes escaped.
    value = ' '.join(line.strip() for line in value.splitlines())
    return value.encode('ascii', 'surrogateescape') \
                .decode('utf-8', 'surrogateescape')

def parse_header_block(data, unixfrom=False):
    """Parse the header block at the start of 'data'.

    Returns the header and the offset of the first body byte, just
    after the empty line that ends the block.  Folded lines are joined
    with a single space.  With 'unixfrom', a leading mbox 'From ' line
    is skipped.
    """
    m = header_end.search(data)
    if m is None:
        raise HeaderParseError('header block not terminated by an empty line')
    off = m.end()

    msg = email.parser.BytesHeaderParser().parsebytes(data[:off])
    if msg.defects:
        defect = msg.defects[0]
        raise HeaderParseError('malformed header block: %s %s' %
                               (type(defect).__name__, defect))
    if msg.get_payload():
        raise HeaderParseError('malformed header line: %r' %
                               msg.get_payload().strip())
    if msg.get_unixfrom() is not None and not unixfrom:
        raise HeaderParseError('unexpected envelope line: %r' %
                               msg.get_unixfrom())

    hdr = Header()
    for name, value in msg.raw_items():
        if not field_name.match(name):
            raise HeaderParseError('malformed header field name: %r' % name)
        hdr.add(name, _unfold(value))
        continue
    return hdr, off

def _encoded_word(word):
    m = email.header.ecre.fullmatch(word)
    if m is None or m.group('charset') == '':
        return None
    if not encoded_text.match(m.group('encoded')):
        return None
    return m

def decode_word(word):
    """Decode one whole RFC 2047 encoded word."""
    m = _encoded_word(word)
    if m is None:
        raise MalformedEncodedWord('not an encoded word: %r' % word)
    text = m.group('encoded')
    if m.group('encoding').upper() == 'B':
        if not b_text.match(text):
            raise MalformedEncodedWord('bad base64 in encoded word: %r' %
                                       word)
    elif q_bad_escape.search(text):
        raise MalformedEncodedWord('bad escape in encoded word: %r' % word)

    try:
        chunks = email.header.decode_header(word)
    except email.errors.HeaderParseError as e:
        raise MalformedEncodedWord('decoding %r: %s' % (word, e)) from e
    res = ''
    for data, cs in chunks:
        codec = resolve_charset(cs or 'us-ascii')
        try:
            res += data.decode(codec)
        except UnicodeDecodeError as e:
            raise MalformedEncodedWord('encoded word is not valid %s: %s' %
                                       (cs, e)) from e
        continue
    return res

def decode_header_value(raw):
    """Decode the RFC 2047 encoded words in a header value.

    Whitespace separating two encoded words is dropped.  Anything that
    is not a well-formed encoded word is kept as it is.
    """
    if raw is None or '=?' not in raw:
        return raw
    res = ''
    gap = ''
    after_word = False
    for n, tok in enumerate(blanks.split(raw)):
        if n % 2 == 1:
            gap = tok
            continue
        if _encoded_word(tok) is None:
            res += gap + tok
            after_word = False
        else:
            if not after_word:
                res += gap
                pass
            res += decode_word(tok)
            after_word = True
            pass
        gap = ''
        continue
    return res

def parse_address_list(raw):
    """Parse an address-list header value into Address tuples.

    Display names have their encoded words decoded; 'address' is the
    bare local-part@domain.
    """
    if raw is None or raw.strip() == '':
        raise AddressParseError('no address')
    try:
        field = email.policy.default.header_factory('To', raw)
    except email.errors.HeaderParseError as e:
        raise AddressParseError('invalid address list %r: %s' %
                                (raw, e)) from e
    defects = [ d for d in field.defects
                if not isinstance(d, email.errors.NonASCIILocalPartDefect) ]
    if defects:
        raise AddressParseError('invalid address list %r: %s' %
                                (raw, defects[0]))
    if len(field.addresses) == 0:
        raise AddressParseError('no address in %r' % raw)

    res = []
    for addr in field.addresses:
        if addr.username == '' or addr.domain == '':
            raise AddressParseError('invalid address %r in %r' %
                                    (str(addr), raw))
        res.append(Address(addr.display_name, addr.addr_spec))
        continue
    logger.debug('parsed %r as %r', raw, res)
    return res
