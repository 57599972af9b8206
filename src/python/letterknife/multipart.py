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

import logging

from .headers import Header, parse_header_block
from .errors import HeaderParseError, MultipartReadError

logger = logging.getLogger(__name__)

LWSP = b' \t\r\n'

def _delimiter_kind(line, delim):
    """Classify a line as a 'part' delimiter, the 'close' delimiter or
    neither (None)."""
    if not line.startswith(delim):
        return None
    rest = line[len(delim):]
    if rest.startswith(b'--'):
        return 'close' if rest[2:].strip(LWSP) == b'' else None
    return 'part' if rest.strip(LWSP) == b'' else None

def _entity(raw):
    if raw == b'':
        return Header(), b''
    try:
        hdr, off = parse_header_block(raw)
    except HeaderParseError as e:
        raise MultipartReadError('reading multipart: %s' % e) from e
    body = raw[off:]

    ## The line break before a delimiter belongs to the delimiter.
    if body.endswith(b'\r\n'):
        body = body[:-2]
    elif body.endswith(b'\n'):
        body = body[:-1]
        pass
    return hdr, body

def split_multipart(body, boundary):
    """Yield (header, body) for each entity of a multipart body.

    The preamble and epilogue are discarded.  Running out of input
    before the close delimiter raises MultipartReadError.
    """
    if isinstance(boundary, str):
        boundary = boundary.encode('utf-8', 'surrogateescape')
        pass
    delim = b'--' + boundary
    start = None
    pos = 0
    end = len(body)
    count = 0
    while pos < end:
        eol = body.find(b'\n', pos)
        nxt = end if eol < 0 else eol + 1
        kind = _delimiter_kind(body[pos:nxt], delim)
        if kind is not None:
            if start is not None:
                count += 1
                yield _entity(body[start:pos])
                pass
            if kind == 'close':
                logger.debug('boundary %r: %d entities', boundary, count)
                return
            start = nxt
            pass
        pos = nxt
        continue

    if start is None:
        raise MultipartReadError('reading multipart: boundary %r not found'
                                 % boundary.decode('utf-8', 'replace'))
    raise MultipartReadError('reading multipart: unexpected end of input '
                             'before close delimiter %r' %
                             boundary.decode('utf-8', 'replace'))
