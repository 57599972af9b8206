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

"""Lazy decoding of a part's body.

Each stage wraps a binary reader and is itself a binary reader, so a
part's content can be decoded as it is copied out rather than all at
once.  Quoted-printable bodies are decoded while the part tree is
built, so no stage exists for them here.
"""

import io
import base64
import binascii
import logging

from .charset import charset_decoder
from .errors import TransferDecodeError, CharsetDecodeError, UnknownCharset

logger = logging.getLogger(__name__)

class _Stage:
    chunk_size = 8192

    def __init__(self, src):
        self.src = src
        self.buffer = b''
        self.done = False
        pass

    def _next_chunk(self):
        """Return the next piece of output, or None at the end."""
        raise NotImplementedError

    def read(self, size=-1):
        if size is None or size < 0:
            res = [ self.buffer ]
            self.buffer = b''
            while not self.done:
                chunk = self._next_chunk()
                if chunk is None:
                    self.done = True
                else:
                    res.append(chunk)
                    pass
                continue
            return b''.join(res)

        while len(self.buffer) < size and not self.done:
            chunk = self._next_chunk()
            if chunk is None:
                self.done = True
            else:
                self.buffer += chunk
                pass
            continue
        res = self.buffer[:size]
        self.buffer = self.buffer[size:]
        return res

    pass

class Base64Reader(_Stage):
    def __init__(self, src):
        super().__init__(src)
        self.pending = b''
        self.padded = False
        self.finished = False
        pass

    def _decode(self, data):
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise TransferDecodeError('decoding base64: %s' % e) from e

    def _next_chunk(self):
        if self.finished:
            return None
        data = self.src.read(self.chunk_size)
        if not data:
            self.finished = True
            if self.pending:
                raise TransferDecodeError('decoding base64: truncated input')
            return None

        ## Line breaks and blanks are not part of the encoding.
        data = self.pending + data.translate(None, b' \t\r\n')
        usable = len(data) - len(data) % 4
        self.pending = data[usable:]
        quanta = data[:usable]
        if quanta == b'':
            return b''

        ## Padding ends the encoding; only whitespace may follow.
        if self.padded:
            raise TransferDecodeError('decoding base64: data after padding')
        self.padded = quanta.endswith(b'=')
        return self._decode(quanta)

    pass

class CharsetReader(_Stage):
    """Convert text in 'charset' to UTF-8, failing on invalid input."""

    def __init__(self, src, charset):
        super().__init__(src)
        self.charset = charset
        try:
            self.decoder = charset_decoder(charset)
        except UnknownCharset as e:
            raise CharsetDecodeError(charset, 'unknown charset') from e
        self.finished = False
        pass

    def _next_chunk(self):
        if self.finished:
            return None
        data = self.src.read(self.chunk_size)
        final = not data
        try:
            text = self.decoder.decode(data, final)
        except UnicodeDecodeError as e:
            raise CharsetDecodeError(self.charset, e) from e
        if final:
            self.finished = True
            if text == '':
                return None
            pass
        return text.encode('utf-8')

    pass

def build_pipeline(part):
    """Chain the decoders a leaf part's body needs."""
    stream = io.BytesIO(part.body or b'')
    stages = []
    if part.transfer_encoding == 'base64':
        stream = Base64Reader(stream)
        stages.append('base64')
        pass
    charset = part.media_type_params.get('charset', '')
    if charset != '':
        stream = CharsetReader(stream, charset)
        stages.append(charset)
        pass
    logger.debug('pipeline for %s: %s', part.media_type,
                 ' -> '.join(stages) or 'identity')
    return stream
