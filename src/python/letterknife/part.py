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

import io
import enum
import logging

from .decode import build_pipeline
from .mediatype import parse_media_type
from .errors import (ContentTypeParseError, MediaTypeError,
                     ContentConsumedError, DecodeError)

logger = logging.getLogger(__name__)

class ReadState(enum.Enum):
    NOT_OPENED = 'not opened'
    OPENED = 'opened'
    EXHAUSTED = 'exhausted'
    pass

class Part:
    """One MIME entity.

    A multipart entity holds its sub-entities in 'children'; any other
    entity is a leaf holding its undecoded body in 'body'.  Reading a
    part yields its decoded content, and can be done only once.
    """

    def __init__(self, header, media_type='text/plain',
                 media_type_params=None, disposition=None,
                 disposition_params=None):
        self.header = header
        self.media_type = media_type
        self.media_type_params = media_type_params or {}
        self.disposition = disposition
        self.disposition_params = disposition_params or {}
        self.children = []
        self.body = None

        ## Set only for the part standing for the whole input.
        self.raw = None

        self.state = ReadState.NOT_OPENED
        self._stream = None
        pass

    @classmethod
    def from_header(cls, header, default_type='text/plain'):
        ct = header.get('Content-Type').strip()
        if ct == '':
            mtype, params = default_type, {}
        else:
            try:
                mtype, params = parse_media_type(ct)
            except MediaTypeError as e:
                raise ContentTypeParseError('parsing content-type %r: %s' %
                                            (ct, e)) from e
            pass

        ## Disposition is advisory; an unreadable one is ignored.
        disp, dparams = None, {}
        cd = header.get('Content-Disposition').strip()
        if cd != '':
            try:
                disp, dparams = parse_media_type(cd)
            except MediaTypeError as e:
                logger.debug('ignoring content-disposition %r: %s', cd, e)
                pass
            pass
        return cls(header, mtype, params, disp, dparams)

    @classmethod
    def whole_message(cls, header, raw):
        part = cls.from_header(header)
        part.raw = raw
        return part

    @property
    def is_leaf(self):
        return len(self.children) == 0

    @property
    def is_whole_message(self):
        return self.raw is not None

    @property
    def is_attachment(self):
        return self.disposition == 'attachment'

    @property
    def attachment_filename(self):
        if not self.is_attachment:
            return None
        return self.disposition_params.get('filename')

    @property
    def transfer_encoding(self):
        return self.header.get('Content-Transfer-Encoding').strip().lower()

    def _open(self):
        if self.raw is not None:
            return io.BytesIO(self.raw)
        if not self.is_leaf:
            raise DecodeError('%s part has no content of its own' %
                              self.media_type)
        return build_pipeline(self)

    def read(self, size=-1):
        if self.state is ReadState.EXHAUSTED:
            raise ContentConsumedError('content of %s part already read' %
                                       self.media_type)
        if self.state is ReadState.NOT_OPENED:
            self._stream = self._open()
            self.state = ReadState.OPENED
            pass
        data = self._stream.read(size)

        ## Reading everything, or reaching the end, uses the content up.
        if size is None or size < 0 or (data == b'' and size != 0):
            self.state = ReadState.EXHAUSTED
            self._stream = None
            pass
        return data

    def __repr__(self):
        if self.is_leaf:
            return '<Part %s%s>' % (self.media_type,
                                    ' attachment' if self.is_attachment
                                    else '')
        return '<Part %s %r>' % (self.media_type, self.children)

    pass
