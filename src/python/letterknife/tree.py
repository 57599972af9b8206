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

import quopri
import logging
from collections import namedtuple

from .part import Part
from .headers import parse_header_block
from .multipart import split_multipart
from .errors import NestingTooDeep

logger = logging.getLogger(__name__)

## A message as read from input: its top-level header, the bytes after
## the header block, and the whole input.
Message = namedtuple('Message', ['header', 'body', 'raw'])

def _read_all(src):
    if hasattr(src, 'read'):
        return src.read()
    return bytes(src)

def read_message(src):
    raw = _read_all(src)
    header, off = parse_header_block(raw, unixfrom=True)
    return Message(header, raw[off:], raw)

def whole_message_part(message):
    """Return a part whose content is the untouched input."""
    return Part.whole_message(message.header, message.raw)

def _fill_leaf(part, data):
    if part.transfer_encoding == 'quoted-printable':
        data = quopri.decodestring(data)
        pass
    part.body = data
    pass

def build_part_tree(header, body, max_depth=None, default_type='text/plain'):
    """Build the tree of parts for an entity with 'header' and 'body'.

    'body' is bytes or a binary file.  A multipart entity nested deeper
    than 'max_depth' multipart levels raises NestingTooDeep; by default
    there is no limit.
    """
    root = Part.from_header(header, default_type)
    work = [ (root, _read_all(body), 0) ]
    while work:
        part, data, depth = work.pop()
        boundary = part.media_type_params.get('boundary', '')
        if not part.media_type.startswith('multipart/') or boundary == '':
            _fill_leaf(part, data)
            continue

        if max_depth is not None and depth >= max_depth:
            raise NestingTooDeep('multipart nesting deeper than %d' %
                                 max_depth)
        child_type = 'text/plain'
        if part.media_type == 'multipart/digest':
            child_type = 'message/rfc822'
            pass
        for sub_header, sub_body in split_multipart(data, boundary):
            child = Part.from_header(sub_header, child_type)
            part.children.append(child)
            work.append((child, sub_body, depth + 1))
            continue
        logger.debug('%s at depth %d: %d parts', part.media_type, depth,
                     len(part.children))
        continue
    return root
