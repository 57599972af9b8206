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

from .pattern import compile_pattern

logger = logging.getLogger(__name__)

def walk_leaves(root):
    """Yield the leaf parts under 'root' in document order."""
    work = [ root ]
    while work:
        part = work.pop()
        if part.is_leaf:
            yield part
            continue
        work.extend(reversed(part.children))
        continue
    pass

def select_parts(root, pattern, want_attachment):
    matcher = compile_pattern(pattern)
    res = []
    for part in walk_leaves(root):
        logger.debug('visit %s attachment=%s', part.media_type,
                     part.is_attachment)
        if part.is_attachment != want_attachment:
            continue
        if matcher.test(part.media_type):
            res.append(part)
            pass
        continue
    return res

def select_all(root, part_pattern=None, attachment_pattern=None):
    """Select non-attachment parts, then attachments.

    Either pattern may be None or empty to skip that selection.
    """
    res = []
    if part_pattern:
        res += select_parts(root, part_pattern, False)
        pass
    if attachment_pattern:
        res += select_parts(root, attachment_pattern, True)
        pass
    return res
