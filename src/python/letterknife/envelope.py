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

"""Match the message's own header fields before looking at its parts.

A criterion is written 'Header:pattern'.  In address mode the field is
parsed as an address list and matches if any bare address matches;
otherwise the decoded field value is matched as a whole.
"""

import logging

from .pattern import compile_pattern
from .headers import decode_header_value, parse_address_list
from .errors import MalformedSpec, AddressParseError

logger = logging.getLogger(__name__)

def split_spec(spec):
    name, sep, pattern = spec.partition(':')
    if sep == '':
        raise MalformedSpec('must be in the form of `header:pattern`: %r' %
                            spec)
    return name, pattern

def match_header(header, spec, is_address):
    name, pattern = split_spec(spec)
    matcher = compile_pattern(pattern)
    raw = header.get(name)
    if is_address:
        try:
            values = [ a.address for a in parse_address_list(raw) ]
        except AddressParseError as e:
            raise AddressParseError('parsing header %s as addresses: %s' %
                                    (name, e)) from e
    else:
        values = [ raw ]
        pass

    for value in values:
        value = decode_header_value(value)
        logger.debug('test %s: %r against %r', name, value, pattern)
        if matcher.test(value):
            return True
        continue
    return False

def match_envelope(header, address_specs=(), header_specs=()):
    """Return True if every criterion matches.

    All criteria are evaluated, so a malformed one is reported even
    when an earlier one has already failed.
    """
    ok = True
    for spec in address_specs:
        if not match_header(header, spec, True):
            ok = False
            pass
        continue
    for spec in header_specs:
        if not match_header(header, spec, False):
            ok = False
            pass
        continue
    return ok
