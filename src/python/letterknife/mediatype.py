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

"""Parse Content-Type and Content-Disposition values.

Parameters may use RFC 2231 extended values and continuations, as in

  Content-Disposition: attachment;
   filename*0*=utf-8''r%C3%A9sum;
   filename*1=".pdf"

Values are read with the email package's header registry, and any
defect it reports makes the value malformed.
"""

import mimetypes
import email.policy

from .errors import MediaTypeError

## Extensions chosen for common types before asking mimetypes.
preferred_extensions = {
    'text/html': '.html',
    'text/plain': '.txt',
}

def _field(value):
    ## Without a subtype, the value is read as a disposition.
    factory = email.policy.default.header_factory
    if '/' in value.split(';', 1)[0]:
        field = factory('Content-Type', value)
        return field, field.content_type
    field = factory('Content-Disposition', value)
    return field, field.content_disposition

def parse_media_type(value):
    """Split a media type value into a lower-cased type and parameters.

    Returns (type, params).  Parameter names are lower-cased.  Raises
    MediaTypeError if the value is not well formed, including when a
    parameter is given more than once.
    """
    if value is None or value.strip() == '':
        raise MediaTypeError('no media type')
    field, mtype = _field(value.strip())
    if field.defects:
        raise MediaTypeError('invalid media type %r: %s' %
                             (value, field.defects[0]))
    if not mtype:
        raise MediaTypeError('no media type in %r' % value)
    return mtype, dict(field.params)

def extension_for_type(mtype):
    if mtype in preferred_extensions:
        return preferred_extensions[mtype]
    ext = mimetypes.guess_extension(mtype)
    if ext:
        return ext
    return '.bin'
