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

"""Exceptions raised while parsing, querying and decoding a message."""

class LetterknifeError(Exception):
    pass

## Input malformation: the message itself cannot be parsed.

class MessageParseError(LetterknifeError):
    pass

class HeaderParseError(MessageParseError):
    pass

class ContentTypeParseError(MessageParseError):
    pass

class MultipartReadError(MessageParseError):
    pass

class NestingTooDeep(MessageParseError):
    pass

class MediaTypeError(LetterknifeError):
    pass

## Query malformation: a pattern or match spec is invalid.

class QueryError(LetterknifeError):
    pass

class InvalidPattern(QueryError):
    pass

class MalformedSpec(QueryError):
    pass

## Header values that cannot be decoded.

class HeaderDecodeError(LetterknifeError):
    pass

class UnknownCharset(HeaderDecodeError):
    def __init__(self, charset):
        super().__init__('unknown charset %r' % charset)
        self.charset = charset
        pass

    pass

class MalformedEncodedWord(HeaderDecodeError):
    pass

class AddressParseError(HeaderDecodeError):
    pass

## Failures surfacing only when a part's content is consumed.

class DecodeError(LetterknifeError):
    pass

class TransferDecodeError(DecodeError):
    pass

class CharsetDecodeError(DecodeError):
    def __init__(self, charset, reason):
        super().__init__('decoding %s: %s' % (charset, reason))
        self.charset = charset
        pass

    pass

class ContentConsumedError(DecodeError):
    pass

## Expected outcomes: valid query, nothing satisfied it.

class MatchFailed(LetterknifeError):
    pass

class HeaderMatchFailed(MatchFailed):
    def __init__(self, message='header match failed'):
        super().__init__(message)
        pass

    pass

class SelectFailed(MatchFailed):
    def __init__(self, message='no part selected'):
        super().__init__(message)
        pass

    pass

class ConfigError(LetterknifeError):
    pass
