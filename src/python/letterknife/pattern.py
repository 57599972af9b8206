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

"""Match header values, addresses and media types against patterns.

A pattern takes one of three forms, decided by its text:

  /regex/     the interior is a regular expression, used as written
              and searched for anywhere in the value;
  glob*text   each '*' matches one or more characters (never none),
              everything else matches literally, the whole value must
              match;
  text        the value must be exactly equal to the pattern.
"""

import re

from .errors import InvalidPattern

## Splits a pattern into wildcards and the literal runs between them.
glob_token = re.compile(r'(\*|[^*]+)')

class Matcher:
    def __init__(self, pattern, regex=None):
        self.pattern = pattern
        self.regex = regex
        pass

    def test(self, value):
        if self.regex is None:
            return value == self.pattern
        return self.regex.search(value) is not None

    def __repr__(self):
        if self.regex is None:
            return 'Matcher(%r)' % self.pattern
        return 'Matcher(%r, /%s/)' % (self.pattern, self.regex.pattern)

    pass

def is_regex_pattern(pattern):
    return len(pattern) >= 2 and pattern[0] == '/' and pattern[-1] == '/'

def regex_from_pattern(pattern):
    """Return the regular expression source for a regex or glob pattern."""
    if is_regex_pattern(pattern):
        return pattern[1:-1]
    res = ''
    for tok in glob_token.findall(pattern):
        if tok == '*':
            res += '.+?'
        else:
            res += re.escape(tok)
            pass
        continue
    return '^' + res + r'\Z'

def compile_pattern(pattern):
    if pattern is None or pattern == '':
        raise InvalidPattern('empty pattern')

    ## Plain text is compared for equality; no regex is involved.
    if '*' not in pattern and not is_regex_pattern(pattern):
        return Matcher(pattern)

    src = regex_from_pattern(pattern)
    try:
        rx = re.compile(src)
    except re.error as e:
        raise InvalidPattern('invalid pattern %r: %s' % (pattern, e)) from e
    return Matcher(pattern, rx)

def match_pattern(value, pattern):
    return compile_pattern(pattern).test(value)
