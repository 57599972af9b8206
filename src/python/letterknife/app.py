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

"""Filter a mail message and extract its parts.

Read one message from a file or STDIN, check its header against the
--match-* criteria, select parts with --select-*, then print or save
them.  Exit status is 0 on success, 1 if a requested match or
selection found nothing, and 2 on any other error.
"""

import os
import re
import sys
import shutil
import getopt
import logging
import tempfile

from .config import LetterknifeConfiguration
from .envelope import match_envelope
from .headers import decode_header_value
from .mediatype import extension_for_type
from .selector import select_all
from .tree import read_message, whole_message_part, build_part_tree
from .errors import (LetterknifeError, MatchFailed, HeaderMatchFailed,
                     SelectFailed)

logger = logging.getLogger(__name__)

usage = '''usage: letterknife [options] [file]

Shortcuts:
  --from PATTERN             --match-address 'From:PATTERN'
  --subject PATTERN          --match-header 'Subject:PATTERN'
  --html                     --select-part text/html
  --plain                    --select-part text/plain

Filters (repeatable, all must match):
  --match-address H:PATTERN  address header, eg. "From:*@example.com"
  --match-header H:PATTERN   header, eg. "Subject:foobar"

Selectors:
  --select-part TYPE         non-attachment parts by content type
  --select-attachment TYPE   attachments by content type

Actions:
  --print-content            print decoded content (default)
  --print-header NAME        print a decoded header
  --print-raw                print the input as-is
  --save-file                save parts as files and print their paths

  -f, --config FILE          configuration file
  --debug                    enable debug logging
  -h, --help                 show this message
'''

long_options = [
    'from=', 'subject=', 'html', 'plain',
    'match-address=', 'match-header=',
    'select-part=', 'select-attachment=',
    'print-content', 'print-header=', 'print-raw', 'save-file',
    'config=', 'debug', 'help',
]

def _sanitize_filename(name):
    name = name.strip().replace('\x00', '')
    name = os.path.basename(name)
    name = re.sub(r'[\\/:*?"<>|]', '-', name)
    name = re.sub(r'\s+', ' ', name).strip()
    if name in ('', '.', '..'):
        return 'file.bin'
    return name

def _unique_path(dirname, filename):
    path = os.path.join(dirname, filename)
    stem, suf = os.path.splitext(filename)
    num = 1
    while os.path.exists(path):
        path = os.path.join(dirname, '%s_%d%s' % (stem, num, suf))
        num += 1
        continue
    return path

class LetterKnife:
    def __init__(self, config=None):
        self.config = config
        self.cfg_name = None
        self.debug = False
        self.show_help = False

        self.shortcut_from = None
        self.shortcut_subject = None
        self.shortcut_html = False
        self.shortcut_plain = False

        self.match_address = []
        self.match_header = []

        self.select_part = None
        self.select_attachment = None

        self.print_content = False
        self.print_header = None
        self.print_raw = False
        self.save_file = False
        pass

    def parse_args(self, args):
        """Set options from command-line arguments.

        Returns the remaining positional arguments.  Raises
        getopt.GetoptError on an unknown or incomplete option.
        """
        opts, args = getopt.getopt(args, 'f:h', long_options)
        for opt, val in opts:
            if opt == '--from':
                self.shortcut_from = val
            elif opt == '--subject':
                self.shortcut_subject = val
            elif opt == '--html':
                self.shortcut_html = True
            elif opt == '--plain':
                self.shortcut_plain = True
            elif opt == '--match-address':
                self.match_address.append(val)
            elif opt == '--match-header':
                self.match_header.append(val)
            elif opt == '--select-part':
                self.select_part = val
            elif opt == '--select-attachment':
                self.select_attachment = val
            elif opt == '--print-content':
                self.print_content = True
            elif opt == '--print-header':
                self.print_header = val
            elif opt == '--print-raw':
                self.print_raw = True
            elif opt == '--save-file':
                self.save_file = True
            elif opt in ('-f', '--config'):
                self.cfg_name = val
            elif opt == '--debug':
                self.debug = True
            elif opt in ('-h', '--help'):
                self.show_help = True
                pass
            continue
        return args

    def configure(self):
        if self.config is None:
            self.config = LetterknifeConfiguration(self.cfg_name)
            pass
        if self.debug:
            self.config.debug = True
            pass
        return self.config

    def criteria(self):
        """Return the address specs, header specs, part pattern and
        attachment pattern, with shortcuts applied."""
        addresses = list(self.match_address)
        if self.shortcut_from:
            addresses.append('From:' + self.shortcut_from)
            pass
        headers = list(self.match_header)
        if self.shortcut_subject:
            headers.append('Subject:' + self.shortcut_subject)
            pass
        part = self.select_part
        if self.shortcut_html:
            part = 'text/html'
            pass
        if self.shortcut_plain:
            part = 'text/plain'
            pass
        return addresses, headers, part, self.select_attachment

    def run(self, inp, out):
        config = self.configure()
        delim = config.delimiter.encode('utf-8')

        message = read_message(inp)
        addresses, headers, part_pat, att_pat = self.criteria()

        if not match_envelope(message.header, addresses, headers):
            raise HeaderMatchFailed()

        whole = whole_message_part(message)
        root = build_part_tree(message.header, message.body,
                               max_depth=config.max_depth)

        selected = select_all(root, part_pat, att_pat)
        if (part_pat or att_pat) and len(selected) == 0:
            raise SelectFailed()
        logger.debug('selected %r', selected)

        print_content = self.print_content
        print_raw = self.print_raw
        if self.print_header is None and not self.save_file and not print_raw:
            print_content = True
            pass

        ## With nothing selected, the content is the input itself.
        if len(selected) == 0:
            if print_content:
                print_content = False
                print_raw = True
                pass
            selected = [ whole ]
            pass

        if self.print_header is not None:
            for part in selected:
                value = decode_header_value(part.header.get(self.print_header))
                out.write(value.encode('utf-8', 'surrogateescape'))
                out.write(delim)
                continue
            pass

        if print_content:
            for part in selected:
                shutil.copyfileobj(part, out)
                out.write(delim)
                continue
            pass

        if print_raw:
            out.write(message.raw)
            pass

        if self.save_file:
            for path in self.save_parts(selected):
                out.write(os.fsencode(path))
                out.write(delim)
                continue
            pass
        pass

    def save_parts(self, parts):
        """Write each part's content to a file in a new temporary
        directory, and yield the file paths."""
        dirname = tempfile.mkdtemp(prefix='letterknife-',
                                   dir=self.config.save_dir)
        for part in parts:
            filename = part.attachment_filename
            if filename:
                path = _unique_path(dirname, _sanitize_filename(filename))
                fp = open(path, 'wb')
            else:
                ext = '.eml' if part.is_whole_message \
                    else extension_for_type(part.media_type)
                fd, path = tempfile.mkstemp(suffix=ext, dir=dirname)
                fp = os.fdopen(fd, 'wb')
                pass
            with fp:
                shutil.copyfileobj(part, fp)
                pass
            logger.debug('saved %s as %s', part.media_type, path)
            yield path
            continue
        pass

    pass

def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
        pass
    lk = LetterKnife()
    try:
        args = lk.parse_args(argv)
    except getopt.GetoptError as e:
        sys.stderr.write('letterknife: %s\n%s' % (e, usage))
        sys.exit(2)
        pass
    if lk.show_help:
        sys.stdout.write(usage)
        sys.exit(0)
        pass
    if len(args) > 1:
        sys.stderr.write('letterknife: too many arguments\n%s' % usage)
        sys.exit(2)
        pass

    try:
        config = lk.configure()
        logging.basicConfig(
            level=logging.DEBUG if config.debug else logging.WARNING,
            format='%(name)s: %(levelname)s: %(message)s')
        if len(args) == 1:
            with open(args[0], 'rb') as fp:
                lk.run(fp, sys.stdout.buffer)
                pass
        else:
            lk.run(sys.stdin.buffer, sys.stdout.buffer)
            pass
        sys.stdout.buffer.flush()
    except MatchFailed as e:
        sys.stderr.write('letterknife: %s\n' % e)
        sys.exit(1)
    except (LetterknifeError, OSError) as e:
        sys.stderr.write('letterknife: %s\n' % e)
        sys.exit(2)
        pass
    pass

if __name__ == '__main__':
    main()
    pass
