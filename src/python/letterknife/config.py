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

import os
import yaml

from .errors import ConfigError

def _opt_copy(dst_key, dst, src, src_key=None, xform=None):
    if dst_key in dst:
        return dst[dst_key]
    if src_key is None:
        src_key = dst_key
        pass
    if src_key not in src:
        return None
    val = src[src_key]
    if xform is not None:
        val = xform(src_key, val)
        pass
    dst[dst_key] = val
    return val

def _string(key, val):
    if not isinstance(val, str):
        raise ConfigError('%s: expected a string, got %r' % (key, val))
    return val

def _flag(key, val):
    if not isinstance(val, bool):
        raise ConfigError('%s: expected true or false, got %r' % (key, val))
    return val

def _positive(key, val):
    if isinstance(val, bool) or not isinstance(val, int) or val < 1:
        raise ConfigError('%s: expected a positive integer, got %r' %
                          (key, val))
    return val

def _directory(key, val):
    return os.path.expanduser(_string(key, val))

class LetterknifeConfiguration:
    CONFIG_ENV = 'LETTERKNIFE_CONFIG'
    DEFAULT_CONFIG = '~/.config/letterknife/config.yml'

    def __init__(self, _cfg_filename=None):
        ## A file named explicitly must exist; the default one need not.
        required = True
        if _cfg_filename is not None:
            self._cfg_filename = _cfg_filename
        else:
            self._cfg_filename = os.environ.get(self.CONFIG_ENV, None)
            if self._cfg_filename is None:
                self._cfg_filename = self.DEFAULT_CONFIG
                required = False
                pass
            pass

        ## Load the configuration.
        path = os.path.expanduser(self._cfg_filename)
        config = None
        if required or os.path.exists(path):
            try:
                with open(path, "r") as stream:
                    config = yaml.safe_load(stream)
                    pass
            except OSError as e:
                raise ConfigError('%s: %s' % (path, e.strerror)) from e
            except yaml.YAMLError as e:
                raise ConfigError('%s: %s' % (path, e)) from e
            pass
        if config is None:
            config = { }
            pass
        if not isinstance(config, dict):
            raise ConfigError('%s: expected a mapping' % path)

        self.settings = { }
        _opt_copy('delimiter', self.settings, config, xform=_string)
        _opt_copy('debug', self.settings, config, xform=_flag)
        _opt_copy('save_dir', self.settings, config, src_key='save-dir',
                  xform=_directory)
        _opt_copy('max_depth', self.settings, config, src_key='max-depth',
                  xform=_positive)

        self.delimiter = self.settings.get('delimiter', '\n')
        self.debug = self.settings.get('debug', False)
        self.save_dir = self.settings.get('save_dir', None)
        self.max_depth = self.settings.get('max_depth', None)
        pass

    @property
    def filename(self):
        return self._cfg_filename

    pass
