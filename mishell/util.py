# This file is part of Mishell.
#
# Mishell is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# Mishell is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with Mishell.  If not, see <https://www.gnu.org/licenses/>.

import os
import pathlib
import stat
import sys

DEBUG = bool(os.getenv('MISHELL_DEBUG'))


def debug(message):
    if DEBUG:
        print(f'{os.getpid()}: {message}', file=sys.__stderr__, flush=True)


def is_executable(path):
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and os.access(path, os.X_OK)


# Locate an executable the way execvp would: a name containing a slash is taken as is,
# otherwise the PATH directories are searched in order. Returns None if nothing qualifies.
def find_executable(name, path=None):
    if not name:
        return None
    if '/' in name:
        return name if is_executable(name) else None
    if path is None:
        path = os.environ.get('PATH', os.defpath)
    for dir in path.split(os.pathsep):
        # An empty PATH entry means the current directory.
        candidate = os.path.join(dir or '.', name)
        if is_executable(candidate):
            return candidate
    return None


def executables(path=None):
    if path is None:
        path = os.environ.get('PATH', os.defpath)
    found = set()
    for dir in path.split(os.pathsep):
        try:
            for entry in os.scandir(dir or '.'):
                if entry.name not in found and is_executable(entry.path):
                    found.add(entry.name)
        except OSError:
            pass
    return found


def normalize_path(x):
    x = pathlib.Path(x)
    if x.as_posix().startswith('~'):
        x = x.expanduser()
    return x


# Exit status of a reaped child, using the shell convention for a child killed by a signal.
def exit_status(returncode):
    return 128 - returncode if returncode < 0 else returncode


def close_quietly(fd):
    if fd is not None:
        try:
            os.close(fd)
        except OSError:
            pass


# Utility to print to stderr, flushing stdout first, to minimize weird ordering due to buffering.
def print_to_stderr(env, message):
    sys.stdout.flush()
    print(message, file=sys.stderr, flush=True)


class InputSource(object):

    def __init__(self, argv=None):
        if argv is None:
            argv = sys.argv
        self._piped = False
        self._interactive = False
        self._script = False
        if len(argv) > 1:
            self._script = True
        elif sys.stdin.isatty():
            self._interactive = True
        else:
            self._piped = True

    def __repr__(self):
        source = ('interactive' if self._interactive else
                  'script' if self._script else
                  'piped' if self._piped else
                  'UNKNOWN')
        return f'InputSource({source})'

    def interactive(self):
        return self._interactive

    def piped(self):
        return self._piped

    def script(self):
        return self._script
