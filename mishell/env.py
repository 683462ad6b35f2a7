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

import getpass
import os
import socket

import mishell.directorystate
import mishell.locations
import mishell.opmodule
import mishell.reaper


class Environment(object):
    """State of one shell session, shared by the read-evaluate loop, the builtins, and the orchestrator."""

    def __init__(self):
        self.locations = mishell.locations.Locations()
        self.directory_state = mishell.directorystate.DirectoryState(self)
        self.op_modules = mishell.opmodule.import_op_modules()
        self.reaper = mishell.reaper.Reaper()
        # Exit status of the most recently executed command.
        self.last_status = 0

    def __repr__(self):
        return f'Environment({self.directory_state.current_dir()}, status={self.last_status})'

    def dir_state(self):
        return self.directory_state

    def is_builtin(self, name):
        return name in self.op_modules

    def builtin(self, name):
        return self.op_modules.get(name, None)

    def set_status(self, status):
        self.last_status = status

    def shutdown(self):
        self.reaper.shutdown()

    @classmethod
    def create(cls):
        return cls()


class EnvironmentInteractive(Environment):
    DEFAULT_PROMPT = 'mishell$ '

    def __init__(self):
        super().__init__()
        self.reader = None
        # Text to be edited at the next prompt, e.g. a completed line.
        self.next_command = None

    def prompt(self):
        user = os.environ.get('USER', None) or getpass.getuser()
        host = socket.gethostname()
        cwd = self.directory_state.current_dir().as_posix()
        suffix = os.environ.get('MISHELL_PROMPT', EnvironmentInteractive.DEFAULT_PROMPT)
        status = f'[{self.last_status}] ' if self.last_status != 0 else ''
        return f'{status}{user}@{host}:{cwd} {suffix}'

    def take_next_command(self):
        command = self.next_command
        self.next_command = None
        return command
