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

import mishell.argsparser
import mishell.core
import mishell.orchestrator
import mishell.util

HELP = '''
cd [DIRECTORY]

    DIRECTORY               The new current directory.

Change the current directory to the given directory. ~ is expanded to the
home directory. If DIRECTORY is omitted, then change the current directory to
the home directory.

Each directory entered is recorded, as typed, in the directory history
used by cdh.
'''


class CdArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('cd', env)
        self.add_anon('directory', convert=self.check_str, default='~')
        self.validate()


class Cd(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.directory = None

    def __repr__(self):
        return f'cd({self.directory})'

    def run(self, env):
        try:
            env.dir_state().change_current_dir(self.directory)
        except OSError as e:
            mishell.util.print_to_stderr(env, f'-mishell: cd: {self.directory}: {e.strerror}')
            return mishell.orchestrator.FAILURE
