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
import mishell.exception

HELP = '''
exit

Mishell exits.
'''


class ExitArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('exit', env)
        self.validate()


class Exit(mishell.core.Op):

    def run(self, env):
        raise mishell.exception.ExitException()
