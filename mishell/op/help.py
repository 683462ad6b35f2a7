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
import mishell.op

HELP = '''
help [BUILTIN]

    BUILTIN                 The name of a builtin command.

Print the usage of the given builtin. If BUILTIN is omitted, list the
builtins.
'''

INTRO = '''
Anything else on a command line runs a program found on the PATH. Programs
can be connected by pipes (|), input can be read from a file (<FILE), and output
can be written (>FILE) or appended (>>FILE) to a file. A trailing & runs the
pipeline in the background. A trailing ? (or Tab) lists completions of the
last word instead of running the line.
'''


class HelpArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('help', env)
        self.add_anon('topic', convert=self.check_str, default=None)
        self.validate()


class Help(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.topic = None

    def __repr__(self):
        return f'help({self.topic})'

    def setup(self, env):
        if self.topic is not None:
            self.topic = self.topic.lower()
            if not env.is_builtin(self.topic):
                self.fail(f'Help not available for {self.topic}')

    def run(self, env):
        if self.topic is None:
            print('Builtins:')
            for name in mishell.op.public:
                print(f'    {name}')
            print(INTRO.rstrip('\n'))
        else:
            print(env.builtin(self.topic).help().strip('\n'))
