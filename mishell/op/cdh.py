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

import string
import sys

import mishell.argsparser
import mishell.core
import mishell.orchestrator
import mishell.util

HELP = '''
cdh [-l|--list]

    -l, --list              List the recent directories, without prompting for a selection.

List up to 10 recently visited directories, most recent first, each labeled
by a number and a letter. Then read a selection, by number or letter, and
change the current directory to the selected directory.

Directories are recorded by cd. Entries starting with . (e.g. ..) are not
listed.
'''

PROMPT = 'Select directory by letter or number: '


class CdhArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('cdh', env)
        self.add_flag_no_value('list_only', '-l', '--list')
        self.validate()


class Cdh(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.list_only = False

    def __repr__(self):
        return 'cdh(-l)' if self.list_only else 'cdh()'

    def run(self, env):
        directories = env.dir_state().recent()
        for i, directory in enumerate(directories):
            print(f'{i + 1}) {string.ascii_lowercase[i]}) {directory}')
        if self.list_only or len(directories) == 0:
            return
        print(PROMPT, end='', flush=True)
        selection = sys.stdin.readline()
        if len(selection) == 0:
            # End of input
            print()
            return
        index = Cdh.selected_index(selection.strip(), len(directories))
        if index is None:
            print('Invalid input')
            return mishell.orchestrator.FAILURE
        directory = directories[index]
        try:
            env.dir_state().change_current_dir(directory, record=False)
        except OSError as e:
            mishell.util.print_to_stderr(env, f'-mishell: cdh: {directory}: {e.strerror}')
            return mishell.orchestrator.FAILURE

    # A selection is a number starting at 1, or a letter starting at a. Returns the index of the
    # selected directory, or None.
    @staticmethod
    def selected_index(selection, n):
        if selection.isdigit():
            index = int(selection) - 1
        elif len(selection) == 1 and selection in string.ascii_lowercase:
            index = string.ascii_lowercase.index(selection)
        else:
            return None
        return index if 0 <= index < n else None
