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

import mishell.util

# Number of distinct directories offered by cdh.
CDH_SIZE = 10


class DirectoryState:
    """The shell's current directory, and the history of directories visited by cd.

    The history is kept in a file, one directory per line, newest first. Directories are recorded
    as typed, so the file can contain relative paths, ~, . and ..
    """

    def __init__(self, env):
        self.env = env

    def __repr__(self):
        return f'DirectoryState({self.current_dir()})'

    def current_dir(self):
        try:
            return pathlib.Path.cwd()
        except FileNotFoundError:
            # The current directory has been removed.
            return pathlib.Path.home()

    # Raises OSError if the directory can't be entered.
    def change_current_dir(self, directory, record=True):
        target = mishell.util.normalize_path(directory)
        os.chdir(target)
        mishell.util.debug(f'cd {directory} -> {os.getcwd()}')
        if record:
            self.record(directory)

    def record(self, directory):
        path = self.history_path()
        history = self.history()
        history.insert(0, str(directory))
        with open(path, 'w') as file:
            for entry in history:
                file.write(f'{entry}\n')

    # Directories from the history file, newest first.
    def history(self):
        path = self.history_path()
        if not path.exists():
            return []
        with open(path) as file:
            return [line.rstrip('\n') for line in file if len(line.strip()) > 0]

    # The directories cdh offers: distinct, skipping relative entries starting with . (e.g. . and ..),
    # at most CDH_SIZE.
    def recent(self):
        recent = []
        for entry in self.history():
            if entry.startswith('.') or entry in recent:
                continue
            recent.append(entry)
            if len(recent) == CDH_SIZE:
                break
        return recent

    def history_path(self):
        return self.env.locations.data_cdh()
