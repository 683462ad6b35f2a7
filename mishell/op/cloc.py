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

import mishell.argsparser
import mishell.core
import mishell.util

HELP = '''
cloc [DIRECTORY]

    DIRECTORY               The directory to be examined. Defaults to the current directory.

Count the files, and the blank, comment, and code lines, of source files under
DIRECTORY (recursively). Files are recognized by extension: .c, .h, .cpp, .hpp,
.py, and .txt. Files without an extension are counted as text.

A line is blank if it contains only spaces and tabs. A comment line starts
with # in Python files, and with // or /* otherwise. Other lines are code.
'''

# Extension -> language, in the order reported.
LANGUAGES = (('.c', 'C'),
             ('.h', 'C Header File'),
             ('.cpp', 'C++'),
             ('.hpp', 'C++ Header File'),
             ('.py', 'Python'),
             ('.txt', 'Text'))

ROW_FORMAT = '{:<20} {:<10} {:<10} {:<10} {:<10}'


class Count(object):

    def __init__(self, name):
        self.name = name
        self.files = 0
        self.blank = 0
        self.comment = 0
        self.code = 0

    def __repr__(self):
        return f'{self.name}: files={self.files} blank={self.blank} comment={self.comment} code={self.code}'

    def add(self, other):
        self.files += other.files
        self.blank += other.blank
        self.comment += other.comment
        self.code += other.code

    def row(self):
        return ROW_FORMAT.format(self.name, self.files, self.blank, self.comment, self.code)


class ClocArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('cloc', env)
        self.add_anon('directory', convert=self.check_str, default='.')
        self.validate()


class Cloc(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.directory = None

    def __repr__(self):
        return f'cloc({self.directory})'

    def setup(self, env):
        self.directory = mishell.util.normalize_path(self.directory)
        if not self.directory.is_dir():
            self.fail(f'{self.directory}: Not a directory')

    def run(self, env):
        counts = Cloc.count_directory(self.directory)
        total = Count('Total')
        for count in counts.values():
            total.add(count)
        print(f'Total number of files in the given directory: {total.files}')
        print()
        print(f'Total blank lines {total.blank}')
        print(f'Total comment lines {total.comment}')
        print(f'Total code lines {total.code}')
        print()
        print(ROW_FORMAT.format('Language', 'Files', 'Blank', 'Comment', 'Code'))
        for extension, _ in LANGUAGES:
            print(counts[extension].row())

    # Returns a dict: extension -> Count
    @staticmethod
    def count_directory(directory):
        counts = {extension: Count(language) for extension, language in LANGUAGES}
        for dirpath, _, filenames in os.walk(directory):
            for filename in filenames:
                path = os.path.join(dirpath, filename)
                if not os.path.isfile(path) or os.path.islink(path):
                    continue
                extension = Cloc.extension(filename)
                if extension in counts:
                    try:
                        counts[extension].add(Cloc.count_file(path, extension))
                    except OSError as e:
                        mishell.util.debug(f'cloc: skipping {path}: {e}')
        return counts

    # The extension of a file without one is .txt
    @staticmethod
    def extension(filename):
        dot = filename.rfind('.')
        return '.txt' if dot < 0 else filename[dot:]

    @staticmethod
    def count_file(path, extension):
        count = Count(path)
        count.files = 1
        with open(path, errors='replace') as file:
            for line in file:
                line = line.lstrip(' \t')
                if len(line) == 0 or line[0] in '\r\n':
                    count.blank += 1
                elif Cloc.is_comment(line, extension):
                    count.comment += 1
                else:
                    count.code += 1
        return count

    @staticmethod
    def is_comment(line, extension):
        return (line.startswith('#')
                if extension == '.py' else
                line.startswith('//') or line.startswith('/*'))
