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

import psutil

import mishell.argsparser
import mishell.core

HELP = '''
psvis [-o|--output FILE] PID

    -o, --output            Write the tree to FILE instead of stdout.

    PID                     The process at the root of the tree.

Print the tree of processes rooted at PID. Each process is printed on its own
line, as PID NAME, indented according to its depth in the tree.
'''

INDENT = '    '


class PsvisArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('psvis', env)
        self.add_flag_one_value('output', '-o', '--output', convert=self.check_str)
        self.add_anon('pid', convert=self.str_to_int)
        self.validate()


class Psvis(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.output = None
        self.pid = None
        self.root = None

    def __repr__(self):
        return f'psvis({self.pid})' if self.output is None else f'psvis({self.pid} -o {self.output})'

    def setup(self, env):
        try:
            self.root = psutil.Process(self.pid)
        except psutil.NoSuchProcess:
            self.fail(f'{self.pid}: No such process')
        except psutil.AccessDenied:
            self.fail(f'{self.pid}: Permission denied')
        except ValueError:
            # Negative pids
            self.fail(f'{self.pid}: No such process')

    def run(self, env):
        lines = Psvis.tree(self.root)
        if self.output is None:
            for line in lines:
                print(line)
        else:
            try:
                with open(self.output, 'w') as file:
                    for line in lines:
                        file.write(f'{line}\n')
            except OSError as e:
                self.fail(f'{self.output}: {e.strerror}')

    # Lines describing the tree rooted at process, depth first, children in pid order.
    # Processes that exit while the tree is being examined are omitted.
    @staticmethod
    def tree(process, depth=0):
        try:
            lines = [f'{INDENT * depth}{process.pid} {process.name()}']
            children = sorted(process.children(), key=lambda p: p.pid)
        except (psutil.NoSuchProcess, psutil.ZombieProcess):
            return []
        except psutil.AccessDenied:
            return [f'{INDENT * depth}{process.pid} ?']
        for child in children:
            lines.extend(Psvis.tree(child, depth + 1))
        return lines
