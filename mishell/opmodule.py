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

import importlib
import inspect

import mishell.argsparser
import mishell.core
import mishell.op


class OpModule:

    def __init__(self, op_name):
        self._op_name = op_name
        self._op_constructor = None
        self._args_parser = None
        self._args_parser_constructor = None
        self._help = None
        op_module = importlib.import_module(f'mishell.op.{op_name}')
        # Locate the items in the module needed to run the builtin.
        for k, v in op_module.__dict__.items():
            if k == 'HELP':
                self._help = v
            elif inspect.isclass(v):
                parents = inspect.getmro(v)
                if mishell.core.Op in parents:
                    # The op class, e.g. Cd. Other Op subclasses may be imported into the module.
                    if op_name == v.op_name():
                        self._op_constructor = v
                elif mishell.argsparser.ArgsParser in parents and v is not mishell.argsparser.ArgsParser:
                    # E.g. CdArgsParser
                    self._args_parser_constructor = v
        assert self._op_constructor is not None, op_name
        assert self._args_parser_constructor is not None, op_name

    def __repr__(self):
        return f'OpModule({self._op_name})'

    def op_name(self):
        return self._op_name

    def create_op(self):
        return self._op_constructor()

    def args_parser(self, env):
        if self._args_parser is None:
            self._args_parser = self._args_parser_constructor(env)
        return self._args_parser

    def help(self):
        return self._help


def import_op_modules():
    op_modules = {}
    for op_name in mishell.op.public:
        op_modules[op_name] = OpModule(op_name)
    return op_modules


# Create an op for the given builtin, with args (strings) assigned to its attributes.
def create_op(env, op_name, args):
    op_module = env.op_modules[op_name]
    op = op_module.create_op()
    op_module.args_parser(env).parse(args, op)
    return op
