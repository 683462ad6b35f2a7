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

import mishell.exception

# A builtin has arguments, taken from the positional arguments of its stage. An argument is one of:
#    - An optional flag with no value
#    - An optional flag with one value
#    - An anonymous value: not preceded by a flag
# If a flag taking a value is followed by another arg, then that arg is the flag's value.
# Flags must precede anonymous args.
#
# Additional constraints are checked by the op.

VALUE_NONE = 1
VALUE_ONE = 2
NO_DEFAULT = object()


# ----------------------------------------------------------------------------------------------------------------------

# Args

class ArgsError(mishell.exception.CommandError):

    def __init__(self, op_name, message):
        super().__init__(op_name, message)


class Arg:

    def __init__(self, op_name, name, convert, target):
        assert name is not None
        self.op_name = op_name
        self.name = name
        self.target = target if target else name
        self.convert = convert if convert else Arg.identity

    def __repr__(self):
        return self.name

    @staticmethod
    def identity(_, x):
        return x


class Flag(Arg):

    def __init__(self, op_name, name, convert, short, long, value, target=None):
        super().__init__(op_name, name, convert, target)
        assert short is not None or long is not None
        assert short is None or len(short) == 2 and short[0] == '-' and short[1] != '-'
        assert long is None or len(long) >= 3 and long[:2] == '--' and long[2] != '-'
        assert value in (VALUE_NONE, VALUE_ONE)
        self.short = short
        self.long = long
        self.value = value

    def __repr__(self):
        return (f'{self.short}|{self.long}' if self.short and self.long else
                self.short if self.short else
                self.long)

    @staticmethod
    def plausible(x):
        return len(x) >= 2 and x[0] == '-' and not x[1].isdigit()


class Anon(Arg):

    def __init__(self, op_name, name, convert, default, target=None):
        super().__init__(op_name, name, convert, target)
        self.default = default


# ----------------------------------------------------------------------------------------------------------------------

# Interface

class ArgsParser:

    def __init__(self, op_name, env):
        self.op_name = op_name
        self.env = env
        self.flag_args = []
        self.anon_args = []
        self.validated = False

    def add_flag_no_value(self, name, short, long, target=None):
        self.flag_args.append(Flag(self.op_name, name, None, short, long, VALUE_NONE, target))

    def add_flag_one_value(self, name, short, long, convert=None, target=None):
        self.flag_args.append(Flag(self.op_name, name, convert, short, long, VALUE_ONE, target))

    def add_anon(self, name, convert=None, default=NO_DEFAULT, target=None):
        self.anon_args.append(Anon(self.op_name, name, convert, default, target))

    def validate(self):
        self.check_flag_symbols_unique()
        self.check_anon_order()
        self.validated = True

    # ------------------------------------------------------------------------------------------------------------------

    # Conversion and type checking

    def str_to_int(self, arg, x):
        try:
            return int(x)
        except ValueError:
            raise ArgsError(arg.op_name, f'{arg.name} cannot be converted to int: {x}')

    def check_str(self, arg, x):
        if not isinstance(x, str):
            raise ArgsError(arg.op_name, f'{arg.name} must be a string: {x}')
        return x

    # ------------------------------------------------------------------------------------------------------------------

    # Parsing

    # Parse args (strings), and assign the resulting values to attributes of op.
    def parse(self, args, op):
        assert self.validated
        flags, anon = self.extract_flags_and_anon(args)
        self.complete_anon_processing(anon)
        op_dict = op.__dict__
        for k, v in flags.items():
            op_dict[self.find_by_name(k).target] = v
        for k, v in anon.items():
            op_dict[self.find_by_name(k).target] = v

    # ------------------------------------------------------------------------------------------------------------------

    # Utilities

    def find_flag(self, x):
        for flag in self.flag_args:
            if flag.short == x or flag.long == x:
                return flag
        return None

    def find_by_name(self, name):
        for flag in self.flag_args:
            if flag.name == name:
                return flag
        for anon in self.anon_args:
            if anon.name == name:
                return anon
        return None

    # ------------------------------------------------------------------------------------------------------------------

    # Validation steps

    def check_flag_symbols_unique(self):
        flags = set()
        for flag in self.flag_args:
            for symbol in (flag.short, flag.long):
                if symbol:
                    assert symbol not in flags, symbol
                    flags.add(symbol)

    # Anons without default values are mandatory, and must precede those that have defaults.
    def check_anon_order(self):
        no_default = True
        for anon in self.anon_args:
            if no_default and anon.default is not NO_DEFAULT:
                no_default = False
            assert no_default == (anon.default is NO_DEFAULT)

    # ------------------------------------------------------------------------------------------------------------------

    # Parsing steps

    def extract_flags_and_anon(self, args):
        flags = {}  # arg name -> value
        anon = {}  # arg name -> value
        current_flag_arg = None
        flag_ok = len(self.flag_args) > 0
        for arg in args:
            flag_arg = self.find_flag(arg) if current_flag_arg is None else None
            if flag_arg:
                if not flag_ok:
                    raise ArgsError(self.op_name, 'Flags must all appear before the first anonymous arg')
                if flag_arg.name in flags:
                    raise ArgsError(self.op_name, f'{arg} specified more than once.')
                if flag_arg.value == VALUE_NONE:
                    flags[flag_arg.name] = True
                else:
                    current_flag_arg = flag_arg
            elif current_flag_arg is not None:
                flags[current_flag_arg.name] = current_flag_arg.convert(current_flag_arg, arg)
                current_flag_arg = None
            elif Flag.plausible(arg) and flag_ok:
                raise ArgsError(self.op_name, f'Unknown flag {arg}')
            else:
                if len(anon) < len(self.anon_args):
                    anon_arg = self.anon_args[len(anon)]
                    anon[anon_arg.name] = anon_arg.convert(anon_arg, arg)
                else:
                    raise ArgsError(self.op_name, 'Too many anonymous args.')
                flag_ok = False
        if current_flag_arg is not None:
            raise ArgsError(self.op_name, f'{current_flag_arg} requires a value.')
        return flags, anon

    # - Check that required anons have been specified.
    # - Fill in defaults for unspecified anon args.
    def complete_anon_processing(self, anon):
        while len(anon) < len(self.anon_args):
            anon_arg = self.anon_args[len(anon)]
            if anon_arg.default is NO_DEFAULT:
                raise ArgsError(self.op_name, f'No value specified for {anon_arg.name}.')
            anon[anon_arg.name] = anon_arg.default
