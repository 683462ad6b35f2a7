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

import random
import re

import mishell.argsparser
import mishell.core
import mishell.orchestrator

HELP = '''
roll [-s|--seed SEED] DICE

    -s, --seed              Seed for the random number generator, for reproducible rolls.

    DICE                    The dice to roll: dN rolls one N-sided die, MdN rolls M of them.

Roll dice and print the result. For one die, the output is "Rolled X". For more
than one, the output is "Rolled SUM (X1 + X2 + ...)".
'''

DICE = re.compile(r'^([0-9]*)d([0-9]+)$')


class RollArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('roll', env)
        self.add_flag_one_value('seed', '-s', '--seed', convert=self.str_to_int)
        self.add_anon('dice', convert=self.check_str, default='')
        self.validate()


class Roll(mishell.core.Op):

    def __init__(self):
        super().__init__()
        self.seed = None
        self.dice = None

    def __repr__(self):
        return f'roll({self.dice})'

    def run(self, env):
        parsed = Roll.parse_dice(self.dice)
        if parsed is None:
            print('Invalid input')
            return mishell.orchestrator.FAILURE
        count, faces = parsed
        generator = random.Random(self.seed)
        rolls = [generator.randint(1, faces) for _ in range(count)]
        if count == 1:
            print(f'Rolled {rolls[0]}')
        else:
            print(f'Rolled {sum(rolls)} ({" + ".join(str(r) for r in rolls)})')

    # Returns (number of dice, faces per die), or None if dice is not of the form [M]dN with M, N positive.
    @staticmethod
    def parse_dice(dice):
        match = DICE.match(dice)
        if match is None:
            return None
        count = int(match.group(1)) if match.group(1) else 1
        faces = int(match.group(2))
        return (count, faces) if count > 0 and faces > 0 else None
