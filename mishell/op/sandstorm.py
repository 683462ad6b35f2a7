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

import sys

import mishell.argsparser
import mishell.core
import mishell.orchestrator
import mishell.pipeline

HELP = '''
sandstorm

Open a well-known video in the default browser. The opener (xdg-open, or open
on macOS) runs in the background.
'''

URL = 'https://www.youtube.com/watch?v=y6120QOlsfU'


def opener():
    return 'open' if sys.platform == 'darwin' else 'xdg-open'


class SandstormArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('sandstorm', env)
        self.validate()


class Sandstorm(mishell.core.Op):

    def run(self, env):
        stage = mishell.pipeline.Stage(opener())
        stage.set_args([URL])
        stage.background = True
        pipeline = mishell.pipeline.Pipeline(stage.unparse(), [stage])
        return mishell.orchestrator.run_pipeline(env, pipeline)
