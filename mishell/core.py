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
import mishell.opmodule
import mishell.orchestrator
import mishell.tabcompleter
import mishell.util


class Op(object):
    """A builtin. Runs in the shell's own process, with the session's Environment.

    Arguments are assigned to attributes by the op's ArgsParser before setup() is called.
    run() returns the builtin's exit status. None means success.
    """

    def __repr__(self):
        return self.op_name()

    def setup(self, env):
        pass

    def run(self, env):
        raise NotImplementedError()

    @classmethod
    def op_name(cls):
        return cls.__name__.lower()

    # For use by subclasses

    def fail(self, message):
        raise mishell.exception.CommandError(self.op_name(), message)


class Command:

    def __init__(self, source, pipeline):
        self.source = source
        self.pipeline = pipeline

    def __repr__(self):
        return f'Command({self.pipeline})'

    # Returns the exit status.
    def execute(self, env):
        pipeline = self.pipeline
        if pipeline.autocomplete:
            return self.autocomplete(env)
        if pipeline.is_empty():
            return mishell.orchestrator.SUCCESS
        name = pipeline.first().name
        if env.is_builtin(name):
            return self.run_builtin(env, name)
        return mishell.orchestrator.run_pipeline(env, pipeline)

    # Builtins run synchronously. Pipes, redirects and & don't apply to them.
    def run_builtin(self, env, name):
        pipeline = self.pipeline
        stage = pipeline.first()
        if len(pipeline) > 1 or stage.has_redirects() or pipeline.background:
            mishell.util.debug(f'{name} is a builtin, ignoring pipes, redirects and &: {pipeline}')
        op = mishell.opmodule.create_op(env, name, stage.positional())
        op.setup(env)
        status = op.run(env)
        return mishell.orchestrator.SUCCESS if status is None else status

    # Nothing is executed. Print the candidates for completing the last word of the line. If there is
    # just one, the completed line will be offered at the next prompt.
    def autocomplete(self, env):
        completer = mishell.tabcompleter.TabCompleter(env)
        candidates = completer.candidates(self.source)
        for candidate in candidates:
            print(candidate)
        if len(candidates) == 1 and hasattr(env, 'next_command'):
            env.next_command = completer.completed_line(self.source, candidates[0])
        return mishell.orchestrator.SUCCESS
