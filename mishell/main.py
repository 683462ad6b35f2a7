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

import atexit
import sys

import mishell.core
import mishell.env
import mishell.exception
import mishell.orchestrator
import mishell.parser
import mishell.reader
import mishell.util


class Main(object):

    def __init__(self, env):
        self.env = env
        atexit.register(self.shutdown)

    def shutdown(self):
        self.env.shutdown()
        atexit.unregister(self.shutdown)


class MainScript(Main):

    def __init__(self, env):
        super().__init__(env)

    # Returns the exit status of the command. A command that can't be run at all has status FAILURE.
    def parse_and_run_command(self, text):
        env = self.env
        status = mishell.orchestrator.SUCCESS
        try:
            parser = mishell.parser.Parser(text)
            pipeline = parser.parse()
            for warning in parser.errors:
                mishell.util.print_to_stderr(env, str(warning))
            command = mishell.core.Command(text, pipeline)
            status = command.execute(env)
        except mishell.exception.KillCommandException as e:
            mishell.util.print_to_stderr(env, str(e))
            status = mishell.orchestrator.FAILURE
        env.set_status(status)
        return status

    def run_startup_script(self):
        path = self.env.locations.config_startup()
        if path.exists():
            try:
                script = path.read_text()
            except OSError as e:
                raise mishell.exception.StartupScriptException(path, e)
            for command in commands_in_script(script):
                self.parse_and_run_command(command)

    # Report background pipelines that have finished since the last check.
    def reap_background(self):
        for background in self.env.reaper.reap():
            print(f'[done] {background.status()} {background.pipeline}')

    def run_script(self, script):
        for command in commands_in_script(script):
            self.reap_background()
            self.parse_and_run_command(command)


class MainInteractive(MainScript):

    def __init__(self, env):
        super().__init__(env)
        self.reader = mishell.reader.Reader(env)
        env.reader = self.reader

    def run(self):
        env = self.env
        try:
            while True:
                try:
                    self.reap_background()
                    line = self.reader.input(default=env.take_next_command())
                    self.parse_and_run_command(line)
                except KeyboardInterrupt:  # ctrl-C
                    print()
        except EOFError:  # ctrl-D
            print()


# Lines ending in \ are continued on the next line. Blank lines and comments (#) are skipped.
def commands_in_script(script):
    command = ''
    for line in script.split('\n'):
        if len(command) == 0 and (len(line.strip()) == 0 or line.lstrip().startswith('#')):
            continue
        if line.endswith('\\'):
            command += line[:-1]
        else:
            command += line
            yield command
            command = ''
    if len(command) > 0:
        yield command


def fail(message):
    print(message, file=sys.stderr)
    sys.exit(1)


def read_script(script_path):
    try:
        with open(script_path, 'r') as script_file:
            return script_file.read()
    except OSError as e:
        fail(f'-{mishell.exception.SHELL_NAME}: {script_path}: {e.strerror}')


def main_interactive_run():
    env = mishell.env.EnvironmentInteractive.create()
    main = MainInteractive(env)
    try:
        main.run_startup_script()
        main.run()
    finally:
        main.shutdown()


def main_script_run(script):
    env = mishell.env.Environment.create()
    main = MainScript(env)
    try:
        main.run_startup_script()
        main.run_script(script)
    finally:
        main.shutdown()


def main():
    input_source = mishell.util.InputSource()
    try:
        if input_source.interactive():
            main_interactive_run()
        elif input_source.script():
            main_script_run(read_script(sys.argv[1]))
        elif input_source.piped():
            main_script_run(sys.stdin.read())
        else:
            raise mishell.exception.KillShellException('Unable to determine input source!')
    except mishell.exception.ExitException:
        pass
    except (mishell.exception.KillShellException,
            mishell.exception.StartupScriptException) as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
