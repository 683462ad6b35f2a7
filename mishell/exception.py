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

"""Exceptions used to abort a command, or the shell.

Every failure of a single command invocation is a KillCommandException. The read-evaluate loop
catches it, prints it, and goes on to the next line. Only ExitException (from the exit builtin)
and KillShellException terminate the shell.
"""

SHELL_NAME = 'mishell'


# Exception for terminating command. By extending BaseException, this exception
# cannot be caught by "except Exception".
class KillCommandException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


class StartupScriptException(KillCommandException):

    def __init__(self, path, startup_exception):
        super().__init__(f'Error during execution of startup script {path}: {startup_exception}')


# Errors below are reported as a single line: -mishell: COMMAND: MESSAGE

class CommandError(KillCommandException):

    def __init__(self, command, message):
        super().__init__(message)
        self.command = command
        self.message = message

    def __str__(self):
        return (f'-{SHELL_NAME}: {self.command}: {self.message}'
                if self.command else
                f'-{SHELL_NAME}: {self.message}')


# No executable found on PATH.
class ResolutionError(CommandError):

    def __init__(self, command):
        super().__init__(command, 'command not found')


# Pipe or process creation failed.
class SpawnError(CommandError):
    pass


# A redirect file could not be opened. Raised before any process is spawned.
class RedirectError(CommandError):

    def __init__(self, command, path, os_error):
        super().__init__(command, f'{path}: {os_error.strerror}')
        self.path = path


# The program was found but could not be started.
class ChildExecError(CommandError):
    pass


class KillShellException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)


class ExitException(BaseException):
    pass
