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

import errno
import os
import subprocess
import sys

import mishell.exception
import mishell.util

# Orchestrator states
BUILT = 'BUILT'
FANNED_OUT = 'FANNED_OUT'
WAITING = 'WAITING'
DETACHED = 'DETACHED'
DONE = 'DONE'

# Exit statuses
SUCCESS = 0
FAILURE = 1
CANNOT_EXECUTE = 126
NOT_FOUND = 127

# Popen raises these when process creation itself fails. Other errors come from exec in the child.
FORK_ERRNOS = (errno.EAGAIN, errno.ENOMEM)

REDIRECT_MODE = 0o644


def debug(message):
    mishell.util.debug(f'orchestrator: {message}')


class Orchestrator(object):
    """Runs a Pipeline as a set of OS processes connected by pipes.

    Stage i reads from pipe i-1 and writes to pipe i. The first stage may read from a file (<),
    and the last stage may write (>) or append (>>) to a file. Otherwise the shell's own
    stdin/stdout are inherited. Every descriptor the orchestrator opens is closed in the parent
    by the time run() returns, whether or not the pipeline could be started.

    A foreground pipeline is waited for, and its status is that of the last stage. The processes of
    a background pipeline are handed to the environment's reaper.
    """

    def __init__(self, env, pipeline):
        self.env = env
        self.pipeline = pipeline
        self.state = BUILT
        n = len(pipeline)
        self.processes = [None] * n
        self.statuses = [None] * n
        # Descriptors currently open in this (the parent) process.
        self.fds = set()
        self.input_fd = None
        self.output_fd = None

    def __repr__(self):
        return f'Orchestrator({self.state}: {self.pipeline})'

    def run(self):
        pipeline = self.pipeline
        if pipeline.is_empty():
            self.state = DONE
            return SUCCESS
        # Output buffered by the shell should precede output of the children.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            self.open_redirects()
            self.fan_out()
        except mishell.exception.SpawnError:
            # Children started so far only exit once the parent's pipe ends are closed.
            self.close_all()
            self.wait_all()
            self.state = DONE
            raise
        finally:
            self.close_all()
        if pipeline.background:
            self.state = DETACHED
            self.env.reaper.add(pipeline, [p for p in self.processes if p is not None])
            return SUCCESS
        self.state = WAITING
        try:
            status = self.wait_all()
        except KeyboardInterrupt:
            self.env.reaper.add(pipeline, [p for p in self.processes if p is not None])
            raise
        self.state = DONE
        return status

    # Open redirect files before anything is spawned, so that a failure aborts the whole pipeline.
    def open_redirects(self):
        first = self.pipeline.first()
        last = self.pipeline.last()
        for i, stage in enumerate(self.pipeline):
            if (i > 0 and stage.read_file is not None or
                    i < len(self.pipeline) - 1 and (stage.write_file is not None or stage.append_file is not None)):
                debug(f'ignoring redirect in the middle of a pipeline: {stage}')
        if first.read_file is not None:
            self.input_fd = self.open_redirect(first, first.read_file, os.O_RDONLY)
        # If both are specified, append wins.
        if last.append_file is not None:
            self.output_fd = self.open_redirect(last,
                                                last.append_file,
                                                os.O_WRONLY | os.O_CREAT | os.O_APPEND)
        elif last.write_file is not None:
            self.output_fd = self.open_redirect(last,
                                                last.write_file,
                                                os.O_WRONLY | os.O_CREAT | os.O_TRUNC)

    def open_redirect(self, stage, path, flags):
        try:
            fd = os.open(path, flags, REDIRECT_MODE)
        except OSError as e:
            raise mishell.exception.RedirectError(stage.name, path, e)
        self.fds.add(fd)
        return fd

    def fan_out(self):
        stages = self.pipeline.stages
        n = len(stages)
        stdin = self.input_fd
        for i, stage in enumerate(stages):
            if i < n - 1:
                try:
                    read_end, write_end = os.pipe()
                except OSError as e:
                    raise mishell.exception.SpawnError(stage.name, f'pipe: {e.strerror}')
                self.fds.update((read_end, write_end))
                stdout = write_end
            else:
                read_end = None
                stdout = self.output_fd
            try:
                self.processes[i] = self.spawn(stage, stdin, stdout)
            except mishell.exception.ResolutionError as e:
                mishell.util.print_to_stderr(self.env, str(e))
                self.statuses[i] = NOT_FOUND
            except mishell.exception.ChildExecError as e:
                mishell.util.print_to_stderr(self.env, str(e))
                self.statuses[i] = CANNOT_EXECUTE
            # The child has its own copies of these.
            self.close(stdin)
            self.close(stdout)
            stdin = read_end
        self.state = FANNED_OUT

    # Start the program for one stage, with stdin and stdout bound to the given descriptors (None: inherit).
    # All other descriptors are closed in the child. Returns the Popen.
    def spawn(self, stage, stdin, stdout):
        executable = mishell.util.find_executable(stage.name)
        if executable is None:
            raise mishell.exception.ResolutionError(stage.name)
        debug(f'spawn {executable} {stage.argv()} stdin={stdin} stdout={stdout}')
        try:
            return subprocess.Popen(stage.argv(),
                                    executable=executable,
                                    stdin=stdin,
                                    stdout=stdout,
                                    close_fds=True)
        except OSError as e:
            if e.errno in FORK_ERRNOS:
                raise mishell.exception.SpawnError(stage.name, e.strerror)
            raise mishell.exception.ChildExecError(stage.name, e.strerror)

    def wait_all(self):
        for i, process in enumerate(self.processes):
            if process is not None:
                self.statuses[i] = mishell.util.exit_status(process.wait())
                debug(f'{process.pid} exited: {self.statuses[i]}')
        return self.statuses[-1]

    def close(self, fd):
        if fd is not None and fd in self.fds:
            self.fds.discard(fd)
            mishell.util.close_quietly(fd)

    def close_all(self):
        for fd in list(self.fds):
            self.close(fd)
        self.input_fd = None
        self.output_fd = None


def run_pipeline(env, pipeline):
    return Orchestrator(env, pipeline).run()
