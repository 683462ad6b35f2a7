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

import mishell.util


def debug(message):
    mishell.util.debug(f'reaper: {message}')


class BackgroundPipeline(object):

    def __init__(self, pipeline, processes):
        self.pipeline = pipeline
        self.processes = list(processes)
        # The status of a background pipeline is that of its last process.
        self.last = self.processes[-1]

    def __repr__(self):
        pids = ', '.join(str(p.pid) for p in self.processes)
        return f'bg([{pids}]: {self.pipeline})'

    # Collect any processes that have exited, without blocking. Returns True when none remain.
    def poll(self):
        running = []
        for process in self.processes:
            if process.poll() is None:
                running.append(process)
            else:
                debug(f'reaped {process.pid}: {mishell.util.exit_status(process.returncode)}')
        self.processes = running
        return len(running) == 0

    def status(self):
        return mishell.util.exit_status(self.last.returncode)


class Reaper(object):
    """Collects the exit status of processes started by background pipelines, so they don't
    linger as zombies. reap() never waits for a process that is still running."""

    def __init__(self):
        self._pipelines = []

    def __repr__(self):
        return f'Reaper({self._pipelines})'

    def add(self, pipeline, processes):
        if len(processes) > 0:
            background = BackgroundPipeline(pipeline, processes)
            debug(f'add {background}')
            self._pipelines.append(background)

    # Returns the pipelines whose processes have all completed since the last call.
    def reap(self):
        completed = []
        running = []
        for background in self._pipelines:
            if background.poll():
                completed.append(background)
            else:
                running.append(background)
        self._pipelines = running
        return completed

    def running(self):
        return list(self._pipelines)

    def shutdown(self):
        self.reap()
        if self._pipelines:
            debug(f'still running at shutdown: {self._pipelines}')
