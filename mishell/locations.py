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

import os
import pathlib

import mishell.exception


# Location structure -> interface
#
#     .config/mishell/                            config()
#         startup.msh                             config_startup()
#
#     .local/share/mishell/                       data()
#         history                                 data_hist()
#         cdh_history                             data_cdh()

class Locations(object):
    MISHELL_DIR_NAME = 'mishell'

    def __init__(self):
        self.home = Locations.normalize_dir(
            'home directory',
            os.environ.get('HOME', None),
            pathlib.Path.home())
        self.config_base = Locations.normalize_dir(
            'application configuration directory (e.g. XDG_CONFIG_HOME)',
            os.environ.get('XDG_CONFIG_HOME', None),
            self.home / '.config')
        self.data_base = Locations.normalize_dir(
            'application data directory (e.g. XDG_DATA_HOME)',
            os.environ.get('XDG_DATA_HOME', None),
            self.home / '.local' / 'share')

    def config(self):
        return Locations.ensure_dir_exists(self.config_base / Locations.MISHELL_DIR_NAME)

    def config_startup(self):
        return self.config() / 'startup.msh'

    def data(self):
        return Locations.ensure_dir_exists(self.data_base / Locations.MISHELL_DIR_NAME)

    def data_hist(self):
        return self.data() / 'history'

    def data_cdh(self):
        return self.data() / 'cdh_history'

    @staticmethod
    def ensure_dir_exists(dir):
        if dir.exists():
            if not dir.is_dir():
                raise mishell.exception.KillShellException(f'Not a directory: {dir}')
        else:
            dir.mkdir(exist_ok=False, parents=True)
        return dir

    @staticmethod
    def normalize_dir(description, provided, *defaults):
        dir = provided
        d = 0
        while dir is None and d < len(defaults):
            dir = defaults[d]
            d += 1
        if dir is None:
            raise mishell.exception.KillShellException(
                f'Unable to start because value of {description} cannot be determined.')
        try:
            if not isinstance(dir, pathlib.Path):
                dir = pathlib.Path(dir)
            dir = dir.expanduser()
        except Exception as e:
            raise mishell.exception.KillShellException(
                f'Unable to start because value of {description} cannot be determined: {e}')
        return dir
