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

import prompt_toolkit
import prompt_toolkit.history
import prompt_toolkit.key_binding

import mishell.parser
import mishell.tabcompleter


class Reader(object):
    """Line editor. Up-arrow recalls previous lines, which are kept in the history file.

    Tab ends the line with ?, so that the shell lists completions of the last word instead of
    running the line.
    """

    def __init__(self, env):
        self._env = env
        self._history = prompt_toolkit.history.FileHistory(str(env.locations.data_hist()))
        self._session = prompt_toolkit.PromptSession(
            complete_while_typing=False,
            completer=mishell.tabcompleter.TabCompleter(env),
            history=self._history,
            multiline=False,
            key_bindings=self.setup_key_bindings())

    # Returns a line input by the user. default is the initial text to be edited.
    def input(self, default=''):
        return self._session.prompt(self._env.prompt(), default=default or '')

    def setup_key_bindings(self):
        kb = prompt_toolkit.key_binding.KeyBindings()

        @kb.add('tab')
        def _(event):
            buffer = event.current_buffer
            buffer.cursor_position = len(buffer.text)
            buffer.insert_text(mishell.parser.Token.AUTOCOMPLETE)
            buffer.validate_and_handle()

        return kb
