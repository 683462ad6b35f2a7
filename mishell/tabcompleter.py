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

from prompt_toolkit.completion import Completer, Completion, CompleteEvent
from prompt_toolkit.document import Document

import mishell.op
import mishell.parser
import mishell.pipeline
import mishell.util


def debug(message):
    mishell.util.debug(f'tabcompleter: {message}')


class CompletionContext(object):
    """What is being completed: the first word of a stage (a command), or an argument (a filename).

    raw_prefix is the text at the end of the line that a completion replaces. prefix is that text
    with any opening quote removed.
    """

    COMMAND = 'command'
    ARG = 'arg'

    def __init__(self, text, kind, raw_prefix):
        self.text = text
        self.kind = kind
        self.raw_prefix = raw_prefix
        self.prefix = raw_prefix[1:] if raw_prefix[:1] in mishell.pipeline.QUOTES else raw_prefix

    def __repr__(self):
        return f'CompletionContext({self.kind}: <{self.prefix}>)'

    def is_command(self):
        return self.kind == CompletionContext.COMMAND

    # Text replacing raw_prefix
    def completion_text(self, candidate):
        completion = mishell.pipeline.quote(candidate)
        if not candidate.endswith('/'):
            completion += ' '
        return completion

    def complete(self, candidate):
        return self.text[:len(self.text) - len(self.raw_prefix)] + self.completion_text(candidate)


class TabCompleter(Completer):
    OPS = mishell.op.public

    def __init__(self, env):
        super().__init__()
        self.env = env

    def __repr__(self):
        return 'TabCompleter()'

    def get_completions(self, document, complete_event):
        context = self.context(document.text_before_cursor)
        debug(f'get_completions: {context}')
        candidates = (self.complete_command(context.prefix)
                      if context.is_command() else
                      self.complete_filename(context.prefix))
        for candidate in candidates:
            yield Completion(text=context.completion_text(candidate),
                             start_position=-len(context.raw_prefix),
                             display=candidate)

    # Candidates for completing the last word of line, sorted. line may end with ?
    def candidates(self, line):
        document = Document(line)
        event = CompleteEvent(text_inserted=False, completion_requested=True)
        candidates = [completion.display_text for completion in self.get_completions(document, event)]
        debug(f'candidates({line}): {candidates}')
        return candidates

    # The line, with its last word replaced by the given candidate.
    def completed_line(self, line, candidate):
        return self.context(line).complete(candidate)

    def context(self, line):
        text = line
        stripped = line.rstrip(mishell.pipeline.WHITESPACE)
        if stripped.endswith(mishell.parser.Token.AUTOCOMPLETE):
            text = stripped[:-1]
        parser = mishell.parser.Parser(text, markers=False)
        try:
            parser.parse()
        except mishell.parser.ParseError:
            # Nothing after the last |
            return CompletionContext(text, CompletionContext.COMMAND, '')
        token = parser.last_token
        if token is None:
            return CompletionContext(text, CompletionContext.COMMAND, '')
        if text.endswith(tuple(mishell.pipeline.WHITESPACE)) or not token.is_terminal():
            # Starting a new word
            kind = CompletionContext.COMMAND if token.is_pipe() else CompletionContext.ARG
            return CompletionContext(text, kind, '')
        if token.is_pipe():
            return CompletionContext(text, CompletionContext.COMMAND, '')
        if token.is_redirect():
            return CompletionContext(text, CompletionContext.ARG, token.raw()[len(token.symbol):])
        if token.is_word():
            kind = CompletionContext.COMMAND if parser.last_token_is_name else CompletionContext.ARG
            return CompletionContext(text, kind, token.raw())
        return CompletionContext(text, CompletionContext.ARG, '')

    def complete_command(self, prefix):
        if '/' in prefix:
            return self.complete_filename(prefix)
        names = set(TabCompleter.OPS)
        names.update(mishell.util.executables())
        return sorted(name for name in names if name.startswith(prefix))

    # Directories are completed with a trailing /.
    @staticmethod
    def complete_filename(prefix):
        slash = prefix.rfind('/')
        if slash < 0:
            basedir = None
            name_prefix = prefix
        else:
            basedir = prefix[:slash + 1]
            name_prefix = prefix[slash + 1:]
        directory = mishell.util.normalize_path(basedir) if basedir else pathlib.Path('.')
        try:
            entries = os.listdir(directory)
        except OSError:
            return []
        candidates = []
        for entry in entries:
            if not entry.startswith(name_prefix):
                continue
            if entry.startswith('.') and not name_prefix.startswith('.'):
                continue
            candidate = entry if basedir is None else basedir + entry
            if (directory / entry).is_dir():
                candidate += '/'
            candidates.append(candidate)
        return sorted(candidates)
