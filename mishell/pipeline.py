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

# Ends every argument vector, the way a NULL ends an exec argument vector.
TERMINATOR = None

SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
QUOTES = SINGLE_QUOTE + DOUBLE_QUOTE
WHITESPACE = ' \t'


# Quote x, if necessary, so that the parser reads it back as a single ordinary word.
def quote(x):
    needs_quote = (len(x) == 0 or
                   any(c in WHITESPACE or c in QUOTES for c in x) or
                   x[0] in '<>' or
                   x[-1] in '?&' or
                   x == '|')
    if not needs_quote:
        return x
    q = SINGLE_QUOTE if DOUBLE_QUOTE in x else DOUBLE_QUOTE
    return f'{q}{x}{q}'


class Stage(object):
    """One program invocation in a pipeline.

    args is the argument vector: args[0] is the name, and the last element is TERMINATOR.
    Of the redirects, only read_file on the first stage, and write_file/append_file on the
    last stage, are used by the orchestrator.
    """

    def __init__(self, name=''):
        self.name = name
        self.args = [name, TERMINATOR]
        self.read_file = None
        self.write_file = None
        self.append_file = None
        self.background = False
        self.autocomplete = False

    def __repr__(self):
        buffer = [f'Stage({self.name}', f', args={self.args}']
        for label, path in (('<', self.read_file), ('>', self.write_file), ('>>', self.append_file)):
            if path is not None:
                buffer.append(f', {label}{path}')
        if self.background:
            buffer.append(', &')
        if self.autocomplete:
            buffer.append(', ?')
        buffer.append(')')
        return ''.join(buffer)

    def __eq__(self, other):
        return (isinstance(other, Stage) and
                self.name == other.name and
                self.args == other.args and
                self.redirects() == other.redirects() and
                self.background == other.background and
                self.autocomplete == other.autocomplete)

    def __hash__(self):
        return hash((self.name, tuple(self.args)))

    @property
    def arg_count(self):
        return len(self.args)

    def set_args(self, positional):
        self.args = [self.name] + list(positional) + [TERMINATOR]

    # The argument vector passed to the program: args without the terminator.
    def argv(self):
        return self.args[:-1]

    def positional(self):
        return self.args[1:-1]

    def redirects(self):
        return self.read_file, self.write_file, self.append_file

    def has_redirects(self):
        return any(path is not None for path in self.redirects())

    def unparse(self):
        # An empty stage, e.g. after a trailing |, has no words.
        words = [] if self.argv() == [''] else [quote(x) for x in self.argv()]
        if self.read_file is not None:
            words.append('<' + quote(self.read_file))
        if self.write_file is not None:
            words.append('>' + quote(self.write_file))
        if self.append_file is not None:
            words.append('>>' + quote(self.append_file))
        return ' '.join(words)

    # Debugging dump, one line per attribute.
    def describe(self, indent=''):
        lines = [f'{indent}Command: <{self.name}>',
                 f'{indent}\tIs Background: {"yes" if self.background else "no"}',
                 f'{indent}\tNeeds Auto-complete: {"yes" if self.autocomplete else "no"}',
                 f'{indent}\tRedirects:']
        for i, path in enumerate(self.redirects()):
            lines.append(f'{indent}\t\t{i}: {path if path is not None else "N/A"}')
        lines.append(f'{indent}\tArguments ({self.arg_count}):')
        for i, arg in enumerate(self.args):
            lines.append(f'{indent}\t\tArg {i}: {arg}')
        return lines


class Pipeline(object):
    """An ordered sequence of Stages, connected by pipes, built from one line of input."""

    def __init__(self, source, stages):
        assert len(stages) > 0
        self.source = source
        self.stages = list(stages)

    def __repr__(self):
        return f'Pipeline({self.stages})'

    def __str__(self):
        return self.unparse()

    def __eq__(self, other):
        return isinstance(other, Pipeline) and self.stages == other.stages

    def __hash__(self):
        return hash(tuple(self.stages))

    def __len__(self):
        return len(self.stages)

    def __iter__(self):
        return iter(self.stages)

    def __getitem__(self, i):
        return self.stages[i]

    def first(self):
        return self.stages[0]

    def last(self):
        return self.stages[-1]

    # Background and autocomplete apply to the whole pipeline. They are recorded on the last stage.

    @property
    def background(self):
        return self.last().background

    @property
    def autocomplete(self):
        return self.last().autocomplete

    def is_empty(self):
        return len(self.stages) == 1 and self.first().name == ''

    def names(self):
        return [stage.name for stage in self.stages]

    def unparse(self):
        text = ' | '.join(stage.unparse() for stage in self.stages)
        if self.background:
            text += ' &'
        if self.autocomplete:
            text += '?'
        return text

    def describe(self):
        lines = []
        indent = ''
        for i, stage in enumerate(self.stages):
            if i > 0:
                lines.append(f'{indent}\tPiped to:')
                indent += '\t'
            lines.extend(stage.describe(indent))
        return '\n'.join(lines)
