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
import mishell.util
from mishell.pipeline import Pipeline, Stage, QUOTES, WHITESPACE


# ----------------------------------------------------------------------------------------------------------------------

# Parsing errors

class ParseError(mishell.exception.CommandError):

    def __init__(self, token, message):
        super().__init__('' if token is None else token.raw(), message)
        self.token = token


# ----------------------------------------------------------------------------------------------------------------------

# Tokens

# A token wrapped in matching quotes is replaced by what's inside. No escapes are recognized.
def unquote(x):
    if len(x) > 2 and x[0] in QUOTES and x[0] == x[-1]:
        x = x[1:-1]
    return x


class Source(object):

    def __init__(self, text, position=0):
        self.text = text
        self.start = position
        self.end = position

    def __repr__(self):
        buffer = [self.__class__.__name__, '(']
        if self.text is not None:
            if self.start is not None and self.end is not None:
                buffer.append('[')
                buffer.append(str(self.start))
                buffer.append(':')
                buffer.append(str(self.end))
                buffer.append(']')
                buffer.append(self.text[self.start:self.end])
            else:
                buffer.append(self.text)
        buffer.append(')')
        return ''.join(buffer)

    def more(self):
        return self.end < len(self.text)

    def peek(self, n=1):
        start = self.end
        end = self.end + n
        return self.text[start:end] if end <= len(self.text) else None

    def next_char(self):
        c = None
        if self.end < len(self.text):
            c = self.text[self.end]
            self.end += 1
        return c

    def raw(self):
        return self.text[self.start:self.end]


class Token(Source):
    PIPE = '|'
    BACKGROUND = '&'
    AUTOCOMPLETE = '?'
    READ_FILE = '<'
    WRITE_FILE = '>'
    WRITE_FILE_APPEND = '>>'

    def __init__(self, text, start, end):
        super().__init__(text, start)
        self.end = end

    # The token's text, unquoted.
    def value(self):
        return unquote(self.raw())

    def is_word(self):
        return False

    def is_pipe(self):
        return False

    def is_background(self):
        return False

    def is_redirect(self):
        return False

    # The lexical end of this token is the end of the text being tokenized.
    def is_terminal(self):
        return self.end == len(self.text)


class Word(Token):

    def is_word(self):
        return True


class Pipe(Token):

    def is_pipe(self):
        return True


class Background(Token):

    def is_background(self):
        return True


class Redirect(Token):

    def __init__(self, text, start, end, symbol):
        super().__init__(text, start, end)
        assert symbol in (Token.READ_FILE, Token.WRITE_FILE, Token.WRITE_FILE_APPEND)
        self.symbol = symbol

    def is_redirect(self):
        return True

    def is_read(self):
        return self.symbol == Token.READ_FILE

    def is_write(self):
        return self.symbol == Token.WRITE_FILE

    def is_append(self):
        return self.symbol == Token.WRITE_FILE_APPEND

    # The path following the operator in the same token. Empty if the operator stands alone.
    def path(self):
        return unquote(self.raw()[len(self.symbol):])


# ----------------------------------------------------------------------------------------------------------------------

# Lexing

class Lexer(Source):

    def __init__(self, text, position=0):
        super().__init__(text, position)

    def next_token(self):
        token = None
        self.skip_whitespace()
        if self.more():
            start = self.end
            self.scan_word()
            raw = self.text[start:self.end]
            # Classification looks at the token as typed, so a quoted operator is an ordinary word.
            if raw == Token.PIPE:
                token = Pipe(self.text, start, self.end)
            elif raw == Token.BACKGROUND:
                token = Background(self.text, start, self.end)
            elif raw.startswith(Token.WRITE_FILE_APPEND):
                token = Redirect(self.text, start, self.end, Token.WRITE_FILE_APPEND)
            elif raw.startswith(Token.WRITE_FILE):
                token = Redirect(self.text, start, self.end, Token.WRITE_FILE)
            elif raw.startswith(Token.READ_FILE):
                token = Redirect(self.text, start, self.end, Token.READ_FILE)
            else:
                token = Word(self.text, start, self.end)
        return token

    # Advance to the end of the current word. Whitespace inside quotes does not end the word.
    # An unterminated quote extends the word to the end of the text.
    def scan_word(self):
        quote = None
        while True:
            c = self.peek()
            if c is None:
                break
            if quote is None and c in WHITESPACE:
                break
            self.next_char()
            if c in QUOTES:
                if quote is None:
                    quote = c
                elif c == quote:
                    quote = None

    def skip_whitespace(self):
        before = self.end
        c = self.peek()
        while c is not None and c in WHITESPACE:
            self.next_char()
            c = self.peek()
        return self.end - before


class Tokens(object):
    """The tokens of a line, generated lazily. Each iteration starts a new scan of the text."""

    def __init__(self, text, position=0):
        self.text = text
        self.position = position

    def __repr__(self):
        return f'Tokens({self.text[self.position:]})'

    def __iter__(self):
        lexer = Lexer(self.text, self.position)
        token = lexer.next_token()
        while token is not None:
            yield token
            token = lexer.next_token()


# ----------------------------------------------------------------------------------------------------------------------

# Parsing

# Grammar:
#
#     line:
#             pipeline [&] [?]
#
#     pipeline:
#             stage
#             stage | pipeline
#
#     stage:
#             name item*
#
#     item:
#             arg
#             <path
#             >path
#             >>path
#             &
#
# A redirect operator separated from its path by whitespace takes the next word as the path.
# A lone & inside a line is ignored. Only a trailing & makes the pipeline run in the background.

class Parser(object):

    def __init__(self, text, markers=True):
        self.text = text
        # False for the text following a |. Trailing ? and & belong to the whole line,
        # and have been removed by the top-level parser.
        self.markers = markers
        # Text after trimming and removal of trailing markers.
        self.command_text = None
        # Recoverable problems, e.g. a redirect operator without a path.
        self.errors = []
        # For tab completion: the last token of the last stage, and whether it is that stage's name.
        self.last_token = None
        self.last_token_is_name = False

    def __repr__(self):
        return f'Parser({self.text})'

    def parse(self):
        text = self.text.strip(WHITESPACE)
        autocomplete = False
        background = False
        if self.markers:
            if text.endswith(Token.AUTOCOMPLETE):
                autocomplete = True
                text = text[:-1].rstrip(WHITESPACE)
            if text.endswith(Token.BACKGROUND):
                background = True
                text = text[:-1]
        self.command_text = text
        stages = self.parse_stages(text)
        last = stages[-1]
        last.background = background
        last.autocomplete = autocomplete
        # Checked once, for the whole line. Completing a command after | is fine, since nothing will be run.
        if self.markers and len(stages) > 1 and last.name == '' and not autocomplete:
            raise ParseError(None, 'missing command after |')
        pipeline = Pipeline(self.text, stages)
        mishell.util.debug(f'parsed {self.text!r} ->\n{pipeline.describe()}')
        return pipeline

    def parse_stages(self, text):
        tokens = iter(Tokens(text))
        token = next(tokens, None)
        if token is not None and token.is_pipe():
            raise ParseError(None, 'missing command before |')
        stage = Stage('' if token is None else token.value())
        self.last_token = token
        self.last_token_is_name = token is not None
        positional = []
        stages = [stage]
        pending = None
        while True:
            if pending is None:
                token = next(tokens, None)
            else:
                token = pending
                pending = None
            if token is None:
                break
            self.last_token = token
            self.last_token_is_name = False
            if token.is_pipe():
                nested = Parser(text[token.end:], markers=False)
                stages.extend(nested.parse().stages)
                self.errors.extend(nested.errors)
                if nested.last_token is not None:
                    self.last_token = nested.last_token
                    self.last_token_is_name = nested.last_token_is_name
                break
            elif token.is_redirect():
                path = token.path()
                if len(path) == 0:
                    following = next(tokens, None)
                    if following is not None and following.is_word():
                        path = following.value()
                        self.last_token = following
                    else:
                        self.errors.append(ParseError(token, 'missing redirect path, ignored'))
                        pending = following
                        continue
                Parser.set_redirect(stage, token, path)
            elif token.is_background():
                # A trailing & was handled before tokenizing. Anywhere else it is ignored.
                pass
            else:
                positional.append(token.value())
        stage.set_args(positional)
        return stages

    @staticmethod
    def set_redirect(stage, token, path):
        if token.is_read():
            stage.read_file = path
        elif token.is_write():
            stage.write_file = path
        else:
            stage.append_file = path


def parse(text):
    return Parser(text).parse()
