import mishell.parser
import mishell.pipeline

import test_base

timeit = test_base.timeit

Parser = mishell.parser.Parser
ParseError = mishell.parser.ParseError
Tokens = mishell.parser.Tokens
TERMINATOR = mishell.pipeline.TERMINATOR


def parse(text):
    return Parser(text).parse()


def check_args_invariant(pipeline):
    for stage in pipeline:
        assert stage.args[0] == stage.name
        assert stage.args[-1] is TERMINATOR
        assert stage.arg_count == len(stage.positional()) + 2


@timeit
def test_tokens():
    tokens = list(Tokens('ls   -la\t"a b"'))
    assert [token.raw() for token in tokens] == ['ls', '-la', '"a b"']
    assert [token.value() for token in tokens] == ['ls', '-la', 'a b']
    assert [(token.start, token.end) for token in tokens] == [(0, 2), (5, 8), (9, 14)]
    assert tokens[-1].is_terminal()
    # Restartable
    tokens = Tokens('a b c')
    assert [token.raw() for token in tokens] == [token.raw() for token in tokens]
    # Classification
    tokens = list(Tokens('a | <in >out >>app & "|"'))
    assert tokens[1].is_pipe()
    assert tokens[2].is_redirect() and tokens[2].is_read() and tokens[2].path() == 'in'
    assert tokens[3].is_redirect() and tokens[3].is_write() and tokens[3].path() == 'out'
    assert tokens[4].is_redirect() and tokens[4].is_append() and tokens[4].path() == 'app'
    assert tokens[5].is_background()
    # A quoted operator is an ordinary word
    assert tokens[6].is_word() and tokens[6].value() == '|'


@timeit
def test_quotes():
    assert parse('echo "a b"').first().args == ['echo', 'a b', TERMINATOR]
    assert parse("echo 'a b'").first().args == ['echo', 'a b', TERMINATOR]
    assert parse('echo "it\'s"').first().args == ['echo', "it's", TERMINATOR]
    # Quotes in the middle of a word are kept
    assert parse('echo a"b c"d').first().args == ['echo', 'a"b c"d', TERMINATOR]
    # Unterminated quote runs to the end of the line
    assert parse('echo "a b').first().args == ['echo', '"a b', TERMINATOR]


@timeit
def test_simple():
    pipeline = parse('ls -la')
    assert len(pipeline) == 1
    stage = pipeline.first()
    assert stage.name == 'ls'
    assert stage.args == ['ls', '-la', TERMINATOR]
    assert stage.arg_count == 3
    assert stage.redirects() == (None, None, None)
    assert not pipeline.background
    assert not pipeline.autocomplete
    check_args_invariant(pipeline)
    # Whitespace around the line is ignored
    assert parse(' \t ls -la \t') == pipeline


@timeit
def test_empty():
    for line in ('', '   ', '\t'):
        pipeline = parse(line)
        assert pipeline.is_empty()
        assert pipeline.first().name == ''
        assert pipeline.first().args == ['', TERMINATOR]


@timeit
def test_redirects():
    stage = parse('echo hi > out.txt').first()
    assert stage.write_file == 'out.txt'
    assert stage.args == ['echo', 'hi', TERMINATOR]
    assert parse('echo hi >out.txt') == parse('echo hi > out.txt')
    stage = parse('sort <in.txt >>out.txt').first()
    assert stage.read_file == 'in.txt'
    assert stage.append_file == 'out.txt'
    assert stage.write_file is None
    assert stage.args == ['sort', TERMINATOR]
    # Quoted path
    assert parse('echo hi >"my file"').first().write_file == 'my file'
    # Write and append both recorded
    stage = parse('echo x >a >>b').first()
    assert (stage.write_file, stage.append_file) == ('a', 'b')


@timeit
def test_dangling_redirect():
    parser = Parser('echo hi >')
    stage = parser.parse().first()
    assert stage.redirects() == (None, None, None)
    assert stage.args == ['echo', 'hi', TERMINATOR]
    assert len(parser.errors) == 1
    assert isinstance(parser.errors[0], ParseError)
    # The operator is ignored, the following | still works.
    parser = Parser('echo hi > | wc')
    pipeline = parser.parse()
    assert pipeline.names() == ['echo', 'wc']
    assert pipeline.first().write_file is None
    assert len(parser.errors) == 1


@timeit
def test_pipeline():
    pipeline = parse('cmd1 <in | cmd2 a b | cmd3 c >out')
    assert pipeline.names() == ['cmd1', 'cmd2', 'cmd3']
    assert pipeline[0].read_file == 'in'
    assert pipeline[2].write_file == 'out'
    assert pipeline[1].args == ['cmd2', 'a', 'b', TERMINATOR]
    assert pipeline[1].redirects() == (None, None, None)
    check_args_invariant(pipeline)
    # Whitespace is needed around |
    assert parse('a|b').names() == ['a|b']


@timeit
def test_missing_command_after_pipe():
    for line in ('ls |', 'ls | ', 'ls | wc |', '| wc', 'ls | | wc'):
        try:
            parse(line)
            assert False, line
        except ParseError as e:
            assert 'missing command' in str(e)


@timeit
def test_background():
    pipeline = parse('sleep 5 &')
    assert pipeline.background
    assert pipeline.first().args == ['sleep', '5', TERMINATOR]
    assert parse('sleep 5&').first().args == ['sleep', '5', TERMINATOR]
    assert parse('sleep 5&').background
    # The whole pipeline is in the background
    pipeline = parse('yes | head -3 &')
    assert pipeline.background
    assert pipeline.last().args == ['head', '-3', TERMINATOR]
    # & elsewhere is ignored
    pipeline = parse('a & b')
    assert not pipeline.background
    assert pipeline.first().args == ['a', 'b', TERMINATOR]


@timeit
def test_autocomplete():
    pipeline = parse('ls fo?')
    assert pipeline.autocomplete
    assert pipeline.first().args == ['ls', 'fo', TERMINATOR]
    pipeline = parse('ls ?')
    assert pipeline.autocomplete
    assert pipeline.first().args == ['ls', TERMINATOR]
    pipeline = parse('sleep 1 &?')
    assert pipeline.autocomplete
    assert pipeline.background
    # Nothing will run, so a missing command after | is allowed.
    pipeline = parse('ls | ?')
    assert pipeline.autocomplete
    assert pipeline.names() == ['ls', '']


@timeit
def test_args_invariant():
    for line in ('ls', 'ls -l -a', 'a b c d e f g', 'x <in y >out z', 'p q | r s t | u', 'echo "a b" \'c d\' &'):
        check_args_invariant(parse(line))


@timeit
def test_round_trip():
    for line in ('ls -la',
                 'echo hi >out.txt',
                 'cat <in.txt | sort -r | uniq >>out.txt',
                 'echo "a b" \'c d\' &',
                 'echo "|" "<x" ">y" "a&" "b?"',
                 'echo "it\'s"',
                 'grep x file ?',
                 ''):
        pipeline = parse(line)
        text = pipeline.unparse()
        assert parse(text) == pipeline, f'{line} -> {text}'
        assert str(pipeline) == text


def main():
    test_tokens()
    test_quotes()
    test_simple()
    test_empty()
    test_redirects()
    test_dangling_redirect()
    test_pipeline()
    test_missing_command_after_pipe()
    test_background()
    test_autocomplete()
    test_args_invariant()
    test_round_trip()
    print('test_parsing: all passed')


if __name__ == '__main__':
    main()
