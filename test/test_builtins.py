import contextlib
import io
import os
import random
import sys

import mishell.exception
import mishell.op.cloc
import mishell.op.fortune
import mishell.op.roll
import mishell.op.sandstorm
import mishell.orchestrator

import test_base

timeit = test_base.timeit
TestDir = test_base.TestDir

TEST = test_base.TestShell()

ROW = mishell.op.cloc.ROW_FORMAT.format


@contextlib.contextmanager
def stdin_text(text):
    saved = sys.stdin
    sys.stdin = io.StringIO(text)
    try:
        yield
    finally:
        sys.stdin = saved


def cwd():
    return os.path.realpath(os.getcwd())


@timeit
def test_cd():
    with TestDir(TEST.env) as testdir:
        (testdir / 'sub').mkdir()
        TEST.run(f'cd {testdir}',
                 expected_out=[],
                 expected_status=0)
        assert cwd() == os.path.realpath(testdir)
        TEST.run('cd sub')
        assert cwd() == os.path.realpath(testdir / 'sub')
        TEST.run('cd ..')
        assert cwd() == os.path.realpath(testdir)
        # Child processes see the new directory
        TEST.run('pwd',
                 expected_out=[str(testdir)])
        TEST.run(f'cd {testdir}/no_such_dir',
                 expected_err=f'-mishell: cd: {testdir}/no_such_dir: No such file or directory',
                 expected_status=mishell.orchestrator.FAILURE)
        assert cwd() == os.path.realpath(testdir)
        TEST.run('cd',
                 expected_status=0)
        assert cwd() == os.path.realpath(test_base.TestBase.test_home)
        TEST.run(f'cd {testdir}')
        TEST.run('cd ~')
        assert cwd() == os.path.realpath(test_base.TestBase.test_home)


@timeit
def test_cdh():
    TEST.reset_environment()
    with TestDir(TEST.env) as testdir:
        a = testdir / 'a'
        b = testdir / 'b'
        a.mkdir()
        b.mkdir()
        # No history yet
        TEST.run('cdh -l',
                 expected_out=[])
        TEST.run(f'cd {a}')
        TEST.run('cd ..')
        TEST.run(f'cd {b}')
        TEST.run(f'cd {a}')
        # Newest first, without duplicates or entries starting with .
        TEST.run('cdh -l',
                 expected_out=[f'1) a) {a}',
                               f'2) b) {b}'])
        with stdin_text('2\n'):
            TEST.run('cdh',
                     expected_out=[f'1) a) {a}',
                                   f'2) b) {b}',
                                   'Select directory by letter or number: '],
                     expected_status=0)
        assert cwd() == os.path.realpath(b)
        with stdin_text('a\n'):
            TEST.run('cdh')
        assert cwd() == os.path.realpath(a)
        # Selection by cdh isn't recorded
        assert TEST.env.dir_state().history() == [str(a), str(b), '..', str(a)]
        with stdin_text('z\n'):
            TEST.run('cdh',
                     expected_out=[f'1) a) {a}',
                                   f'2) b) {b}',
                                   'Select directory by letter or number: Invalid input'],
                     expected_status=mishell.orchestrator.FAILURE)
        with stdin_text('7\n'):
            out, err, status = TEST.run_and_capture_output('cdh')
            assert out.endswith('Invalid input\n')
        assert cwd() == os.path.realpath(a)


@timeit
def test_cdh_limit():
    TEST.reset_environment()
    with TestDir(TEST.env) as testdir:
        dirs = []
        for i in range(12):
            dir = testdir / f'd{i}'
            dir.mkdir()
            dirs.append(dir)
            TEST.run(f'cd {dir}')
        recent = list(reversed(dirs))[:10]
        TEST.run('cdh -l',
                 expected_out=[f'{i + 1}) {"abcdefghij"[i]}) {dir}' for i, dir in enumerate(recent)])
        TEST.run(lambda: print('\n'.join(TEST.env.dir_state().recent())),
                 expected_out=[str(dir) for dir in recent])


@timeit
def test_roll():
    TEST.run('roll --seed 42 d6',
             expected_out=[f'Rolled {random.Random(42).randint(1, 6)}'],
             expected_status=0)
    generator = random.Random(7)
    rolls = [generator.randint(1, 20) for _ in range(3)]
    TEST.run('roll -s 7 3d20',
             expected_out=[f'Rolled {sum(rolls)} ({rolls[0]} + {rolls[1]} + {rolls[2]})'])
    for dice in ('xyz', 'd', '3d', '0d6', 'd0', '2x6'):
        TEST.run(f'roll {dice}',
                 expected_out=['Invalid input'],
                 expected_status=mishell.orchestrator.FAILURE)
    TEST.run('roll',
             expected_out=['Invalid input'],
             expected_status=mishell.orchestrator.FAILURE)
    out, _, _ = TEST.run_and_capture_output('roll d6')
    assert out.startswith('Rolled ')
    assert 1 <= int(out.split()[1]) <= 6
    TEST.run('roll -x d6',
             expected_err='-mishell: roll: Unknown flag -x',
             expected_status=mishell.orchestrator.FAILURE)
    TEST.run('roll -s abc d6',
             expected_err='seed cannot be converted to int',
             expected_status=mishell.orchestrator.FAILURE)


@timeit
def test_builtin_ignores_pipes_and_redirects():
    with TestDir(TEST.env) as testdir:
        TEST.run(f'roll -s 1 d6 | wc -l >{testdir}/out.txt',
                 expected_out=[f'Rolled {random.Random(1).randint(1, 6)}'])
        assert not (testdir / 'out.txt').exists()


@timeit
def test_fortune():
    out, err, status = TEST.run_and_capture_output('fortune')
    assert err == ''
    assert status == 0
    assert out.rstrip('\n') in mishell.op.fortune.FORTUNES
    assert len(mishell.op.fortune.FORTUNES) == 25


@timeit
def test_cloc():
    with TestDir(TEST.env) as testdir:
        (testdir / 'main.c').write_text('#include <stdio.h>\n'
                                        '\n'
                                        '// comment\n'
                                        '  /* block */\n'
                                        'int main() {\n'
                                        '\t\n'
                                        '    return 0;\n'
                                        '}\n')
        (testdir / 'main.h').write_text('// header\nint f();\n')
        sub = testdir / 'sub'
        sub.mkdir()
        (sub / 'x.py').write_text('# comment\n'
                                  'import os\n'
                                  '\n'
                                  '    # indented comment\n'
                                  'print(os.getcwd())  # trailing\n')
        (sub / 'x.cpp').write_text('int x;\n')
        (sub / 'x.hpp').write_text('\n')
        (sub / 'README').write_text('text\n\n')
        (sub / 'notes.txt').write_text('# not a comment in text\n')
        (sub / 'ignored.js').write_text('var x;\n')
        TEST.run(f'cloc {testdir}',
                 expected_out=['Total number of files in the given directory: 7',
                               '',
                               'Total blank lines 5',
                               'Total comment lines 5',
                               'Total code lines 10',
                               '',
                               ROW('Language', 'Files', 'Blank', 'Comment', 'Code'),
                               ROW('C', 1, 2, 2, 4),
                               ROW('C Header File', 1, 0, 1, 1),
                               ROW('C++', 1, 0, 0, 1),
                               ROW('C++ Header File', 1, 1, 0, 0),
                               ROW('Python', 1, 1, 2, 2),
                               ROW('Text', 2, 1, 0, 2)])
        TEST.run(f'cloc {testdir}/main.c',
                 expected_err='Not a directory',
                 expected_status=mishell.orchestrator.FAILURE)
        # Default is the current directory
        TEST.cd(sub)
        out, _, _ = TEST.run_and_capture_output('cloc')
        assert out.startswith('Total number of files in the given directory: 5\n')


@timeit
def test_psvis():
    pid = os.getpid()
    out, err, status = TEST.run_and_capture_output(f'psvis {pid}')
    assert err == ''
    assert status == 0
    lines = out.split('\n')
    assert lines[0].startswith(f'{pid} ')
    # A child of this process appears, indented, below it.
    TEST.run('sleep 1 &')
    child_pid = TEST.env.reaper.running()[0].processes[0].pid
    out, _, _ = TEST.run_and_capture_output(f'psvis {pid}')
    assert f'    {child_pid} sleep' in out.split('\n')
    with TestDir(TEST.env) as testdir:
        tree = testdir / 'tree.txt'
        TEST.run(f'psvis -o {tree} {child_pid}',
                 expected_out=[])
        assert tree.read_text() == f'{child_pid} sleep\n'
    TEST.run('psvis 999999999',
             expected_err='999999999: No such process',
             expected_status=mishell.orchestrator.FAILURE)
    TEST.run('psvis -1',
             expected_err='-mishell: psvis: -1: No such process',
             expected_status=mishell.orchestrator.FAILURE)
    # The shell is still usable
    TEST.run('echo ok',
             expected_out=['ok'],
             expected_status=0)
    TEST.run('psvis abc',
             expected_err='cannot be converted to int',
             expected_status=mishell.orchestrator.FAILURE)
    TEST.wait_for_background()


@timeit
def test_sandstorm():
    with TestDir(TEST.env) as testdir:
        opened = testdir / 'opened.txt'
        opener = testdir / mishell.op.sandstorm.opener()
        opener.write_text(f'#!/bin/sh\necho "$@" >{opened}\n')
        opener.chmod(0o755)
        path = os.environ['PATH']
        os.environ['PATH'] = f'{testdir}{os.pathsep}{path}'
        try:
            TEST.run('sandstorm',
                     expected_out=[],
                     expected_status=0)
            assert TEST.wait_for_background()
        finally:
            os.environ['PATH'] = path
        assert opened.read_text() == f'{mishell.op.sandstorm.URL}\n'


@timeit
def test_help():
    out, err, status = TEST.run_and_capture_output('help')
    assert status == 0
    lines = out.split('\n')
    assert lines[0] == 'Builtins:'
    for name in ('cd', 'cdh', 'cloc', 'exit', 'fortune', 'help', 'psvis', 'roll', 'sandstorm'):
        assert f'    {name}' in lines
    TEST.run('help roll',
             expected_out=mishell.op.roll.HELP.strip('\n'))
    TEST.run('help ROLL',
             expected_out=mishell.op.roll.HELP.strip('\n'))
    TEST.run('help nosuchbuiltin',
             expected_err='-mishell: help: Help not available for nosuchbuiltin',
             expected_status=mishell.orchestrator.FAILURE)


@timeit
def test_exit():
    try:
        TEST.run('exit')
        assert False
    except mishell.exception.ExitException:
        pass
    TEST.run('exit now',
             expected_err='Too many anonymous args',
             expected_status=mishell.orchestrator.FAILURE)


def main_stable():
    test_cd()
    test_cdh()
    test_cdh_limit()
    test_roll()
    test_builtin_ignores_pipes_and_redirects()
    test_fortune()
    test_cloc()
    test_psvis()
    test_sandstorm()
    test_help()
    test_exit()


def main():
    TEST.reset_environment()
    main_stable()
    TEST.report_failures('test_builtins')


if __name__ == '__main__':
    main()
