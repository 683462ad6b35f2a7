import os

import mishell.op

import test_base

timeit = test_base.timeit
TestDir = test_base.TestDir

TEST = test_base.TestTabCompletion()
SHELL = test_base.TestShell()


def setup_files(testdir):
    (testdir / 'alpha.txt').write_text('')
    (testdir / 'alpine').mkdir()
    (testdir / 'alpine' / 'inner.txt').write_text('')
    (testdir / 'beta.py').write_text('')
    (testdir / '.hidden').write_text('')
    (testdir / 'with space').write_text('')
    bin = testdir / 'bin'
    bin.mkdir()
    for name in ('mycmd_one', 'mycmd_two', 'myscript'):
        executable = bin / name
        executable.write_text('#!/bin/sh\n')
        executable.chmod(0o755)
    # Not executable
    (bin / 'mycmd_data').write_text('')


class PathSetTo(object):

    def __init__(self, path):
        self.path = str(path)
        self.saved = None

    def __enter__(self):
        self.saved = os.environ.get('PATH')
        os.environ['PATH'] = self.path

    def __exit__(self, *_):
        if self.saved is None:
            os.environ.pop('PATH', None)
        else:
            os.environ['PATH'] = self.saved


@timeit
def test_command():
    with TestDir(TEST.env) as testdir:
        setup_files(testdir)
        with PathSetTo(testdir / 'bin'):
            TEST.run(line='mycmd', expected=['mycmd_one', 'mycmd_two'])
            TEST.run(line='my', expected=['mycmd_one', 'mycmd_two', 'myscript'])
            TEST.run(line='ro', expected=['roll'])
            TEST.run(line='c', expected=['cd', 'cdh', 'cloc'])
            TEST.run(line='', expected=sorted(mishell.op.public + ['mycmd_one', 'mycmd_two', 'myscript']))
            TEST.run(line='xyz', expected=[])
            # After a pipe
            TEST.run(line='ls | myc', expected=['mycmd_one', 'mycmd_two'])
            TEST.run(line='ls | ', expected=sorted(mishell.op.public + ['mycmd_one', 'mycmd_two', 'myscript']))
            TEST.run(line='ls |', expected=sorted(mishell.op.public + ['mycmd_one', 'mycmd_two', 'myscript']))
            # The trailing ? is ignored
            TEST.run(line='ro?', expected=['roll'])


@timeit
def test_command_path():
    with TestDir(TEST.env) as testdir:
        setup_files(testdir)
        TEST.env.dir_state().change_current_dir(testdir)
        TEST.run(line='./bi', expected=['./bin/'])
        TEST.run(line='bin/mycmd_', expected=['bin/mycmd_data', 'bin/mycmd_one', 'bin/mycmd_two'])
        TEST.run(line=f'{testdir}/bin/mys', expected=[f'{testdir}/bin/myscript'])


@timeit
def test_filename():
    with TestDir(TEST.env) as testdir:
        setup_files(testdir)
        TEST.env.dir_state().change_current_dir(testdir)
        TEST.run(line='ls al', expected=['alpha.txt', 'alpine/'])
        TEST.run(line='ls b', expected=['beta.py', 'bin/'])
        TEST.run(line='ls ', expected=['alpha.txt', 'alpine/', 'beta.py', 'bin/', 'with space'])
        TEST.run(line='ls alpine/', expected=['alpine/inner.txt'])
        TEST.run(line='ls alpine/i', expected=['alpine/inner.txt'])
        TEST.run(line='ls x', expected=[])
        TEST.run(line='ls no_such_dir/', expected=[])
        # Hidden files only when asked for
        TEST.run(line='ls .h', expected=['.hidden'])
        TEST.run(line='ls -l al', expected=['alpha.txt', 'alpine/'])
        TEST.run(line='ls alpha.txt ', expected=['alpha.txt', 'alpine/', 'beta.py', 'bin/', 'with space'])
        TEST.run(line=f'ls {testdir}/be', expected=[f'{testdir}/beta.py'])
        home = os.path.expanduser('~')
        TEST.run(line='ls ~/', expected=[f'~/{name}/' if os.path.isdir(os.path.join(home, name)) else f'~/{name}'
                                         for name in os.listdir(home) if not name.startswith('.')])
        # Quoted
        TEST.run(line='ls "wi', expected=['with space'])
        TEST.run(line="ls 'al", expected=['alpha.txt', 'alpine/'])


@timeit
def test_redirect():
    with TestDir(TEST.env) as testdir:
        setup_files(testdir)
        TEST.env.dir_state().change_current_dir(testdir)
        TEST.run(line='cat <al', expected=['alpha.txt', 'alpine/'])
        TEST.run(line='cat < al', expected=['alpha.txt', 'alpine/'])
        TEST.run(line='ls >be', expected=['beta.py'])
        TEST.run(line='ls >>alpine/', expected=['alpine/inner.txt'])
        TEST.run(line='cat <alpha.txt | sort >be', expected=['beta.py'])


@timeit
def test_completed_line():
    with TestDir(SHELL.env) as testdir:
        setup_files(testdir)
        SHELL.cd(testdir)
        # One candidate: the completed line is the next command to be edited.
        SHELL.run('ls alph?',
                  expected_out=['alpha.txt'],
                  expected_status=0)
        assert SHELL.env.take_next_command() == 'ls alpha.txt '
        assert SHELL.env.take_next_command() is None
        SHELL.run('ls alpi?',
                  expected_out=['alpine/'])
        assert SHELL.env.take_next_command() == 'ls alpine/'
        SHELL.run('cat "wi?',
                  expected_out=['with space'])
        assert SHELL.env.take_next_command() == 'cat "with space" '
        # More than one: the candidates are listed, and nothing is run.
        SHELL.run('ls al?',
                  expected_out=['alpha.txt', 'alpine/'])
        assert SHELL.env.take_next_command() is None
        SHELL.run('rm al?',
                  expected_out=['alpha.txt', 'alpine/'])
        assert (testdir / 'alpha.txt').exists()
        # None
        SHELL.run('ls zzz?',
                  expected_out=[])
        assert SHELL.env.take_next_command() is None


def main_stable():
    test_command()
    test_command_path()
    test_filename()
    test_redirect()
    test_completed_line()


def main():
    TEST.reset_environment()
    SHELL.reset_environment()
    main_stable()
    TEST.report_failures('test_tab_completion')


if __name__ == '__main__':
    main()
