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

import random

import mishell.argsparser
import mishell.core

HELP = '''
fortune

Print a fortune, chosen at random.
'''

FORTUNES = [
    "You will encounter a coding bug so bizarre, you'll start to wonder if your computer is possessed by a "
    "mischievous spirit.",
    "Your future holds a plethora of keyboard shortcuts that will make you feel like a wizard of the digital realm.",
    "In your future, you will finally solve a programming problem that's been driving you crazy - just in time for "
    "it to become obsolete.",
    "Your computer will crash at the most inconvenient time possible, reminding you that technology truly has a "
    "sense of humor.",
    "The code you write today will run perfectly - but only on the machine you wrote it on. Good luck :).",
    "In the near future, you will discover the joys of pointer arithmetic in C. Don't worry, it's not as painful "
    "as it sounds.",
    "You will encounter a bug in your C code that will make you question the fundamental laws of computer science.",
    "Your mastery of C will impress even the most seasoned programmers, earning you the nickname 'C-sar' among "
    "your peers.",
    "Your code will compile without errors, but when you run it, you'll be greeted with a delightful surprise: "
    "a segfault!",
    "You will spend hours debugging a single line of code in C, only to find that the problem was caused by a "
    "misplaced semicolon.",
    "In the near future, you will experience the joy of watching an operating system update progress bar move at "
    "an excruciatingly slow pace",
    "You will encounter a mysterious error message while working with your operating system, leaving you "
    "wondering if the Matrix has just glitched.",
    "Your future holds a visit to the dreaded Blue Screen of Death. Don't worry, it happens to the best of us.",
    "You will discover a hidden Easter egg in your operating system that will make you question whether the "
    "developers have a sense of humor or not.",
    "Your operating system will suddenly decide to update itself in the middle of an important task, leaving you "
    "with a newfound appreciation for manual updates.",
    "You will encounter the Linux terminal for the first time and feel like you've been transported to a world of "
    "endless possibilities.",
    "Your future holds a late-night session of compiling and installing packages from source code, leaving you "
    "feeling like a true Linux guru.",
    "You will experience the satisfaction of solving a complex problem using Linux command-line tools, and wonder "
    "how you ever lived without them.",
    "Your Linux system will crash unexpectedly, but fear not - with the power of the command line, you'll be able "
    "to diagnose and fix the issue in no time.",
    "You will discover the joys of customizing your Linux desktop environment, creating a unique setup that "
    "reflects your personality and style",
    "You will become so proficient in Vim that you'll start editing text in your dreams with HJKL",
    "In the future, you'll accidentally activate Vim's 'delete everything' mode and be left wondering if your "
    "document ever existed.",
    "You'll become so comfortable using Vim that you'll start seeing regular text editors as mere toys.",
    "You will encounter a fellow Vim user and bond over your mutual love for efficient editing and obscure "
    "keyboard shortcuts.",
    "Your future holds a moment of panic when you realize you can't exit Vim, but fear not - Google and the Vim "
    "community will come to your rescue."
]


class FortuneArgsParser(mishell.argsparser.ArgsParser):

    def __init__(self, env):
        super().__init__('fortune', env)
        self.validate()


class Fortune(mishell.core.Op):

    def run(self, env):
        print(random.choice(FORTUNES))
