"""
This is an interpreter for the Lox scripting language.

    py -m lox program.lox

will run program.lox if possible, or else try to explain why not.
With no program it starts an interactive prompt.

    py -m lox -h

will explain all the arguments.
"""
from .cmdline import parser, run
import sys

parser.prog = "py -m lox"
sys.exit(run(parser.parse_args()))
