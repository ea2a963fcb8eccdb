"""
Lox: a small dynamically-typed scripting language, with a tree-walking interpreter.

Source text goes through the scanner, the parser, the resolver, and then the evaluator.
See `tree_walker.executive` for the pipeline and `cmdline` for the command.
"""
