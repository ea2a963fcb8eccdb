"""
The run-time: evaluator, value model, and the driver that runs a program end to end.
"""
