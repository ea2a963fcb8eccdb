"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Numbers, strings, booleans and nil play themselves as Python float, str, bool and None.
Special things like closures and instances need more help; see `values`.
"""
import math
from abc import ABC
from decimal import Decimal
from typing import Any, NamedTuple, Optional, Sequence, Union

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

NATIVE_DATA = Union[None, bool, float, str]
VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]

class Returning(NamedTuple):
	"""
	The outcome of executing a `return` statement. Statements otherwise yield None.
	Blocks, ifs and loops hand this straight back up, and the nearest
	function call consumes it. It is never an error and never reported.
	"""
	value: Any

OUTCOME = Optional[Returning]

def is_truthy(value:VALUE) -> bool:
	return value is not None and value is not False

def is_equal(a:VALUE, b:VALUE) -> bool:
	# No coercion: 1 == true must be false even though Python thinks otherwise.
	if a is None: return b is None
	return type(a) is type(b) and a == b

def show(value:VALUE) -> str:
	""" The fixed stringification used by print. """
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float): return _show_number(value)
	return str(value)

def _show_number(x:float) -> str:
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "Infinity" if x > 0 else "-Infinity"
	# Shortest round-trip digits, but always written out positionally.
	text = repr(x)
	if "e" in text: text = format(Decimal(text), "f")
	if text.endswith(".0"): text = text[:-2]
	return text
