"""
A small result-monad, and the one combinator that matters here.

Every pass below the front-end answers with either Ok(value) or Err(problems).
Where a node has several independent children (fields of a record, arguments
of a constructor, constructors of a type, declarations of a file) the children
are all resolved, and then `combine` decides: if every child came out Ok, the
parent gets the tuple of values; otherwise the parent gets every problem from
every child, in order. Nobody stops at the first complaint.

`bind` is the exception: it is for steps that genuinely depend on the outcome
of the step before, so it does short-circuit.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

@dataclass(frozen=True)
class Ok(Generic[T]):
	value: T

@dataclass(frozen=True)
class Err(Generic[E]):
	"""
	For the accumulating passes, `error` is a non-empty tuple of problems.
	The driver's outermost result carries a single string instead.
	"""
	error: E

Result = Union[Ok[T], Err[E]]

def fail(*problems) -> Err:
	assert problems, "An Err must carry at least one problem."
	return Err(tuple(problems))

def fmap(fn:Callable[[T], U], result:Result) -> Result:
	""" Transform a success; pass failure through untouched. """
	if isinstance(result, Ok): return Ok(fn(result.value))
	return result

def bind(result:Result, fn:Callable[[T], Result]) -> Result:
	""" Chain a dependent step. Does not evaluate `fn` after a failure. """
	if isinstance(result, Ok): return fn(result.value)
	return result

def combine(results:Iterable[Result]) -> Result:
	"""
	Collect all or merge all.
	Every element is evaluated, even after an earlier one fails.
	"""
	values, problems = [], []
	for r in results:
		if isinstance(r, Ok): values.append(r.value)
		else: problems.extend(r.error)
	if problems: return Err(tuple(problems))
	return Ok(tuple(values))

def traverse(fn:Callable[[Any], Result], items:Iterable) -> Result:
	return combine(fn(item) for item in items)
