# Core type aliases for cilisp's data model.
#
# ASTs are built from the node classes in cilisp.types.ast and evaluate to a
# TypedResult (cilisp.types.number). Nothing here imports the heavier modules
# so every submodule can import these aliases without cycles.
#
# Naming guidance:
# - Expression: use in reader/construction code for AST nodes being built.
# - OperandList: the ordered, owned operand sequence of a function call.
# - EvaluatorFn: the callback builtins use to evaluate their operands lazily.

from typing import Any, Callable, List

__version__ = "0.1.0"

# AST node alias (any of the Node variants)
Expression = Any
OperandList = List[Any]

# Evaluator callback handed to builtins: evaluates one operand node
EvaluatorFn = Callable[[Any], Any]
