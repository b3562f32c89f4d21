from __future__ import annotations
from typing import Callable, List, Optional

from cilisp.config import get_max_depth
from cilisp.diagnostics import Diagnostics
from cilisp.errors import CilispQuit, CilispRecursionError, CilispSyntaxError
from cilisp.evaluation.evaluator import evaluate
from cilisp.lifecycle import managed
from cilisp.reader.parser import lex, TokenStream, QUIT
from cilisp.types.ast import Node
from cilisp.types.number import TypedResult


class Interpreter:
    """
    Orchestrates reading and evaluating CI LISP code.

    Each top-level expression is parsed into its own AST, evaluated once and
    released before the next one is read. Nothing survives between
    calls except the diagnostics sink, which holds the latest call's warnings.
    """

    def __init__(
        self,
        diagnostics: Optional[Diagnostics] = None,
        max_depth: Optional[int] = None,
        eval_fn: Callable[..., TypedResult] = evaluate,
    ):
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.max_depth = max_depth if max_depth is not None else get_max_depth()
        self.eval_fn = eval_fn

    def eval_node(self, node: Node) -> TypedResult:
        """Evaluate one AST and release it, whatever the outcome."""
        with managed(node) as root:
            return self.eval_fn(root, self.diagnostics, max_depth=self.max_depth)

    def eval_all(self, code: str) -> List[TypedResult]:
        """Evaluate every expression in `code`; raises CilispQuit on `quit`.

        The diagnostics sink is cleared first, so afterwards it holds only the
        warnings raised by this call. A syntax or depth error carries the
        results of the expressions evaluated before it in ``results``.
        """
        self.diagnostics.clear()
        stream = TokenStream(lex(code), self.diagnostics)
        results: List[TypedResult] = []
        try:
            while (expr := self._read(stream)) is not None:
                if expr is QUIT:
                    raise CilispQuit(results)
                results.append(self.eval_node(expr))
        except (CilispSyntaxError, CilispRecursionError) as e:
            e.results = list(results)
            raise
        return results

    def _read(self, stream: TokenStream):
        try:
            return stream.parse_program()
        except RecursionError:
            raise CilispRecursionError("Input nests too deeply to be read") from None

    def eval(self, code: str) -> TypedResult | List[TypedResult] | None:
        results = self.eval_all(code)
        if not results:
            return None
        if len(results) == 1:
            return results[0]
        return results
