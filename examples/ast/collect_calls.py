"""Typed parse tree: list the procedures every procedure calls."""

from pseudocode import parse
from pseudocode.nodes import Call, Function
from pseudocode.visitor import BaseVisitor


class CallGraph(BaseVisitor[None]):
    """Map each function or procedure to the names it calls."""

    def __init__(self) -> None:
        self.calls: dict[str, list[str]] = {}
        self._current = "<top>"

    def visit_function(self, node: Function) -> None:
        self._current = node.name
        self.calls.setdefault(node.name, [])

    def visit_call(self, node: Call) -> None:
        self.calls.setdefault(self._current, []).append(node.name)


source = r"""
\begin{algorithmic}
\PROCEDURE{Quicksort}{$A, p, r$}
    \IF{$p < r$}
        \STATE $q = $ \CALL{Partition}{$A, p, r$}
        \STATE \CALL{Quicksort}{$A, p, q - 1$}
        \STATE \CALL{Quicksort}{$A, q + 1, r$}
    \ENDIF
\ENDPROCEDURE
\PROCEDURE{Partition}{$A, p, r$}
    \STATE \CALL{Swap}{$A[i], A[r]$}
\ENDPROCEDURE
\end{algorithmic}
"""

graph = CallGraph()
graph.visit(parse(source))

for name, callees in graph.calls.items():
    print(f"{name} -> {', '.join(callees) or '(nothing)'}")
