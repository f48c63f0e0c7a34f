"""Render a captioned algorithm to HTML with numbered lines."""

from pseudocode import render_to_string

source = r"""
\begin{algorithm}
\caption{Euclid}
\begin{algorithmic}
\FUNCTION{Gcd}{$a, b$}
    \WHILE{$b \neq 0$}
        \STATE $(a, b) \gets (b, a \bmod b)$
    \ENDWHILE
    \RETURN $a$
\ENDFUNCTION
\end{algorithmic}
\end{algorithm}
"""

print(render_to_string(source, line_number=True))
