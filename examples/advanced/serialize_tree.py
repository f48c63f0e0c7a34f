"""Cache a parse tree on disk: JSON round-trip."""

from pseudocode import parse, render_to_string
from pseudocode.renderers.html import HtmlRenderer
from pseudocode.serialization import dump, from_json, to_json

source = r"\begin{algorithmic}\REPEAT \STATE $i \gets i + 1$ \UNTIL{$i = n$}\end{algorithmic}"

doc = parse(source)
json_str = to_json(doc)
restored = from_json(json_str)

print("Original == restored:", doc == restored)
print("JSON length:", len(json_str), "chars")
print(dump(restored))
print("Same HTML:", HtmlRenderer().render(restored) == render_to_string(source))
