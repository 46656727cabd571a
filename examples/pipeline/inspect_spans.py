"""Look at each pipeline stage: extracted spans, placeholder text, final HTML."""

from texmark import MarkdownItRenderer, resynthesize, scan

source = """
| Quantity | Formula |
|----------|---------|
| Area     | $\\pi r^2$ |

Written with brackets, printed with dollars:

\\[
\\int_0^1 x^2 \\, dx = \\frac{1}{3}
\\]

Shell variables stay literal: `echo $HOME`, and so does \\$5.
"""

text, spans = scan(source)
for span in spans:
    print(f"{span.index}: {span.kind.name:<6} {span.form.name:<13} {span.content!r}")

print()
print(text)

rendered = MarkdownItRenderer().render(text)
print(resynthesize(rendered, spans))
