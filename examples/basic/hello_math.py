"""Render Markdown with math in one call."""

from texmark import render

html = render("Euler's identity: $e^{i\\pi} + 1 = 0$")
print(html)
