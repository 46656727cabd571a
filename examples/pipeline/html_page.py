"""Build a self-contained HTML page (KaTeX assets from ./assets if present)."""

from pathlib import Path

from texmark import render
from texmark.assets import load_katex_assets, resolve_assets_dir
from texmark.document import StyleOptions, html_document

fragment = render("# Notes\n\nThe roots are $x = \\frac{-b \\pm \\sqrt{b^2-4ac}}{2a}$.")
page = html_document(
    fragment,
    title="Notes",
    assets=load_katex_assets(resolve_assets_dir()),
    style=StyleOptions(font_size="large", chinese_font="auto"),
)
Path("notes.html").write_text(page, encoding="utf-8")
print("wrote notes.html")
