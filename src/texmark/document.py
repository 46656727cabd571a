"""Full HTML document assembly around a rendered fragment.

The page inlines the KaTeX stylesheet and scripts, styles the fragment
from a small set of named presets, runs KaTeX auto-render once the DOM is
ready and then appends a hidden ``#render-complete`` marker so a print
driver can tell when math layout has finished.

Style values accept either a preset name or a literal CSS value:

    >>> font_size_value("large")
    '16px'
    >>> font_size_value("15px")
    '15px'

"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape as html_escape

from texmark.assets import KatexAssets

# =============================================================================
# Presets
# =============================================================================

FONT_SIZES = {"small": "12px", "medium": "14px", "large": "16px", "xlarge": "18px"}

FONT_WEIGHTS = {
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "black": "900",
}

CJK_FONTS = {
    "simsun": 'SimSun, "宋体", serif',
    "simhei": 'SimHei, "黑体", sans-serif',
    "simkai": 'KaiTi, "楷体", "STKaiti", serif',
    "fangsong": 'FangSong, "仿宋", "STFangsong", serif',
    "yahei": '"Microsoft YaHei", "微软雅黑", sans-serif',
}

DEFAULT_FONT_FAMILY = (
    '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, '
    '"Microsoft YaHei", "微软雅黑", "SimSun", "宋体", sans-serif'
)

LINE_SPACINGS = {"tight": "1.2", "normal": "1.6", "loose": "2.0", "relaxed": "2.4"}

PARAGRAPH_SPACINGS = {"tight": "0.5em", "normal": "1em", "loose": "1.5em", "relaxed": "2em"}

MATH_SPACINGS = {"tight": "10px", "normal": "20px", "loose": "30px", "relaxed": "40px"}


def font_size_value(value: str) -> str:
    return FONT_SIZES.get(value, value)


def font_weight_value(value: str) -> str:
    return FONT_WEIGHTS.get(value, value)


def font_family_value(value: str) -> str:
    """CSS font-family for a CJK font preset; anything unknown means auto."""
    return CJK_FONTS.get(value, DEFAULT_FONT_FAMILY)


def line_spacing_value(value: str) -> str:
    return LINE_SPACINGS.get(value, value)


def paragraph_spacing_value(value: str) -> str:
    return PARAGRAPH_SPACINGS.get(value, value)


def math_spacing_value(value: str) -> str:
    return MATH_SPACINGS.get(value, value)


def normalize_with_unit(value: str, unit: str) -> str:
    """Append ``unit`` to a bare number; leave anything else trimmed.

    Example:
        >>> normalize_with_unit(" 20 ", "mm")
        '20mm'
        >>> normalize_with_unit("large", "px")
        'large'

    """
    trimmed = value.strip()
    try:
        float(trimmed)
    except ValueError:
        return trimmed
    return f"{trimmed}{unit}"


_INCHES_PER_UNIT = {"mm": 1 / 25.4, "cm": 1 / 2.54, "in": 1.0, "px": 1 / 96}
_FALLBACK_INCHES = {"mm": 20 / 25.4, "cm": 2 / 2.54, "in": 0.787, "px": 0.0}


def margin_to_inches(value: str) -> float:
    """Convert a CSS length (mm, cm, in, px; bare numbers are mm) to inches.

    Unparseable numbers fall back to a 20mm margin for that unit.
    """
    value = value.strip()
    for unit, factor in _INCHES_PER_UNIT.items():
        if value.endswith(unit):
            number = value[: -len(unit)].strip()
            try:
                return float(number) * factor
            except ValueError:
                return _FALLBACK_INCHES[unit]
    try:
        return float(value) / 25.4
    except ValueError:
        return 20 / 25.4


# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True, slots=True)
class StyleOptions:
    """Typography of the generated page (preset names or CSS values)."""

    font_size: str = "medium"
    chinese_font: str = "simsun"
    font_weight: str = "medium"
    line_spacing: str = "normal"
    paragraph_spacing: str = "tight"
    math_spacing: str = "tight"


@dataclass(frozen=True, slots=True)
class PageOptions:
    """Print page geometry. ``margin`` is a CSS length."""

    margin: str = "0mm"
    landscape: bool = False

    @property
    def margin_inches(self) -> float:
        return margin_to_inches(self.margin)


# =============================================================================
# Assembly
# =============================================================================


def _print_font_size(font_size: str) -> str:
    """Convert a px font size to pt for print media (1px = 0.75pt)."""
    try:
        px = float(font_size.removesuffix("px"))
    except ValueError:
        px = 14.0
    return f"{px * 0.75:g}pt"


def css_styles(style: StyleOptions, page: PageOptions | None = None) -> str:
    """Build the page stylesheet."""
    font_size = font_size_value(style.font_size)
    font_family = font_family_value(style.chinese_font)
    font_weight = font_weight_value(style.font_weight)
    line_height = line_spacing_value(style.line_spacing)
    paragraph = paragraph_spacing_value(style.paragraph_spacing)
    math_margin = math_spacing_value(style.math_spacing)
    page = page or PageOptions()
    orientation = "A4 landscape" if page.landscape else "A4"

    return f"""
        @page {{
            size: {orientation};
            margin: {page.margin};
        }}

        body {{
            font-family: {font_family};
            font-weight: {font_weight};
            line-height: {line_height};
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            color: #333;
            background-color: #fff;
            font-size: {font_size};
        }}

        p {{
            margin-top: 0;
            margin-bottom: {paragraph};
        }}

        li {{
            margin-bottom: calc({paragraph} * 0.5);
        }}

        .math-block {{
            margin: {math_margin} 0;
            text-align: center;
            overflow-x: auto;
        }}

        .math-inline {{
            display: inline;
        }}

        pre {{
            background-color: #f6f8fa;
            border: 1px solid #e1e4e8;
            border-radius: 6px;
            padding: 16px;
            overflow-x: auto;
            font-family: 'SFMono-Regular', Consolas, 'Liberation Mono', Menlo, monospace;
            font-size: 14px;
            line-height: 1.45;
        }}

        code {{
            background-color: rgba(175, 184, 193, 0.2);
            border-radius: 6px;
            padding: 2px 4px;
            font-family: 'SFMono-Regular', Consolas, 'Liberation Mono', Menlo, monospace;
            font-size: 85%;
        }}

        pre code {{
            background-color: transparent;
            border-radius: 0;
            padding: 0;
            font-size: 100%;
        }}

        table {{
            border-collapse: collapse;
            margin: 25px 0;
            font-size: 0.9em;
            min-width: 400px;
        }}

        table thead tr {{
            background-color: #009879;
            color: #ffffff;
            text-align: left;
        }}

        table th,
        table td {{
            padding: 12px 15px;
            border: 1px solid #dddddd;
        }}

        table tbody tr:nth-of-type(even) {{
            background-color: #f3f3f3;
        }}

        blockquote {{
            border-left: 4px solid #dfe2e5;
            padding: 0 16px;
            color: #6a737d;
            background-color: #f6f8fa;
            margin: {paragraph} 0;
            line-height: {line_height};
        }}

        h1, h2, h3, h4, h5, h6 {{
            margin-top: calc({paragraph} * 1.5);
            margin-bottom: {paragraph};
            font-weight: 600;
            line-height: {line_height};
        }}

        h1, h2 {{
            border-bottom: 1px solid #eaecef;
            padding-bottom: 0.3em;
        }}

        h1 {{ font-size: 2em; }}
        h2 {{ font-size: 1.5em; }}

        a {{
            color: #0366d6;
            text-decoration: none;
        }}

        @media print {{
            body {{
                max-width: none;
                margin: 0;
                padding: 15mm;
                font-size: {_print_font_size(font_size)};
            }}

            .math-block, pre, table {{
                page-break-inside: avoid;
            }}

            pre {{
                white-space: pre-wrap;
            }}

            h1, h2, h3, h4, h5, h6 {{
                page-break-after: avoid;
            }}
        }}
"""


_AUTO_RENDER = r"""
    document.addEventListener("DOMContentLoaded", function() {
        try {
            if (typeof renderMathInElement !== 'undefined') {
                renderMathInElement(document.body, {
                    delimiters: [
                        {left: '$$', right: '$$', display: true},
                        {left: '$', right: '$', display: false},
                        {left: '\\(', right: '\\)', display: false},
                        {left: '\\[', right: '\\]', display: true}
                    ],
                    throwOnError: false
                });
            }
        } finally {
            var done = document.createElement("div");
            done.id = "render-complete";
            done.style.display = "none";
            document.body.appendChild(done);
        }
    });
"""


def html_document(
    fragment: str,
    *,
    title: str = "texmark",
    assets: KatexAssets | None = None,
    style: StyleOptions | None = None,
    page: PageOptions | None = None,
) -> str:
    """Wrap a rendered fragment in a complete, self-contained HTML page.

    Args:
        fragment: Output of texmark.render()
        title: Document title (HTML-escaped)
        assets: Inlined KaTeX assets (empty assets if None)
        style: Typography options
        page: Print page geometry

    Returns:
        The HTML document
    """
    assets = assets or KatexAssets()
    css = css_styles(style or StyleOptions(), page)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html_escape(title)}</title>
    <style>
{assets.css}
{css}
    </style>
    <script>
{assets.js}
    </script>
    <script>
{assets.auto_render_js}
    </script>
</head>
<body>
{fragment}
    <script>{_AUTO_RENDER}</script>
</body>
</html>
"""
