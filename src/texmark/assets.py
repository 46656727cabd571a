"""Local KaTeX assets for self-contained HTML pages.

Expected layout under the assets directory::

    katex/katex.min.css
    katex/katex.min.js
    katex/contrib/auto-render.min.js
    katex/fonts/*.woff2 | *.woff | *.ttf

Fonts referenced by the stylesheet as ``url(fonts/NAME)`` are inlined as
base64 data URLs so the page needs nothing beside itself. A missing file is
logged and replaced by an empty string: the page still builds, math just
stays as raw TeX.

"""

from __future__ import annotations

import base64
import os
import re
from dataclasses import dataclass
from pathlib import Path

from texmark.errors import AssetError
from texmark.utils.logger import get_logger

logger = get_logger(__name__)

ASSETS_ENV_VAR = "TEXMARK_ASSETS"

_FONT_URL = re.compile(r"url\(fonts/([^)]+)\)")


@dataclass(frozen=True, slots=True)
class KatexAssets:
    """KaTeX stylesheet and scripts, ready to inline."""

    css: str = ""
    js: str = ""
    auto_render_js: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.css and self.js and self.auto_render_js)


def font_mime_type(filename: str) -> str:
    if filename.endswith(".woff2"):
        return "font/woff2"
    if filename.endswith(".woff"):
        return "font/woff"
    return "font/ttf"


def resolve_assets_dir(explicit: str | os.PathLike[str] | None = None) -> Path:
    """Pick the assets directory.

    Order: ``explicit``, then the ``TEXMARK_ASSETS`` environment variable,
    then ``./assets``.

    Raises:
        AssetError: ``explicit`` was given but is not a directory
    """
    if explicit is not None:
        path = Path(explicit)
        if not path.is_dir():
            raise AssetError(str(path), "assets directory does not exist")
        return path
    from_env = os.environ.get(ASSETS_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / "assets"


def _read_text(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Could not read %s (%s): %s", what, path, e)
        return ""


def inline_fonts(css: str, fonts_dir: Path) -> str:
    """Replace each readable ``url(fonts/NAME)`` with a data URL."""

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            data = (fonts_dir / name).read_bytes()
        except OSError:
            logger.debug("Font %s not found in %s; keeping reference", name, fonts_dir)
            return match.group(0)
        encoded = base64.b64encode(data).decode("ascii")
        return f"url(data:{font_mime_type(name)};base64,{encoded})"

    return _FONT_URL.sub(replace, css)


def load_katex_assets(assets_dir: str | os.PathLike[str]) -> KatexAssets:
    """Load the KaTeX stylesheet (fonts inlined) and scripts.

    Args:
        assets_dir: Directory containing ``katex/``

    Returns:
        KatexAssets; missing pieces are empty strings
    """
    katex_dir = Path(assets_dir) / "katex"
    css = _read_text(katex_dir / "katex.min.css", "KaTeX CSS")
    if css:
        css = inline_fonts(css, katex_dir / "fonts")
    assets = KatexAssets(
        css=css,
        js=_read_text(katex_dir / "katex.min.js", "KaTeX JS"),
        auto_render_js=_read_text(katex_dir / "contrib" / "auto-render.min.js", "KaTeX auto-render JS"),
    )
    if assets.complete:
        logger.debug("Loaded KaTeX assets from %s", katex_dir)
    return assets
