"""ContextVar-based render configuration for texmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A MathMarkdown instance builds its config once and installs it for the
duration of each call; lower layers read it with get_render_config().

Usage:
    # Through the high-level API
    md = MathMarkdown(config=RenderConfig(footnotes_enabled=False))
    html = md("Euler: $e^{i\\pi} + 1 = 0$")

    # Or scoped by hand
    with render_config_context(RenderConfig(escape_math=True)):
        html = render(source)

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent
    storage, so no locks are needed.

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        tables_enabled: Enable GFM tables in the markup renderer
        strikethrough_enabled: Enable ~~strikethrough~~
        footnotes_enabled: Enable [^ref] footnotes
        task_lists_enabled: Enable - [ ] task list items
        protect_code: Do not look for math inside code blocks and code spans
        escape_math: HTML-escape math content inside its wrapper
        block_class: Class of the outer display-math container
        display_class: Class of the inner display-math span
        inline_class: Class of the inline-math span

    """

    tables_enabled: bool = True
    strikethrough_enabled: bool = True
    footnotes_enabled: bool = True
    task_lists_enabled: bool = True
    protect_code: bool = True
    escape_math: bool = False
    block_class: str = "math-block"
    display_class: str = "katex-display"
    inline_class: str = "math-inline"

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RenderConfig":
        """Create RenderConfig from a dictionary, ignoring unknown keys.

        Example:
            >>> RenderConfig.from_dict({"tables_enabled": False, "bogus": 1}).tables_enabled
            False

        """
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in valid_fields})


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RenderConfig = RenderConfig()

_render_config: ContextVar[RenderConfig] = ContextVar(
    "render_config",
    default=_DEFAULT_CONFIG,
)


def get_render_config() -> RenderConfig:
    """Get the active render configuration for this thread/context."""
    return _render_config.get()


def set_render_config(config: RenderConfig) -> None:
    """Set the render configuration for the current context."""
    _render_config.set(config)


def reset_render_config() -> None:
    """Reset to the module-level default configuration."""
    _render_config.set(_DEFAULT_CONFIG)


@contextmanager
def render_config_context(config: RenderConfig) -> Iterator[None]:
    """Install ``config`` for the duration of a ``with`` block.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with render_config_context(RenderConfig(inline_class="m")):
        ...     get_render_config().inline_class
        'm'

    """
    previous = _render_config.get()
    _render_config.set(config)
    try:
        yield
    finally:
        _render_config.set(previous)


__all__ = [
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
]
