"""Tests for ContextVar-based render configuration."""

from __future__ import annotations

from threading import Thread

import pytest

from texmark import (
    MathMarkdown,
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)


class TestRenderConfigDataclass:
    def test_default_values(self) -> None:
        config = RenderConfig()
        assert config.tables_enabled is True
        assert config.strikethrough_enabled is True
        assert config.footnotes_enabled is True
        assert config.task_lists_enabled is True
        assert config.protect_code is True
        assert config.escape_math is False
        assert config.block_class == "math-block"
        assert config.display_class == "katex-display"
        assert config.inline_class == "math-inline"

    def test_immutability(self) -> None:
        config = RenderConfig()
        with pytest.raises(AttributeError):
            config.tables_enabled = False  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = RenderConfig.from_dict({"escape_math": True, "unknown_key": "ignored"})
        assert config.escape_math is True
        assert config.tables_enabled is True


class TestContextVarFunctions:
    def teardown_method(self) -> None:
        reset_render_config()

    def test_default_config(self) -> None:
        assert get_render_config() == RenderConfig()

    def test_set_and_reset(self) -> None:
        set_render_config(RenderConfig(inline_class="x"))
        assert get_render_config().inline_class == "x"
        reset_render_config()
        assert get_render_config().inline_class == "math-inline"

    def test_context_manager_restores(self) -> None:
        set_render_config(RenderConfig(inline_class="outer"))
        with render_config_context(RenderConfig(inline_class="inner")):
            assert get_render_config().inline_class == "inner"
        assert get_render_config().inline_class == "outer"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), render_config_context(RenderConfig(inline_class="inner")):
            raise RuntimeError("boom")
        assert get_render_config().inline_class == "math-inline"

    def test_math_markdown_does_not_leak_config(self) -> None:
        MathMarkdown(config=RenderConfig(inline_class="scoped"))("$x$")
        assert get_render_config().inline_class == "math-inline"


class TestThreadIsolation:
    def test_threads_see_their_own_config(self) -> None:
        seen: dict[int, str] = {}

        def worker(n: int) -> None:
            set_render_config(RenderConfig(inline_class=f"t{n}"))
            seen[n] = get_render_config().inline_class

        threads = [Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen == {n: f"t{n}" for n in range(8)}
        assert get_render_config().inline_class == "math-inline"
