"""Tests for detect_grammar()."""

import pytest

from pincel import Grammar, detect_grammar


class TestContentSignals:
    @pytest.mark.parametrize(
        "content",
        [
            'npm install pulse-js',
            "npx create-pulse app",
            "cd my-app\nnpm run dev",
        ],
    )
    def test_shell_commands(self, content: str) -> None:
        assert detect_grammar(content) is Grammar.SHELL

    @pytest.mark.parametrize(
        "content",
        [
            '@page "/"',
            "state {\n  count: 0\n}",
            "const x = 1\nview {\n}",
        ],
    )
    def test_pulse_markers(self, content: str) -> None:
        assert detect_grammar(content) is Grammar.PULSE

    def test_shell_prefix_only_at_start(self) -> None:
        assert detect_grammar("  npm install") is Grammar.JAVASCRIPT
        assert detect_grammar("x = 1\nnpm install") is Grammar.JAVASCRIPT

    def test_content_overrides_header(self) -> None:
        assert detect_grammar("npm run dev", header="app.pulse") is Grammar.SHELL
        assert detect_grammar("state {", header="styles.css") is Grammar.PULSE


class TestHeader:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("app.pulse", Grammar.PULSE),
            ("styles.css", Grammar.PLAIN),
            ("Terminal", Grammar.SHELL),
            ("BASH", Grammar.SHELL),
            ("vite.config.js", Grammar.JAVASCRIPT),
        ],
    )
    def test_header_decides(self, header: str, expected: Grammar) -> None:
        assert detect_grammar("x = 1", header=header) is expected

    def test_unrecognized_header_uses_default(self) -> None:
        assert detect_grammar("x = 1", header="README") is Grammar.JAVASCRIPT

    def test_empty_header_ignored(self) -> None:
        assert detect_grammar("x = 1", header="") is Grammar.JAVASCRIPT


class TestDefault:
    def test_default_is_javascript(self) -> None:
        assert detect_grammar("let y = 2") is Grammar.JAVASCRIPT

    def test_custom_default(self) -> None:
        assert detect_grammar("let y = 2", default=Grammar.PLAIN) is Grammar.PLAIN

    def test_empty_content(self) -> None:
        assert detect_grammar("") is Grammar.JAVASCRIPT
