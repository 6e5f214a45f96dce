"""Tests for code-fence stripping."""

import pytest

from resume_tuner.utils.fences import strip_code_fences

CLEAN = '<h1 class="text-3xl">JANE DOE</h1>\n<p>Berlin</p>'


class TestStripCodeFences:
    def test_html_fence(self):
        assert strip_code_fences(f"```html\n{CLEAN}\n```") == CLEAN

    def test_bare_fence(self):
        assert strip_code_fences(f"```\n{CLEAN}\n```") == CLEAN

    def test_surrounding_whitespace(self):
        assert strip_code_fences(f"  \n```html\n{CLEAN}\n```\n\n") == CLEAN

    def test_opening_fence_without_closing(self):
        assert strip_code_fences(f"```html\n{CLEAN}") == CLEAN

    def test_fence_not_at_start_is_kept(self):
        text = f"Here you go:\n```html\n{CLEAN}\n```"
        assert strip_code_fences(text) == text

    def test_trailing_fence_alone_is_kept(self):
        assert strip_code_fences(f"{CLEAN}\n```") == f"{CLEAN}\n```"

    @pytest.mark.parametrize(
        "text",
        [
            CLEAN,
            "<div>plain</div>",
            "",
            f"```html\n{CLEAN}\n```",
            f"```\n{CLEAN}\n```",
        ],
    )
    def test_idempotent(self, text):
        once = strip_code_fences(text)
        assert strip_code_fences(once) == once

    def test_clean_text_unchanged(self):
        assert strip_code_fences(CLEAN) == CLEAN
