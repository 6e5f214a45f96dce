"""Strip markdown code fences some models wrap their output in."""

from __future__ import annotations

FENCE = "```"
HTML_FENCE = "```html"


def strip_code_fences(text: str) -> str:
    """Remove a leading ```html or ``` marker and its closing ```.

    The tagged marker is tried first, then the bare one, each only at the
    start of the trimmed text. Text without a leading fence is only trimmed,
    so the function is idempotent on clean output.
    """
    text = text.strip()
    for marker in (HTML_FENCE, FENCE):
        if text.startswith(marker):
            text = text[len(marker):]
            if text.endswith(FENCE):
                text = text[: -len(FENCE)]
            break
    return text.strip()
