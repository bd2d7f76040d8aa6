"""
OCR text cleanup.

Purpose:
- Collapse whitespace runs inside each line
- Trim every line and the whole result
- Keep at most one blank line between paragraphs

Does NOT:
- Join broken words
- Correct spelling or grammar
"""

import re

NO_TEXT_PLACEHOLDER = "(No text detected)"

_WS_RX = re.compile(r"\s+")


def normalize_space(s: str | None) -> str:
    return _WS_RX.sub(" ", (s or "").strip())


def clean_ocr_text(raw: str | None) -> str:
    if not raw:
        return ""

    lines = [normalize_space(ln) for ln in raw.split("\n")]

    kept = []
    for i, line in enumerate(lines):
        # a blank line directly after another blank line is dropped
        if line == "" and i > 0 and lines[i - 1] == "":
            continue
        kept.append(line)

    return "\n".join(kept).strip()


def clean_or_placeholder(raw: str | None) -> str:
    return clean_ocr_text(raw) or NO_TEXT_PLACEHOLDER
