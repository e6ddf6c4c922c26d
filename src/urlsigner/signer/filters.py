"""Filename filters applied to resolved resources."""

from __future__ import annotations

import re
from typing import Iterable


def strip_words(text: str, words: Iterable[str]) -> str:
    """Remove each word, with an optional preceding hyphen, anywhere in ``text``.

    Words are applied in order and matched literally, repeating the pass until
    nothing changes so that removals which expose a new occurrence are also
    stripped. A word that also occurs inside a legitimate part of the name is
    stripped there too.
    """
    patterns = [re.compile("-?" + re.escape(word)) for word in words if word]
    while True:
        stripped = text
        for pattern in patterns:
            stripped = pattern.sub("", stripped)
        if stripped == text:
            return stripped
        text = stripped
