"""IP refanging: turn defanged addresses from reports back into plain form."""

from __future__ import annotations

import re

# Notations that replace the separators of a defanged address
_DOT_RE = re.compile(r"\[\.\]|\[dot\]|\(dot\)|\(\.\)|\{\.\}", re.IGNORECASE)
_COLON_RE = re.compile(r"\[:\]|\[colon\]|\(:\)", re.IGNORECASE)

# A whole address wrapped in brackets, e.g. [8.8.8.8]
_WRAPPED_RE = re.compile(r"^\[([0-9A-Fa-f.:]+)\]$")


def refang_ip(text: str) -> str:
    """Replace defanged separator notations with real ones.

    Handles: [.] [dot] (dot) (.) {.} for IPv4 and [:] [colon] (:) for IPv6,
    plus a single pair of brackets around the whole address.
    """
    cleaned = _COLON_RE.sub(":", _DOT_RE.sub(".", text.strip()))
    wrapped = _WRAPPED_RE.match(cleaned)
    if wrapped:
        return wrapped.group(1)
    return cleaned
