from __future__ import annotations
import re
from typing import List, Optional, Tuple

# ',' and '(' become separators, ')' is dropped: 'lw $t0, 4($sp)' -> 'lw $t0  4 $sp'
PUNCT_TABLE = str.maketrans({",": " ", "(": " ", ")": None})

WS_RE = re.compile(r"\s+")

def split_label(line: str) -> Tuple[Optional[str], str]:
    """Return (label, rest) splitting on the first ':', else (None, line)."""
    head, sep, rest = line.partition(":")
    if not sep:
        return None, line
    return head.strip(), rest

def normalize_punctuation(text: str) -> str:
    return text.translate(PUNCT_TABLE)

def tokenize(text: str) -> List[str]:
    """Whitespace-separated tokens of an operation, empty tokens discarded."""
    return [t for t in WS_RE.split(normalize_punctuation(text)) if t]
