from __future__ import annotations
from typing import Iterable, List, Sequence
from .utils import to_hex32, to_bin32
from .diagnostics import ImageOverflow

IMAGE_WORDS = 64

def pad_image(words: Sequence[int], image_words: int = IMAGE_WORDS) -> List[int]:
    """Completa con ceros hasta `image_words` palabras; un programa más largo es un error."""
    if len(words) > image_words:
        raise ImageOverflow(
            f"El programa ocupa {len(words)} palabras y la imagen sólo tiene {image_words}",
            hint="use --words para ampliar la imagen",
        )
    return list(words) + [0] * (image_words - len(words))

def to_hex_lines(words: Iterable[int]) -> List[str]:
    return [to_hex32(w) for w in words]

def to_bin_lines(words: Iterable[int]) -> List[str]:
    return [to_bin32(w) for w in words]

FORMATTERS = {
    "hex": to_hex_lines,
    "bin": to_bin_lines,
}

def write_lines(lines: Iterable[str], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
