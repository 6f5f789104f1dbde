from __future__ import annotations
import argparse, sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .ast import Instruction
from .parser import parse
from .linker import build_label_table
from .encoding import Encoded, encode
from .diagnostics import Diagnostic, FileAccessError, ImageOverflow, has_errors
from .writers import FORMATTERS, IMAGE_WORDS, pad_image, write_lines

@dataclass(frozen=True)
class AssembleResult:
    program: List[Instruction] = field(default_factory=list)
    labels: Dict[str, int] = field(default_factory=dict)
    words: List[Encoded] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

    def image(self, image_words: int = IMAGE_WORDS) -> List[int]:
        """Palabras codificadas completadas con ceros hasta `image_words`."""
        return pad_image([w.word for w in self.words], image_words)

def assemble_text(text: str, *, filename: Optional[str] = None,
                  strict_labels: bool = False) -> AssembleResult:
    """Parsea, construye la tabla de etiquetas y codifica.

    El primer error detiene el proceso; los diagnósticos acumulados
    (advertencias incluidas) se devuelven en el resultado."""
    program, diags = parse(text, filename=filename)
    if has_errors(diags):
        return AssembleResult(diagnostics=diags)

    link = build_label_table(program, strict=strict_labels)
    diags = diags + [d.with_file(filename) for d in link.diagnostics]
    if not link.ok:
        return AssembleResult(program=program, diagnostics=diags)

    enc = encode(program, link.labels)
    diags = diags + [d.with_file(filename) for d in enc.diagnostics]
    return AssembleResult(program=program, labels=link.labels, words=enc.words, diagnostics=diags)

def _word_count(tok: str) -> int:
    try:
        n = int(tok, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"número de palabras inválido: {tok}")
    if n < 0:
        raise argparse.ArgumentTypeError("el número de palabras no puede ser negativo")
    return n

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Ensamblador MIPS reducido (imagen de memoria en hexadecimal)")
    ap.add_argument("source", nargs="?", help="archivo de entrada, una instrucción por línea")
    ap.add_argument("-o", "--output", help="escribir la imagen en este archivo en vez de stdout")
    ap.add_argument("--format", choices=sorted(FORMATTERS), default="hex",
                    help="hex: 8 dígitos por palabra; bin: 32 bits en ASCII")
    ap.add_argument("--words", type=_word_count, default=IMAGE_WORDS,
                    help=f"tamaño de la imagen en palabras (por defecto {IMAGE_WORDS})")
    ap.add_argument("--strict-labels", action="store_true",
                    help="tratar una etiqueta redefinida como error")
    args = ap.parse_args(argv)

    if args.source is None:
        print(f"{ap.prog} [file]")
        return 0

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        reason = getattr(ex, "strerror", None) or ex
        print(FileAccessError(f"no pude leer {args.source}: {reason}").diagnostic, file=sys.stderr)
        return 2

    result = assemble_text(text, filename=args.source, strict_labels=args.strict_labels)
    for d in result.diagnostics:
        print(d, file=sys.stderr)
    if not result.ok:
        return 1

    try:
        image = result.image(args.words)
    except ImageOverflow as ex:
        print(ex.diagnostic.with_file(args.source), file=sys.stderr)
        return 1

    lines = FORMATTERS[args.format](image)
    if args.output is None:
        for line in lines:
            print(line)
        return 0

    try:
        write_lines(lines, args.output)
    except OSError as ex:
        print(f"ERROR al escribir {args.output}: {ex}", file=sys.stderr)
        return 3
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
