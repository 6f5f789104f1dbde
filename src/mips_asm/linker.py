# src/mips_asm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence

from .ast import Instruction
from .diagnostics import Diagnostic, DuplicateLabel, has_errors, note, warning

@dataclass(frozen=True)
class LinkResult:
    labels: Dict[str, int]       # etiqueta -> índice de instrucción
    diagnostics: List[Diagnostic]

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

def build_label_table(program: Sequence[Instruction], *, strict: bool = False) -> LinkResult:
    """Recorre el programa una vez y asocia cada etiqueta a su índice.

    Una redefinición sobrescribe la entrada anterior (gana la última) y deja
    una advertencia; con strict=True es un error y la tabla queda vacía.
    """
    labels: Dict[str, int] = {}
    diags: List[Diagnostic] = []
    for index, ins in enumerate(program):
        if ins.label is None:
            continue
        if ins.label in labels:
            prev = note(f"definición anterior de {ins.label}", line=program[labels[ins.label]].line)
            if strict:
                ex = DuplicateLabel(ins.label, line=ins.line)
                return LinkResult(labels={}, diagnostics=diags + [ex.diagnostic, prev])
            diags.append(warning(
                f"Etiqueta redefinida: {ins.label} (índice {labels[ins.label]} -> {index})",
                line=ins.line,
                hint="se usa la última definición",
            ))
            diags.append(prev)
        labels[ins.label] = index
    return LinkResult(labels=labels, diagnostics=diags)
