'''
dataclases del programa (Instruction y operandos tipados)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union

# ---- Operandos ----

@dataclass(frozen=True)
class Reg:
    """Registro con su nombre en el fuente ('$t0') y su índice 0..31."""
    name: str
    num: int

@dataclass(frozen=True)
class Imm:
    """Inmediato decimal con signo."""
    value: int

@dataclass(frozen=True)
class Label:
    """Referencia a una etiqueta; se resuelve al codificar."""
    name: str

Operand = Union[Reg, Imm, Label]

# ---- Instrucciones ----

@dataclass(frozen=True)
class Instruction:
    """Una línea del fuente: etiqueta opcional, mnemónico y operandos en orden."""
    mnemonic: str
    operands: Tuple[Operand, ...]
    label: Optional[str] = None
    line: Optional[int] = None

    def kinds(self) -> Tuple[type, ...]:
        """Forma de los operandos, p.ej. (Reg, Reg, Imm)."""
        return tuple(type(op) for op in self.operands)
