'''
tabla de instrucciones MIPS soportadas (formato, opcode, funct)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Literal, Tuple

from .diagnostics import UnknownMnemonic

Format = Literal["R", "I", "J"]

@dataclass(frozen=True)
class ISpec:
    """Especificación de una instrucción.

    - itype: 'R', 'I' o 'J'
    - opcode: campo de 6 bits (bits 31..26)
    - funct: campo de 6 bits (bits 5..0); sólo tiene sentido en tipo R
    """
    itype: Format
    opcode: int
    funct: int = 0

OP_SPECIAL = 0b000000  # 0x00, tipo R
OP_J       = 0b000010  # 0x02
OP_BEQ     = 0b000100  # 0x04
OP_ADDI    = 0b001000  # 0x08
OP_LW      = 0b100011  # 0x23
OP_SW      = 0b101011  # 0x2B

SPEC: Dict[str, ISpec] = {
    # Tipo R
    "add":  ISpec("R", OP_SPECIAL, funct=0b100000),  # 32
    "sub":  ISpec("R", OP_SPECIAL, funct=0b100010),  # 34
    "and":  ISpec("R", OP_SPECIAL, funct=0b100100),  # 36
    "or":   ISpec("R", OP_SPECIAL, funct=0b100101),  # 37
    "slt":  ISpec("R", OP_SPECIAL, funct=0b101010),  # 42
    # Tipo I
    "addi": ISpec("I", OP_ADDI),
    "lw":   ISpec("I", OP_LW),
    "sw":   ISpec("I", OP_SW),
    "beq":  ISpec("I", OP_BEQ),
    # Tipo J
    "j":    ISpec("J", OP_J),
}

MNEMONICS: Tuple[str, ...] = tuple(SPEC)

def spec(mnemonic: str) -> ISpec:
    """Devuelve la especificación de un mnemónico (sensible a mayúsculas)."""
    if mnemonic not in SPEC:
        raise UnknownMnemonic(mnemonic, hint="soportados: " + ", ".join(MNEMONICS))
    return SPEC[mnemonic]
