# src/mips_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .ast import Instruction, Reg, Imm, Label, Operand
from .isa import spec as isa_spec
from .utils import u32, mask
from .diagnostics import (
    AsmError, Diagnostic, OperandShapeMismatch, UnresolvedLabel, has_errors,
)

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int      # u32
    index: int     # dirección (en palabras) de esta instrucción
    line: Optional[int]
    mnemonic: str

@dataclass(frozen=True)
class EncodeResult:
    words: List[Encoded]
    diagnostics: List[Diagnostic]

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

# ---------------- Empaquetado de campos ----------------
# bit 31 = MSB

def pack_r(rs: int, rt: int, rd: int, funct: int, *, opcode: int = 0, shamt: int = 0) -> int:
    return u32(mask(opcode, 6) << 26 |
               mask(rs, 5)     << 21 |
               mask(rt, 5)     << 16 |
               mask(rd, 5)     << 11 |
               mask(shamt, 5)  << 6  |
               mask(funct, 6))

def pack_i(opcode: int, rs: int, rt: int, imm: int) -> int:
    # imm fuera de 16 bits se trunca en silencio (complemento a dos)
    return u32(mask(opcode, 6) << 26 |
               mask(rs, 5)     << 21 |
               mask(rt, 5)     << 16 |
               mask(imm, 16))

def pack_j(opcode: int, address: int) -> int:
    return u32(mask(opcode, 6) << 26 | mask(address, 26))

# ---------------- Helpers semánticos ----------------

def _shape(ops: Sequence[Operand]) -> str:
    return "(" + ", ".join(type(op).__name__ for op in ops) + ")"

def _resolve(label: Label, labels: Dict[str, int]) -> int:
    if label.name not in labels:
        raise UnresolvedLabel(label.name)
    return labels[label.name]

def _encode_r(ins: Instruction) -> int:
    sp = isa_spec(ins.mnemonic)
    ops = ins.operands
    if len(ops) == 3 and all(isinstance(op, Reg) for op in ops):
        rd, rs, rt = ops
        return pack_r(rs.num, rt.num, rd.num, sp.funct, opcode=sp.opcode)
    raise OperandShapeMismatch(
        f"{ins.mnemonic} espera 3 registros (rd, rs, rt), obtuvo {_shape(ops)}",
        hint=f"{ins.mnemonic} $rd, $rs, $rt",
    )

def _encode_i(ins: Instruction, index: int, labels: Dict[str, int]) -> int:
    sp = isa_spec(ins.mnemonic)
    ops = ins.operands
    if len(ops) == 3:
        a, b, c = ops
        # addi $rt, $rs, im
        if isinstance(a, Reg) and isinstance(b, Reg) and isinstance(c, Imm):
            return pack_i(sp.opcode, rs=b.num, rt=a.num, imm=c.value)
        # lw $rt, im($rs)  ->  $rt im $rs
        if isinstance(a, Reg) and isinstance(b, Imm) and isinstance(c, Reg):
            return pack_i(sp.opcode, rs=c.num, rt=a.num, imm=b.value)
        # beq $rs, $rt, etiqueta: desplazamiento en palabras respecto a la siguiente
        if isinstance(a, Reg) and isinstance(b, Reg) and isinstance(c, Label):
            target = _resolve(c, labels)
            return pack_i(sp.opcode, rs=a.num, rt=b.num, imm=target - 1 - index)
    raise OperandShapeMismatch(
        f"{ins.mnemonic}: forma de operandos no admitida {_shape(ops)}",
        hint="formas válidas: $rt, $rs, imm | $rt, imm($rs) | $rs, $rt, etiqueta",
    )

def _encode_j(ins: Instruction, labels: Dict[str, int]) -> int:
    sp = isa_spec(ins.mnemonic)
    ops = ins.operands
    if len(ops) == 1 and isinstance(ops[0], Label):
        # índice de instrucción sin desplazar (no es dirección en bytes)
        return pack_j(sp.opcode, _resolve(ops[0], labels))
    raise OperandShapeMismatch(
        f"{ins.mnemonic} espera una etiqueta, obtuvo {_shape(ops)}",
        hint=f"{ins.mnemonic} etiqueta",
    )

# ---------------- Codificador principal ----------------

def encode_instruction(ins: Instruction, index: int, labels: Dict[str, int]) -> int:
    """Palabra de 32 bits de `ins`, situada en `index`; lanza AsmError."""
    try:
        itype = isa_spec(ins.mnemonic).itype
        if itype == "R":
            return _encode_r(ins)
        if itype == "I":
            return _encode_i(ins, index, labels)
        if itype == "J":
            return _encode_j(ins, labels)
        raise AsmError(f"Tipo de instrucción no soportado: {itype}")
    except AsmError as ex:
        raise ex.at(ins.line)

def encode(program: Sequence[Instruction], labels: Dict[str, int]) -> EncodeResult:
    """Codifica el programa en orden; se detiene en el primer error.

    Las palabras ya codificadas se conservan en el resultado.
    """
    words: List[Encoded] = []
    for index, ins in enumerate(program):
        try:
            word = encode_instruction(ins, index, labels)
        except AsmError as ex:
            return EncodeResult(words=words, diagnostics=[ex.diagnostic])
        words.append(Encoded(word=word, index=index, line=ins.line, mnemonic=ins.mnemonic))
    return EncodeResult(words=words, diagnostics=[])
