# src/mips_asm/parser.py
from __future__ import annotations
import re
from typing import List, Optional, Tuple

from .lexer import split_label, tokenize
from .ast import Instruction, Reg, Imm, Label, Operand
from .regs import DIGITS, REG_SIGIL, reg_num
from .isa import spec
from .utils import is_signed_nbit
from .diagnostics import AsmError, Diagnostic, MalformedImmediate, UnknownMnemonic

DEC_IMM_RE = re.compile(r"^-?[0-9]+$")

def _parse_imm(token: str) -> Imm:
    if not DEC_IMM_RE.match(token):
        raise MalformedImmediate(token, hint="se esperaba un entero decimal, p.ej. -4 o 100")
    value = int(token, 10)
    if not is_signed_nbit(value, 32):
        raise MalformedImmediate(token, hint="no cabe en un entero de 32 bits con signo")
    return Imm(value)

def classify_operand(token: str) -> Operand:
    """Clasifica un token por su primer carácter: '$' registro, dígito o '-'
    inmediato, cualquier otro una referencia a etiqueta."""
    if not token:
        raise AsmError("Operando vacío")
    first = token[0]
    if first == REG_SIGIL:
        return Reg(name=token, num=reg_num(token))
    if first in DIGITS or first == "-":
        return _parse_imm(token)
    # la etiqueta se valida al resolverla en el codificador
    return Label(token)

def parse_line(line: str, lineno: Optional[int] = None) -> Instruction:
    """Convierte una línea en Instruction o lanza AsmError (con la línea fijada)."""
    try:
        label, op_str = split_label(line.strip())
        tokens = tokenize(op_str)
        if not tokens:
            raise UnknownMnemonic("", hint="línea sin mnemónico (no se admiten líneas vacías)")
        mnemonic, op_tokens = tokens[0], tokens[1:]
        spec(mnemonic)
        operands = tuple(classify_operand(t) for t in op_tokens)
    except AsmError as ex:
        raise ex.at(lineno)
    return Instruction(mnemonic=mnemonic, operands=operands, label=label, line=lineno)

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[Instruction], List[Diagnostic]]:
    """
    Devuelve (instructions, diagnostics).

    Reglas:
      - Una instrucción por línea: '[etiqueta:] mnemónico op, op, ...'.
      - 'imm(base)' se admite en cargas/almacenes.
      - Sin comentarios ni líneas vacías: el primer error detiene el análisis
        y la lista de instrucciones devuelta queda vacía.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        # tras el último \n no hay otra línea
        lines.pop()
    program: List[Instruction] = []
    for lineno, raw in enumerate(lines, start=1):
        try:
            program.append(parse_line(raw, lineno))
        except AsmError as ex:
            return [], [ex.diagnostic.with_file(filename)]
    return program, []
