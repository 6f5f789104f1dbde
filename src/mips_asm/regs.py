'''
tabla de nombres de registro MIPS ($t0, $sp, ...) e índices 0..31
'''

from __future__ import annotations
from typing import Dict, Tuple

from .diagnostics import InvalidRegister

REG_SIGIL = "$"
DIGITS = "0123456789"

# Alias con nombre propio
ALIASES: Dict[str, int] = {
    "$0": 0, "$at": 1,
    "$gp": 28, "$sp": 29, "$fp": 30, "$ra": 31,
}

# prefijo -> (base, último dígito admitido)
PREFIXES: Dict[str, Tuple[int, int]] = {
    "v": (2, 1),
    "a": (4, 3),
    "t": (8, 7),
    "s": (16, 9),
    "k": (26, 1),
}

def _prefixed(prefix: str, n: int) -> int:
    base, _ = PREFIXES[prefix]
    if prefix == "s" and n >= 8:
        # s8/s9 caen en 32/33 y se rechazan más abajo
        return n + 24
    return n + base

def reg_num(token: str) -> int:
    """Devuelve el índice 0..31 del registro o lanza InvalidRegister."""
    if token in ALIASES:
        return ALIASES[token]
    if len(token) != 3 or not token.startswith(REG_SIGIL):
        raise InvalidRegister(token)
    prefix, digit = token[1], token[2]
    if prefix not in PREFIXES or digit not in DIGITS:
        raise InvalidRegister(token)
    n = int(digit)
    if n > PREFIXES[prefix][1]:
        raise InvalidRegister(token, hint=f"${prefix} admite dígitos 0..{PREFIXES[prefix][1]}")
    num = _prefixed(prefix, n)
    if not 0 <= num <= 31:
        raise InvalidRegister(token, hint="el índice resultante no está en 0..31")
    return num

def is_reg(token: str) -> bool:
    """Indica si el token nombra un registro válido."""
    try:
        reg_num(token)
        return True
    except InvalidRegister:
        return False
