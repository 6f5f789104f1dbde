'''
 bit-twiddling (u32, máscaras, campos, formatos de texto)
'''

from __future__ import annotations

U32_MASK = 0xFFFFFFFF

def u32(x: int) -> int:
    """Fuerza el valor al rango de 32 bits sin signo."""
    return x & U32_MASK

def mask(x: int, bits: int) -> int:
    """Conserva los 'bits' bits bajos de x (complemento a dos si es negativo)."""
    if bits <= 0:
        raise ValueError("bits debe ser positivo")
    return x & ((1 << bits) - 1)

def is_signed_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [-(2^(n-1)), 2^(n-1)-1]."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    lo = -(1 << (n - 1))
    hi = (1 << (n - 1)) - 1
    return lo <= x <= hi

def to_bin32(x: int) -> str:
    return format(u32(x), "032b")

def to_hex32(x: int, *, prefix: bool = False) -> str:
    """Ocho dígitos hexadecimales en minúscula, con o sin prefijo 0x."""
    s = format(u32(x), "08x")
    return ("0x" + s) if prefix else s
