'''
diagnósticos (línea/archivo, severidad) y jerarquía de errores del ensamblador
'''

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Literal

Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Problema detectado durante el ensamblado.

    La ubicación (archivo, línea, columna) es opcional; `hint` es una pista
    breve para corregir el fuente.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def with_file(self, file: Optional[str]) -> "Diagnostic":
        if file is None or self.file is not None:
            return self
        return replace(self, file=file)

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

def warning(message: str, *, line: int | None = None, col: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, col, hint, file)

def note(message: str, *, line: int | None = None, col: int | None = None,
         file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo nota."""
    return Diagnostic("nota", message, line, col, hint, file)

def has_errors(diags: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diags)

# ---- Errores fatales ----

class AsmError(ValueError):
    """Error fatal de ensamblado; lleva el diagnóstico que lo describe."""

    def __init__(self, message: str, *, line: int | None = None,
                 file: str | None = None, hint: str | None = None):
        super().__init__(message)
        self.diagnostic = error(message, line=line, file=file, hint=hint)

    def at(self, line: int | None) -> "AsmError":
        """Fija la línea del diagnóstico si aún no la tiene."""
        if line is not None and self.diagnostic.line is None:
            self.diagnostic = replace(self.diagnostic, line=line)
        return self

class UnknownMnemonic(AsmError):
    def __init__(self, name: str, **kw):
        super().__init__(f"Mnemónico desconocido: '{name}'", **kw)
        self.name = name

class InvalidRegister(AsmError):
    def __init__(self, token: str, **kw):
        super().__init__(f"Registro inválido: {token}", **kw)
        self.token = token

class MalformedImmediate(AsmError):
    def __init__(self, token: str, **kw):
        super().__init__(f"Inmediato inválido: {token}", **kw)
        self.token = token

class OperandShapeMismatch(AsmError):
    pass

class UnresolvedLabel(AsmError):
    def __init__(self, name: str, **kw):
        super().__init__(f"Etiqueta no definida: {name}", **kw)
        self.name = name

class DuplicateLabel(AsmError):
    def __init__(self, name: str, **kw):
        super().__init__(f"Etiqueta redefinida: {name}", **kw)
        self.name = name

class ImageOverflow(AsmError):
    pass

class FileAccessError(AsmError):
    pass
