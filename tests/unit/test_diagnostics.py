from src.mips_asm.diagnostics import error, warning, has_errors, UnresolvedLabel

def test_error_str():
    d = error("Etiqueta no definida: fin", line=12, file="prog.asm", hint="defina 'fin:'")
    s = str(d)
    assert "prog.asm:12:" in s
    assert "ERROR: Etiqueta no definida: fin" in s
    assert "(pista: defina 'fin:')" in s

def test_has_errors_ignores_warnings():
    assert not has_errors([warning("Etiqueta redefinida: x")])
    assert has_errors([warning("w"), error("e")])

def test_asm_error_line_and_file():
    ex = UnresolvedLabel("fin").at(3).at(7)
    assert ex.diagnostic.line == 3
    d = ex.diagnostic.with_file("a.s").with_file("b.s")
    assert str(d) == "a.s:3: ERROR: Etiqueta no definida: fin"
