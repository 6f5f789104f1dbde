import pytest
from src.mips_asm.parser import parse, parse_line
from src.mips_asm.linker import build_label_table
from src.mips_asm.encoding import encode, encode_instruction, pack_r, pack_i, pack_j
from src.mips_asm.utils import to_hex32
from src.mips_asm.diagnostics import OperandShapeMismatch, UnresolvedLabel

def _pipe(src: str):
    program, diags = parse(src, filename="<mem>")
    assert not diags
    link = build_label_table(program)
    enc = encode(program, link.labels)
    assert enc.ok
    return [w.word for w in enc.words]

def _fields(word: int, widths) -> tuple:
    """Parte la palabra en campos de los anchos dados, de MSB a LSB."""
    out, shift = [], 32
    for w in widths:
        shift -= w
        out.append((word >> shift) & ((1 << w) - 1))
    return tuple(out)

def _one(line: str, labels=None, index=0) -> int:
    return encode_instruction(parse_line(line), index, labels or {})

def test_packers():
    assert pack_r(9, 10, 8, 32) == 0x012A4020
    assert pack_i(8, rs=0, rt=8, imm=-1) == 0x2008FFFF
    assert pack_j(2, 3) == 0x08000003

@pytest.mark.parametrize("line, word", [
    ("add $t0, $t1, $t2", 0x012A4020),
    ("add $t1, $t1, $t1", 0x01294820),
    ("sub $s0, $s1, $s2", 0x02328022),
    ("addi $t0, $0, 5",   0x20080005),
    ("addi $t0, $t0, -1", 0x2108FFFF),
    ("lw $t0, 4($sp)",    0x8FA80004),
    ("sw $ra, -8($sp)",   0xAFBFFFF8),
])
def test_single_words(line, word):
    assert to_hex32(_one(line)) == to_hex32(word)

def test_r_fields_destination_first():
    w = _one("slt $v0, $a0, $a1")
    assert _fields(w, (6, 5, 5, 5, 5, 6)) == (0, 4, 5, 2, 0, 42)

def test_immediate_is_truncated_not_rejected():
    big = _one("addi $t0, $t0, 70000")
    assert big == _one(f"addi $t0, $t0, {70000 % 65536}")
    assert big & 0xFFFF == 0x1170

SRC = """\
loop: addi $t0, $t0, -1
beq $t0, $0, done
j loop
done: add $t1, $t1, $t1
"""

def test_branch_forward_and_jump():
    words = _pipe(SRC)
    assert words == [0x2108FFFF, 0x11000001, 0x08000000, 0x01294820]

@pytest.mark.parametrize("index, target", [(1, 3), (5, 2), (2, 0), (0, 1), (4, 4)])
def test_branch_offset_is_relative_to_next_word(index, target):
    w = _one("beq $t0, $t1, L", labels={"L": target}, index=index)
    op, rs, rt, imm = _fields(w, (6, 5, 5, 16))
    assert (op, rs, rt) == (4, 8, 9)
    assert imm == (target - 1 - index) % 2 ** 16
    assert (imm - 0x10000 if imm & 0x8000 else imm) == target - 1 - index

def test_branch_to_next_instruction_is_zero():
    words = _pipe("beq $t0, $t1, next\nnext: add $t0, $t0, $t0\n")
    assert words[0] & 0xFFFF == 0

def test_backward_branch():
    words = _pipe("top: add $t0,$t0,$t0\nadd $t0,$t0,$t0\nbeq $t0, $t1, top\n")
    assert words[2] == 0x1109FFFD

def test_jump_uses_raw_index():
    words = _pipe("j end\nadd $t0,$t0,$t0\nadd $t0,$t0,$t0\nend: j end\n")
    assert words[0] == 0x08000003
    assert words[3] == 0x08000003

@pytest.mark.parametrize("line", [
    "add $t0, $t1, 5",
    "add $t0, $t1",
    "and $t0, $t1, x",
    "addi $t0, 5, 6",
    "lw $t0, $sp",
    "beq $t0, x, y",
    "j 3",
    "j $ra",
    "j a b",
])
def test_shape_mismatch(line):
    with pytest.raises(OperandShapeMismatch):
        _one(line, labels={"x": 0, "y": 0, "a": 0, "b": 0})

@pytest.mark.parametrize("line", ["beq $t0, $t1, nowhere", "j nowhere"])
def test_unresolved_label(line):
    with pytest.raises(UnresolvedLabel):
        _one(line)

def test_encode_stops_at_first_error_and_keeps_prefix():
    program, _ = parse("add $t0,$t1,$t2\nj nowhere\nadd $t0,$t1,$t2\n")
    enc = encode(program, build_label_table(program).labels)
    assert not enc.ok
    assert [w.word for w in enc.words] == [0x012A4020]
    assert enc.diagnostics[0].line == 2
    assert "nowhere" in enc.diagnostics[0].message
