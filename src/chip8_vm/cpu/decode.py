"""Instruction decoder: splits a 16-bit word into nibbles and names the operation."""

from dataclasses import dataclass

from ..errors import UnimplementedOpcode


@dataclass(frozen=True)
class Instruction:
    """Decoded CHIP-8 instruction.

    ``mnemonic`` identifies the operation; the remaining fields are the
    operand slices of ``word`` (x = 2nd nibble, y = 3rd nibble, n = 4th
    nibble, kk = low byte, nnn = low 12 bits).
    """

    mnemonic: str
    word: int
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0


# 8xyN register-register ALU: N -> mnemonic
_ALU_MNEMONICS: dict[int, str] = {
    0x0: "LD.V", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD.V",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

# ExKK key skips: kk -> mnemonic
_KEY_MNEMONICS: dict[int, str] = {
    0x9E: "SKP", 0xA1: "SKNP",
}

# FxKK timer / index / memory ops: kk -> mnemonic
_F_MNEMONICS: dict[int, str] = {
    0x07: "LD.DT", 0x0A: "LD.K", 0x15: "SET.DT", 0x18: "SET.ST",
    0x1E: "ADD.I", 0x29: "LD.F", 0x33: "BCD", 0x55: "STORE", 0x65: "LOAD",
}

# Top nibble -> mnemonic, for the families selected by d1 alone
_SIMPLE_MNEMONICS: dict[int, str] = {
    0x1: "JP", 0x2: "CALL", 0x3: "SE", 0x4: "SNE", 0x6: "LD", 0x7: "ADD",
    0xA: "LD.I", 0xB: "JP.V0", 0xC: "RND", 0xD: "DRW",
}


def nibbles(word: int) -> tuple[int, int, int, int]:
    """Split a 16-bit word into its four nibbles, most significant first."""
    return (word >> 12) & 0xF, (word >> 8) & 0xF, (word >> 4) & 0xF, word & 0xF


def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word into an Instruction.

    Raises:
        UnimplementedOpcode: If the word matches no known instruction.
    """
    word &= 0xFFFF
    d1, d2, d3, d4 = nibbles(word)
    kk = word & 0xFF
    nnn = word & 0xFFF
    mnemonic: str | None = None

    if d1 == 0x0:
        if word == 0x0000:
            mnemonic = "NOP"
        elif word == 0x00E0:
            mnemonic = "CLS"
        elif word == 0x00EE:
            mnemonic = "RET"
    elif d1 in (0x5, 0x9):
        # Register compare: low nibble must be zero
        if d4 == 0x0:
            mnemonic = "SE.V" if d1 == 0x5 else "SNE.V"
    elif d1 == 0x8:
        mnemonic = _ALU_MNEMONICS.get(d4)
    elif d1 == 0xE:
        mnemonic = _KEY_MNEMONICS.get(kk)
    elif d1 == 0xF:
        mnemonic = _F_MNEMONICS.get(kk)
    else:
        mnemonic = _SIMPLE_MNEMONICS[d1]

    if mnemonic is None:
        raise UnimplementedOpcode(word)

    return Instruction(mnemonic=mnemonic, word=word, x=d2, y=d3, n=d4,
                       kk=kk, nnn=nnn)
