"""Split a 16-bit CHIP-8 word into its operand fields.

Words are laid out as nibbles ``O X Y N``: ``O`` selects the instruction
family, ``NN`` is the low byte and ``NNN`` the low twelve bits. Each family
reads only the fields it needs.
"""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Operand fields of one instruction word."""
    raw: int     # Whole word; the 0x0 family matches on it (00E0, 00EE)
    opcode: int  # Family nibble, index into the top-level dispatch table
    x: int       # VX register index
    y: int       # VY register index
    n: int       # Sprite height for DXYN, ALU sub-op for 8XYN
    nn: int      # Immediate for 3/4/6/7/C families, sub-op for E and F families
    nnn: int     # Address for 1NNN, 2NNN, ANNN, BNNN


def decode(instruction: int) -> DecodedInstruction:
    """Decode a word; works on Python ints and traced arrays alike."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction >> 12) & 0xF,
        x=(instruction >> 8) & 0xF,
        y=(instruction >> 4) & 0xF,
        n=instruction & 0xF,
        nn=instruction & 0xFF,
        nnn=instruction & 0xFFF,
    )
