"""CHIP-8 ALU operations (8xxx).

Every operation maps ``(vx, vy)`` to ``(result, flag, writes_flag)``. The
result is stored in VX first and the flag in VF afterwards, so when X is F
the flag wins. Bitwise operations leave VF alone.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.constants import FLAG_REGISTER


def _without_flag(result):
    return result, jnp.zeros((), dtype=jnp.uint8), jnp.array(False)


def _with_flag(result, flag):
    return result, jnp.astype(flag, jnp.uint8), jnp.array(True)


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return _without_flag(vy)


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return _without_flag(vx | vy)


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return _without_flag(vx & vy)


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return _without_flag(vx ^ vy)


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(vx, jnp.uint16) + jnp.astype(vy, jnp.uint16)
    return _with_flag(jnp.astype(result & 0xFF, jnp.uint8), result > 255)


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = 1 when there is no borrow."""
    return _with_flag(vx - vy, vx >= vy)


def alu_shift_right(vx, vy):
    """8XY6 - Shift right: VX >>= 1, VF = shifted-out bit."""
    return _with_flag(vx >> 1, vx & 1)


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when there is no borrow."""
    return _with_flag(vy - vx, vy >= vx)


def alu_shift_left(vx, vy):
    """8XYE - Shift left: VX <<= 1, VF = shifted-out bit."""
    return _with_flag(vx << 1, (vx >> 7) & 1)


# Sub-op nibble -> position in the operation table, -1 when undefined
_ALU_INDEX = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, -1, -1, -1, -1, -1, -1, 8, -1])


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]

    def _alu_shift_right(vx, vy):
        if not state.modern_shift:
            vx = vy
        return alu_shift_right(vx, vy)

    def _alu_shift_left(vx, vy):
        if not state.modern_shift:
            vx = vy
        return alu_shift_left(vx, vy)

    def _apply(state):
        result, flag, writes_flag = jax.lax.switch(
            _ALU_INDEX[instruction.n],
            [alu_set, alu_or, alu_and, alu_xor, alu_add,
             alu_sub_xy, _alu_shift_right, alu_sub_yx, _alu_shift_left],
            vx, vy
        )
        new_V = state.V.at[instruction.x].set(result)
        new_V = jnp.where(writes_flag, new_V.at[FLAG_REGISTER].set(flag), new_V)
        return state.replace(V=new_V)

    return jax.lax.cond(_ALU_INDEX[instruction.n] >= 0, _apply, lambda s: s, state)
