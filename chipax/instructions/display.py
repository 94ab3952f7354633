"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, MAX_SPRITE_HEIGHT, ADDRESS_MASK, FLAG_REGISTER,
)

# Pre-computed sprite-local coordinate grids, shape (rows, columns)
rows, cols = jnp.meshgrid(jnp.arange(MAX_SPRITE_HEIGHT), jnp.arange(SPRITE_WIDTH), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Each sprite pixel wraps around the screen edges on its own, so a sprite
    drawn near the right border continues on the left one.
    """
    origin_x = state.V[instruction.x]
    origin_y = state.V[instruction.y]

    sprite_bytes = state.memory[(state.I + jnp.arange(MAX_SPRITE_HEIGHT)) & ADDRESS_MASK]
    bits = ((sprite_bytes[:, None] >> (SPRITE_WIDTH - 1 - cols)) & 1) == 1
    bits = bits & (rows < instruction.n)

    target_x = (origin_x + cols) % SCREEN_WIDTH
    target_y = (origin_y + rows) % SCREEN_HEIGHT
    sprite = jnp.zeros_like(state.display).at[target_x, target_y].set(bits)

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
