"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chipax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_REGISTERS, NUM_KEYS,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, STATUS_OK,
)


class StackState(PyTreeNode):
    """Stack state for subroutine calls."""
    data: jnp.ndarray
    pointer: jnp.ndarray


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    The quirk flag ``modern_shift`` is static metadata: it is fixed when the
    state is created and selects whether 8XY6/8XYE shift VX in place (modern)
    or first copy VY into VX (legacy).
    """
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    awaiting_key: jnp.ndarray
    key_register: jnp.ndarray
    status: jnp.ndarray
    modern_shift: bool = field(pytree_node=False, default=False)


def create_state(rng: jax.Array = jax.random.PRNGKey(0), modern_shift: bool = False) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)
    return EmulatorState(
        rng=rng,
        memory=memory,
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_),
        stack=StackState(
            data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16),
            pointer=jnp.zeros((), dtype=jnp.uint8),
        ),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        awaiting_key=jnp.zeros((), dtype=jnp.bool_),
        key_register=jnp.zeros((), dtype=jnp.uint8),
        status=jnp.asarray(STATUS_OK, dtype=jnp.uint8),
        modern_shift=modern_shift,
    )


def reset(state: EmulatorState) -> EmulatorState:
    """Return a freshly reset state keeping the PRNG key and quirk flag."""
    return create_state(state.rng, modern_shift=state.modern_shift)


def _check_key(code: int) -> int:
    if not 0 <= code < NUM_KEYS:
        raise ValueError(f"Key code must be in [0x0, 0xF], got {code!r}")
    return code


def set_key_down(state: EmulatorState, code: int) -> EmulatorState:
    """Mark a key as pressed.

    If an FX0A instruction is waiting for input, the key code is written to
    the waiting register and execution resumes on the next step.
    """
    code = _check_key(code)
    resumed_V = state.V.at[state.key_register].set(jnp.asarray(code, dtype=jnp.uint8))
    return state.replace(
        keypad=state.keypad.at[code].set(True),
        V=jnp.where(state.awaiting_key, resumed_V, state.V),
        awaiting_key=jnp.zeros((), dtype=jnp.bool_),
    )


def set_key_up(state: EmulatorState, code: int) -> EmulatorState:
    """Mark a key as released."""
    code = _check_key(code)
    return state.replace(keypad=state.keypad.at[code].set(False))
