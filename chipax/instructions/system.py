"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipax.state import EmulatorState
from chipax.decode import DecodedInstruction
from chipax.constants import STATUS_STACK_UNDERFLOW
from chipax.stack import pop, is_empty


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    def _return(state):
        stack, address = pop(state.stack)
        return state.replace(stack=stack, pc=address)

    return jax.lax.cond(
        is_empty(state.stack),
        lambda s: s.replace(status=jnp.asarray(STATUS_STACK_UNDERFLOW, dtype=jnp.uint8)),
        _return,
        state
    )


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions. 0NNN machine routines are ignored."""
    branch = jnp.where(instruction.raw == 0x00E0, 0, jnp.where(instruction.raw == 0x00EE, 1, 2))
    return jax.lax.switch(
        branch,
        [execute_clear_screen, execute_return, no_op],
        state, instruction
    )
