"""Main CHIP-8 emulator execution engine."""

from functools import partial

import jax
import jax.lax
import jax.numpy as jnp
import numpy as np
from chipax.state import EmulatorState
from chipax.decode import decode
from chipax.constants import PROGRAM_START, MAX_PROGRAM_SIZE, MAX_PC, STATUS_OK, STATUS_OUT_OF_BOUNDS_FETCH
from chipax.errors import ProgramTooLarge
from chipax.instructions.system import execute_system_instruction
from chipax.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_key_instruction
)
from chipax.instructions.alu import execute_alu_operation
from chipax.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipax.instructions.display import execute_display
from chipax.instructions.misc import execute_misc_instruction


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    The program counter is expected to already point past ``instruction``.
    """
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_key_instruction,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory.

    A program counter past the last readable word halts the program with
    STATUS_OUT_OF_BOUNDS_FETCH and leaves the PC where it was.
    """
    out_of_bounds = state.pc > MAX_PC
    address = jnp.minimum(state.pc, MAX_PC)
    instruction = _pack_u16(state.memory[address], state.memory[address + 1])
    state = jax.lax.cond(
        out_of_bounds,
        lambda s: s.replace(status=jnp.asarray(STATUS_OUT_OF_BOUNDS_FETCH, dtype=jnp.uint8)),
        lambda s: s.replace(pc=s.pc + 2),
        state
    )
    return state, instruction


def is_running(state: EmulatorState) -> jnp.ndarray:
    """True when the next step will execute an instruction."""
    return (state.status == STATUS_OK) & jnp.logical_not(state.awaiting_key)


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch/execute cycle unless halted or waiting for a key."""
    def _cycle(state):
        state, instruction = fetch(state)
        return jax.lax.cond(
            state.status == STATUS_OK,
            lambda s: execute(s, instruction),
            lambda s: s,
            state
        )

    return jax.lax.cond(is_running(state), _cycle, lambda s: s, state)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers once, never below zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


@partial(jax.jit, static_argnums=1)
def run_frame(state: EmulatorState, instructions_per_frame: int) -> EmulatorState:
    """Run one frame: a fixed number of steps followed by a single timer tick."""
    state = jax.lax.fori_loop(0, instructions_per_frame, lambda _, s: step(s), state)
    return tick_timers(state)


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(data))
    if not data:
        return state
    program = jnp.array(list(data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(data)].set(program)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)


def get_display(state: EmulatorState) -> np.ndarray:
    """Return a read-only (64, 32) snapshot of the display."""
    display = np.array(state.display, dtype=np.bool_)
    display.flags.writeable = False
    return display
