"""CHIP-8 emulator package."""

from chipax.state import EmulatorState, StackState, create_state, reset, set_key_down, set_key_up
from chipax.emulator import (
    execute, fetch, step, tick_timers, run_frame, is_running, load_program, load_rom, get_display,
)
from chipax.decode import DecodedInstruction, decode
from chipax.errors import (
    EmulatorError, ProgramTooLarge, ExecutionError, StackOverflow, StackUnderflow, OutOfBoundsFetch,
    raise_for_status,
)
from chipax.constants import *
from chipax.rendering import Palette, PALETTES, chip8_display_to_rgb, create_color_scheme, save_screenshot

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "reset",
    "set_key_down",
    "set_key_up",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "run_frame",
    "is_running",
    "load_program",
    "load_rom",
    "get_display",
    "DecodedInstruction",
    "decode",
    "EmulatorError",
    "ProgramTooLarge",
    "ExecutionError",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsFetch",
    "raise_for_status",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "Palette",
    "PALETTES",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "save_screenshot",
]
