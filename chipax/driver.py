"""Frame driver: owns the emulator state, input feed and cadence."""

import os
import time
from typing import Optional

import jax
import numpy as np
from tqdm import tqdm

from chipax.constants import DEFAULT_INSTRUCTIONS_PER_FRAME, DEFAULT_FPS
from chipax.emulator import run_frame, load_program, get_display
from chipax.errors import ExecutionError, raise_for_status
from chipax.logging import EmulatorLogger
from chipax.state import EmulatorState, create_state, reset, set_key_down, set_key_up


class FrameDriver:
    """Runs a CHIP-8 program one frame at a time.

    Each frame executes ``instructions_per_frame`` instructions through the
    compiled engine, then ticks the timers once. Execution faults stop the
    program (the driver keeps its last state for inspection) and are logged
    instead of propagating to the host.
    """

    def __init__(
        self,
        instructions_per_frame: int = DEFAULT_INSTRUCTIONS_PER_FRAME,
        fps: int = DEFAULT_FPS,
        modern_shift: bool = False,
        seed: int = 0,
        logger: Optional[EmulatorLogger] = None,
    ):
        """Initialize the driver.

        Args:
            instructions_per_frame: CHIP-8 instructions executed per frame (10 at 60 fps is ~600 Hz)
            fps: Frames per second, also the timer frequency
            modern_shift: Shift VX in place for 8XY6/8XYE instead of copying VY first
            seed: Seed for the CXNN random generator
            logger: Logger used for load and halt messages
        """
        if instructions_per_frame < 1:
            raise ValueError(f"instructions_per_frame must be positive, got {instructions_per_frame}")
        if fps < 1:
            raise ValueError(f"fps must be positive, got {fps}")

        self.instructions_per_frame = instructions_per_frame
        self.fps = fps
        self.logger = logger or EmulatorLogger()

        self.state: EmulatorState = create_state(jax.random.PRNGKey(seed), modern_shift=modern_shift)
        self.error: Optional[ExecutionError] = None
        self.frame_count = 0
        self._program: bytes = b""

    @property
    def frame_interval(self) -> float:
        """Seconds per frame."""
        return 1.0 / self.fps

    @property
    def halted(self) -> bool:
        """True once an execution fault stopped the program."""
        return self.error is not None

    @property
    def awaiting_key(self) -> bool:
        """True while an FX0A instruction waits for input."""
        return bool(self.state.awaiting_key)

    @property
    def display(self) -> np.ndarray:
        """Read-only snapshot of the current display."""
        return get_display(self.state)

    def reset(self) -> None:
        """Reset the machine and reload the current program."""
        state = reset(self.state)
        self.state = load_program(state, self._program)
        self.error = None
        self.frame_count = 0

    def load_program(self, data: bytes) -> None:
        """Reset the machine and load a program.

        Raises:
            ProgramTooLarge: the program does not fit; the driver keeps its previous state
        """
        state = load_program(reset(self.state), data)
        if not data:
            self.logger.warning("Loaded an empty program, memory from 0x200 is all zeros")
        self.state = state
        self._program = bytes(data)
        self.error = None
        self.frame_count = 0

    def load_rom(self, filename: str) -> None:
        """Reset the machine and load a ROM file."""
        with open(filename, 'rb') as f:
            rom_data = f.read()
        self.load_program(rom_data)
        self.logger.log_rom_loaded(os.path.basename(filename), len(rom_data))

    def press_key(self, code: int) -> None:
        """Forward a key-down event for logical key ``code``."""
        self.state = set_key_down(self.state, code)
        self.logger.debug(f"Key {code:X} down")

    def release_key(self, code: int) -> None:
        """Forward a key-up event for logical key ``code``."""
        self.state = set_key_up(self.state, code)
        self.logger.debug(f"Key {code:X} up")

    def run_frame(self) -> np.ndarray:
        """Run one frame and return the display snapshot."""
        if self.halted:
            return self.display

        self.state = run_frame(self.state, self.instructions_per_frame)
        self.frame_count += 1

        try:
            raise_for_status(self.state)
        except ExecutionError as error:
            self.error = error
            self.logger.log_halt(error, self.frame_count)

        return self.display

    def run(self, frames: int, progress: bool = True) -> np.ndarray:
        """Run ``frames`` frames headless, as fast as possible.

        Stops early if the program halts. Returns the last display snapshot.
        """
        start = time.time()
        executed = 0
        for _ in tqdm(range(frames), desc="Emulating", unit="frame", disable=not progress):
            if self.halted:
                break
            self.run_frame()
            executed += 1

        elapsed = time.time() - start
        self.logger.log_session_end({
            "frames": executed,
            "instructions": executed * self.instructions_per_frame,
            "seconds": elapsed,
            "halted": self.halted,
        })
        return self.display
