"""Console logging for Chipax sessions.

Messages go to stdout as ``[   1.25s][    INFO][Chipax] message``, with the
level tag colored when stdout is a terminal.
"""

import sys
import time
from typing import Any, Dict

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger with elapsed-time stamps."""

    def __init__(self, name: str = "Chipax", log_level: str = "INFO", use_colors: bool = True):
        log_level = log_level.upper()
        if log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")

        self.name = name
        self.log_level = log_level
        self.use_colors = use_colors and sys.stdout.isatty()
        self.start_time = time.time()

    def is_enabled(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def log(self, level: str, message: str):
        if not self.is_enabled(level):
            return
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_LEVEL_COLORS[level]}{tag}{_RESET}"
        print(f"[{time.time() - self.start_time:8.2f}s]{tag}[{self.name}] {message}", flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger with the messages of an emulator session."""

    def _log_mapping(self, items: Dict[str, Any]):
        for key, value in items.items():
            self.info(f"  {key}: {value:.2f}" if isinstance(value, float) else f"  {key}: {value}")

    def log_session_start(self, config: Dict[str, Any]):
        """Log the session configuration between two rules."""
        self.info("=" * 60)
        self.info("Starting CHIP-8 session with configuration:")
        self._log_mapping(config)
        self.info("=" * 60)

    def log_rom_loaded(self, name: str, size: int):
        self.info(f"Loaded {name} ({size} bytes at 0x200)")

    def log_halt(self, error: Exception, frame: int):
        """Log the execution fault that stopped the program."""
        self.error(f"Program halted at frame {frame}: {error}")

    def log_session_end(self, stats: Dict[str, Any]):
        self.info("Session finished:")
        self._log_mapping(stats)
