"""Command line entry point.

Examples:
    chipax rom=roms/PONG
    chipax rom=roms/TETRIS instructions_per_frame=15 color_scheme=amber
    chipax rom=roms/IBM headless=true frames=120 screenshot=ibm.png
"""

import os
import sys

import hydra
from omegaconf import DictConfig, OmegaConf

from chipax.driver import FrameDriver
from chipax.errors import EmulatorError
from chipax.logging import EmulatorLogger
from chipax.rendering import save_screenshot


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    cfg = OmegaConf.to_container(cfg)
    logger = EmulatorLogger(log_level=cfg.pop("log_level"))

    rom_path = cfg.pop("rom")
    if rom_path is None:
        logger.error("No ROM given, run with rom=<path>")
        sys.exit(2)

    logger.log_session_start({"rom": rom_path, **cfg})

    driver = FrameDriver(
        instructions_per_frame=cfg["instructions_per_frame"],
        fps=cfg["fps"],
        modern_shift=cfg["modern_shift"],
        seed=cfg["seed"],
        logger=logger,
    )

    try:
        driver.load_rom(rom_path)
    except (OSError, EmulatorError) as e:
        logger.error(f"Could not load {rom_path}: {e}")
        sys.exit(1)

    if cfg["headless"]:
        display = driver.run(cfg["frames"])
    else:
        from chipax.frontend import PygameFrontend

        frontend = PygameFrontend(driver, scale=cfg["scale"], color_scheme=cfg["color_scheme"])
        frontend.run(title=f"CHIP-8 - {os.path.basename(rom_path)}")
        display = driver.display

    if cfg["screenshot"]:
        save_screenshot(display, cfg["screenshot"], scale=cfg["scale"], color_scheme=cfg["color_scheme"])
        logger.info(f"Screenshot saved: {cfg['screenshot']}")

    if driver.halted:
        sys.exit(1)


if __name__ == "__main__":
    main()
