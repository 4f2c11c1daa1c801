"""
Logging utilities for tilepack.

Sets up console/file logging and writes run summaries.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from .packing import PackingResult


def setup_logging(log_file: Optional[Union[str, Path]] = None, verbose: bool = False,
                  stream: Optional[TextIO] = None) -> None:
    """Setup logging to the console (stdout unless another stream is given) and, optionally, a debug log file."""
    # Create logger
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler - important messages only unless verbose
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    # File handler - detailed logs
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s')
        )
        logger.addHandler(file_handler)
        logging.info(f"Logging initialized. Debug log: {log_file}")


def log_load_results(total_files: int, loaded: int, errors: List[str]) -> None:
    """
    Log image loading results.

    Args:
        total_files: Number of input files found
        loaded: Number of images decoded successfully
        errors: Messages for the files that were skipped
    """
    logger = logging.getLogger(__name__)

    logger.info(f"Loaded {loaded} of {total_files} images")
    if errors:
        logger.warning(f"Skipped {len(errors)} files:")
        for error in errors[:10]:  # Log first 10 errors
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")


def log_packing_summary(result: PackingResult, calculation_time: float) -> None:
    """
    Log the chosen layout.

    Args:
        result: PackingResult of the run
        calculation_time: Time taken for the width search in seconds
    """
    logger = logging.getLogger(__name__)

    logger.info("Packing summary:")
    logger.info(f"  Tiles: {len(result.placements)}")
    logger.info(f"  Canvas: {result.width}x{result.height} pixels (max width {result.max_width})")
    logger.info(f"  Widths tried: {result.trials}")
    logger.info(f"  Efficiency: {result.efficiency:.1%}")
    logger.info(f"  Calculation time: {calculation_time:.3f} seconds")
