#!/usr/bin/env python3
"""
Output file utilities.
"""

import os
import logging

logger = logging.getLogger(__name__)


def write_output(destination: str, content: str) -> None:
    """
    Write the fully rendered content to destination.

    Args:
        destination: Path of the file to write
        content: Complete text to write

    Raises:
        OSError: If the file cannot be written
    """
    with open(destination, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.debug(f"Wrote {len(content)} characters to {destination}")


def generate_map_filename(input_filename: str) -> str:
    """
    Generates an output HTML map filename and reserves it by creating an empty file.

    Strategy:
    1. If input ends with .csv (case-insensitive), drop it
    2. Append " map.html"
    3. If file exists, try " map (1).html", " map (2).html", etc.
    4. Stop at 100 attempts
    5. Use exclusive open (`open(path, 'x')`) to avoid race conditions and reserve the name.

    Args:
        input_filename: Path to the input CSV file

    Returns:
        Safe output filename that has been created as an empty file

    Raises:
        RuntimeError: If no available filename found after 100 attempts
        ValueError: If a filename cannot be created (e.g., due to permissions)
    """
    input_dir = os.path.dirname(input_filename)
    input_base = os.path.basename(input_filename)

    if input_base.lower().endswith(".csv"):
        base_name = input_base[:-4]
    else:
        base_name = input_base

    base_output = base_name + " map"

    candidates = [os.path.join(input_dir, base_output + ".html")]
    candidates.extend(
        os.path.join(input_dir, f"{base_output} ({i}).html") for i in range(1, 100)
    )

    for candidate in candidates:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            continue
        except OSError as e:
            logger.error(f"Cannot create file {candidate}: {e}")
            raise ValueError(f"Cannot create file: {e}")

    logger.error(
        "Could not find an available map filename after 100 attempts. "
        "Please clean up your output directory or pass a filename to --map."
    )
    raise RuntimeError("No available filename found after 100 attempts")
