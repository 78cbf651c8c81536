"""
Chronological ordering of observation files.

Records start with a fixed-width ``YYYY-MM-DDTHH:MM`` timestamp, so a plain
byte-wise sort of whole lines puts every station's observations in
non-decreasing timestamp order. The sort is delegated to the system
``sort`` utility, which spills to disk and handles files larger than
memory.
"""

import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class OrderingError(RuntimeError):
    """Raised when the external sort fails."""
    pass


class InsufficientDiskSpace(OSError):
    """Raised when a file cannot be written for lack of free space."""
    pass


def check_disk_space(required_bytes: int, path: PathLike = ".") -> int:
    """Verify that ``path``'s filesystem has room for ``required_bytes``.

    Args:
        required_bytes: Bytes about to be written
        path: Any existing path on the target filesystem

    Returns:
        Free bytes available

    Raises:
        InsufficientDiskSpace: If fewer bytes are free than required
    """
    available = shutil.disk_usage(path).free
    if required_bytes > available:
        raise InsufficientDiskSpace(
            f"Insufficient disk space: {required_bytes} bytes required, "
            f"{available} bytes available at {path}"
        )
    return available


def sort_lines_to_file(source: PathLike, destination: PathLike) -> None:
    """Sort the lines of ``source`` byte-wise into ``destination``.

    Raises:
        FileNotFoundError: If ``source`` does not exist
        OrderingError: If ``sort`` is missing or exits with an error
    """
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Observation file not found: {source}")

    env = dict(os.environ, LC_ALL="C")
    try:
        result = subprocess.run(
            ["sort", "-o", str(destination), str(source)],
            env=env,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise OrderingError(f"sort utility not available: {e}") from e

    if result.returncode != 0:
        raise OrderingError(f"Error while sorting {source}: {result.stderr.strip()}")
    logger.debug(f"Sorted {source} into {destination}")


@contextmanager
def sorted_observation_lines(
    source: PathLike,
    temp_dir: Optional[PathLike] = None,
) -> Iterator[Iterator[str]]:
    """Yield a lazy iterator over the lines of ``source`` in sorted order.

    The sorted copy lives in a temporary file that is removed on exit.

    Args:
        source: Observation file to read
        temp_dir: Directory for the temporary file (system default if None)

    Example:
        >>> with sorted_observation_lines("observations.txt") as lines:
        ...     for line in lines:
        ...         pass
    """
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Observation file not found: {source}")

    directory = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
    check_disk_space(source.stat().st_size, directory)

    fd, sorted_path = tempfile.mkstemp(prefix=f"{source.stem}.", suffix=".sorted", dir=directory)
    os.close(fd)
    try:
        sort_lines_to_file(source, sorted_path)
        with open(sorted_path, 'r', encoding='utf-8', errors='replace') as f:
            yield f
    finally:
        Path(sorted_path).unlink(missing_ok=True)
