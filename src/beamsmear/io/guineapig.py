"""
Guinea-Pig beam file writer and reader.

A Guinea-Pig input beam file holds one macroparticle per line with six
columns: E (GeV), x (um), y (um), z (um), x' (urad), y' (urad). Fields
are written in scientific notation with seven digits after the decimal
point, right-justified in 16 characters, the layout of the ILD beam files.
No header or footer is written and lines are not sorted in z.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging

import numpy as np

from ..models.beam import COLUMNS, ParticleRecord
from ..models.errors import SinkUnavailable

logger = logging.getLogger(__name__)

FIELD_WIDTH = 16
PRECISION = 7
FIELD_FORMAT = f"{{:{FIELD_WIDTH}.{PRECISION}e}}"


def format_record(record: ParticleRecord) -> str:
    """Format one particle as a newline-terminated Guinea-Pig file line."""
    return "".join(FIELD_FORMAT.format(value) for value in record) + "\n"


class RecordWriter(ABC):
    """Destination for accepted particle records."""

    @abstractmethod
    def write(self, record: ParticleRecord):
        """Append one record."""
        pass

    def write_all(self, records: Iterable[ParticleRecord]) -> int:
        """Append every record of ``records`` and return how many were written."""
        count = 0
        for record in records:
            self.write(record)
            count += 1
        return count


class MemoryWriter(RecordWriter):
    """Keeps records in memory, for analysis or testing without a file system."""

    def __init__(self):
        self.records: List[ParticleRecord] = []

    def write(self, record: ParticleRecord):
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def to_array(self) -> np.ndarray:
        """Records as an (N, 6) array in file column order."""
        if not self.records:
            return np.empty((0, len(COLUMNS)))
        return np.array([record.as_tuple() for record in self.records], dtype=float)


class GuineaPigWriter(RecordWriter):
    """
    Writes records to a Guinea-Pig input beam file.

    Use as a context manager; the file is created (or truncated) on enter
    and closed on exit. Any failure to open or write the file is raised as
    ``SinkUnavailable``. Lines already written before a failure stay in the
    file.

    Example:
        >>> with GuineaPigWriter("electron.ini") as writer:
        ...     writer.write(record)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lines_written = 0
        self._file = None

    def open(self) -> "GuineaPigWriter":
        try:
            self._file = open(self.path, 'w')
        except OSError as e:
            raise SinkUnavailable(f"Cannot open beam file {self.path}: {e}") from e
        logger.debug(f"Opened beam file {self.path}")
        return self

    def close(self):
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            raise SinkUnavailable(f"Cannot close beam file {self.path}: {e}") from e
        finally:
            self._file = None
        logger.debug(f"Closed beam file {self.path} after {self.lines_written} lines")

    def __enter__(self) -> "GuineaPigWriter":
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.close()
            return False
        try:
            self.close()
        except SinkUnavailable as e:
            logger.error(f"{e} while handling {exc_type.__name__}")
        return False

    def write(self, record: ParticleRecord):
        if self._file is None:
            raise SinkUnavailable(f"Beam file {self.path} is not open")
        try:
            self._file.write(format_record(record))
        except OSError as e:
            raise SinkUnavailable(
                f"Failed writing beam file {self.path} after {self.lines_written} lines: {e}"
            ) from e
        self.lines_written += 1


def write_beam_file(path: Union[str, Path], records: Iterable[ParticleRecord]) -> int:
    """
    Write ``records`` to a new Guinea-Pig beam file.

    Returns:
        Number of lines written
    """
    with GuineaPigWriter(path) as writer:
        return writer.write_all(records)


def read_beam_file(path: Union[str, Path], max_particles: Optional[int] = None) -> np.ndarray:
    """
    Read a Guinea-Pig beam file into an (N, 6) array.

    Args:
        path: Beam file path
        max_particles: Read at most this many lines

    Returns:
        Array in file column order; shape (0, 6) for an empty file

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a line does not hold six numbers
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Beam file not found: {path}")
    if path.stat().st_size == 0 or max_particles == 0:
        return np.empty((0, len(COLUMNS)))
    data = np.loadtxt(path, dtype=float, ndmin=2, max_rows=max_particles)
    if data.shape[1] != len(COLUMNS):
        raise ValueError(f"Beam file {path} has {data.shape[1]} columns, expected {len(COLUMNS)}")
    return data
