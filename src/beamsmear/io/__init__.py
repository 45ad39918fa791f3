"""
Beam file input/output for beamsmear.
"""

from .guineapig import (
    RecordWriter,
    MemoryWriter,
    GuineaPigWriter,
    format_record,
    write_beam_file,
    read_beam_file,
)

__all__ = [
    'RecordWriter',
    'MemoryWriter',
    'GuineaPigWriter',
    'format_record',
    'write_beam_file',
    'read_beam_file',
]
