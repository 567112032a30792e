"""Human-readable byte counts for size columns."""

from __future__ import annotations

from enum import Enum


class ByteFormat(Enum):
    METRIC = "metric"
    BINARY = "binary"
    BYTES = "bytes"


_METRIC_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB")
_BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")


def format_bytes(size: int, byte_format: ByteFormat) -> str:
    """Format ``size`` with the unit scale of ``byte_format``.

    Values below one step of the scale are printed as whole bytes; larger
    values get two decimals.
    """
    if byte_format is ByteFormat.BYTES:
        return f"{size} b"
    if byte_format is ByteFormat.BINARY:
        step, units = 1024, _BINARY_UNITS
    else:
        step, units = 1000, _METRIC_UNITS

    if size < step:
        return f"{size} {units[0]}"
    value = float(size)
    unit_idx = 0
    while value >= step and unit_idx < len(units) - 1:
        value /= step
        unit_idx += 1
    return f"{value:.2f} {units[unit_idx]}"


__all__ = ["ByteFormat", "format_bytes"]
