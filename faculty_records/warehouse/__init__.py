"""Per-year faculty tables and the multi-year warehouse."""

from .frames import COLUMNS, build_warehouse, empty_frame, frame_to_rows, rows_to_frame

__all__ = ["COLUMNS", "build_warehouse", "empty_frame", "frame_to_rows", "rows_to_frame"]
