"""Record linkage between catalogs of different academic years."""

from .linker import find_candidate_lines, link_record, link_records

__all__ = ["find_candidate_lines", "link_record", "link_records"]
