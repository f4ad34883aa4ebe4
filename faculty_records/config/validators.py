"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    years = config_dict.get("years", [])
    if isinstance(years, list):
        for year in years:
            if not isinstance(year, dict):
                continue
            label = year.get("label", "Unknown")
            if not year.get("enabled", True):
                warning_messages.append(f"Year '{label}' is disabled and will be skipped")
            if year.get("rejoin_count", 0):
                warning_messages.append(
                    f"Year '{label}' enables split-line rejoining, a best-effort "
                    "heuristic; review its output for wrongly merged lines"
                )
            if year.get("short_line_threshold", 4) > 20:
                warning_messages.append(
                    f"Year '{label}' has a large short_line_threshold "
                    f"({year['short_line_threshold']}); real records may be dropped"
                )

    directory = config_dict.get("directory", {})
    if isinstance(directory, dict) and directory.get("enabled") is False:
        warning_messages.append(
            "Directory lookup is disabled; names missing from the catalogs stay missing"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
