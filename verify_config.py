#!/usr/bin/env python3
"""Quick structural check of config.example.yaml, without the package installed."""

import re
import sys
from pathlib import Path

import yaml

LABEL_RE = re.compile(r"^\d{4}")


def verify_config_structure(config_file: Path = Path("config.example.yaml")) -> bool:
    """Check that the example config has the keys the pipeline expects."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print(f"✗ Failed to parse {config_file}: {e}")
        return False

    if not isinstance(config, dict):
        print(f"✗ {config_file} must contain a mapping at the top level")
        return False

    errors = []
    years = config.get("years")

    if not isinstance(years, list) or not years:
        errors.append("'years' must be a non-empty list")
        years = []

    labels = []
    for idx, year in enumerate(years):
        if not isinstance(year, dict):
            errors.append(f"Year {idx} is not a dictionary")
            continue

        for key in ("label", "document", "anchor_keyword"):
            if key not in year:
                errors.append(f"Year {idx} missing key: {key}")

        label = str(year.get("label", ""))
        if label in labels:
            errors.append(f"Duplicate year label: {label}")
        labels.append(label)

        if "reference_year" not in year and not LABEL_RE.match(label):
            errors.append(f"Year {idx} needs reference_year; label '{label}' does not start with a year")

    for key in ("directory", "extraction", "logging"):
        if key in config and not isinstance(config[key], dict):
            errors.append(f"'{key}' must be a dictionary")

    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {config_file} structure is valid")
    print(f"  - {len(years)} academic years configured: {', '.join(labels)}")
    print(f"  - Directory lookup: {'enabled' if config.get('directory', {}).get('enabled', True) else 'disabled'}")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config_structure(path) else 1)
