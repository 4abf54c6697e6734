"""Print how the configured sheet's header row resolves to canonical fields."""

import sys
import os
import json

# Add project root to sys.path
sys.path.append(os.getcwd())

from loaders import SourceConfig, build_header_map, normalize_header, resolve_workbook_path, read_used_range


def inspect_headers():
    config = SourceConfig.from_env()
    path = resolve_workbook_path(config)
    title, rows = read_used_range(path, config.sheet_name)
    if not rows:
        print(f"'{title}'!{config.sheet_name} is empty")
        return

    headers = ['' if h is None else str(h) for h in rows[0]]
    resolution = build_header_map(headers)

    print(f"Headers of '{title}'!{config.sheet_name} ({len(rows) - 1} data rows):")
    for idx, header in enumerate(headers):
        print(f" [{idx:>3}] {header!r:40} -> {normalize_header(header)}")

    print("\nCanonical mapping:")
    for key, column in sorted(resolution.mapping.items(), key=lambda kv: kv[1].index):
        print(f" {key:20} <- [{column.index}] {column.header!r}")

    print("\nStatus column resolution:")
    print(json.dumps(resolution.debug_info(), indent=2))


if __name__ == "__main__":
    inspect_headers()
