#!/usr/bin/env python3
"""Verification script for attendance sheet analysis.

Usage:
    python scripts/verify_layout.py <pdf_path> [--name NAME ...] [--rows]

Prints detected header pairs and name positions for manual checking against
the rendered PDF.
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from signsheet.config import Settings
from signsheet.layout import (
    detect_header_deltas,
    extract_candidate_names,
    extract_page_text,
    group_into_rows,
    locate_attendees,
)
from signsheet.signing import initial_canvas_position


def main():
    parser = argparse.ArgumentParser(description="Verify attendance sheet analysis")
    parser.add_argument("pdf_path", help="Path to PDF file")
    parser.add_argument(
        "--name", action="append", default=[], help="Attendee name (repeatable)"
    )
    parser.add_argument("--rows", action="store_true", help="Print the row grid")
    args = parser.parse_args()

    pdf_path = Path(args.pdf_path)
    if not pdf_path.exists():
        print(f"Error: File not found: {pdf_path}")
        sys.exit(1)

    settings = Settings.from_env()
    page = extract_page_text(pdf_path)

    print(f"Analyzing: {pdf_path}")
    print(f"Page 1: {page.width:.1f} x {page.height:.1f} pt, {len(page.items)} text items")
    print("=" * 80)

    if args.rows:
        rows = group_into_rows(page.items, settings.analyzer.band_height)
        for key in sorted(rows, reverse=True):
            texts = [item.text for item in sorted(rows[key], key=lambda i: i.x)]
            print(f"  y={key:>7.1f}  {' | '.join(texts)}")
        print("=" * 80)

    deltas = detect_header_deltas(
        page.items,
        keywords=settings.analyzer.keywords,
        y_tolerance=settings.analyzer.header_y_tolerance,
        fallback_width=settings.analyzer.header_fallback_width,
    )
    print(f"Header pairs: {len(deltas)}")
    for delta in deltas:
        print(f"  name header x={delta.name_anchor_x:.1f}  delta={delta.delta_x:+.1f}")

    names = args.name or extract_candidate_names(page.items)
    if not args.name:
        print(f"\nDiscovered names: {', '.join(names) or '(none)'}")

    print("\nPositions:")
    for location in locate_attendees(names, page.items, settings.analyzer):
        pos = location.position
        if pos is None:
            print(f"  {location.name:<12} NOT FOUND (manual placement)")
            continue
        canvas = initial_canvas_position(pos, page.height, settings.render)
        print(
            f"  {location.name:<12} x={pos.x:.1f} y={pos.y:.1f} w={pos.width:.1f} "
            f"offset={pos.offset_x:+.1f}  canvas=({canvas.x:.0f}, {canvas.y:.0f})"
        )

    print("\n" + "=" * 80)
    print("Analysis complete.")


if __name__ == "__main__":
    main()
