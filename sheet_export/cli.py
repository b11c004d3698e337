#!/usr/bin/env python3
"""
Command-line interface for the sheet_export package.
Usage:
  python -m sheet_export <excel_file> [options]
"""

import argparse
import sys
from typing import List, Optional

from .exporter import ExcelSheetExporter
from .models import ExportRequest


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description='Export Excel worksheets to CSV or TXT files using xlwings')
	parser.add_argument('excel_file', help='Path to Excel file')
	parser.add_argument('--output', '-o', help='Output file path (optional, defaults to the Excel file name)')
	selector = parser.add_mutually_exclusive_group()
	selector.add_argument('--sheet', '-s', help='Worksheet name (optional, default: all sheets)')
	selector.add_argument('--sheet-index', '-i', type=int, help='1-based worksheet position (optional)')
	parser.add_argument('--refresh', '-r', action='store_true', help='Refresh and recalculate the workbook before export')
	parser.add_argument('--txt', '-t', action='store_true', help='Export tab-delimited .txt instead of .csv')
	parser.add_argument('--use-culture', '-c', action='store_true',
				   help='Use the regional list separator (e.g. ";") instead of ","')
	parser.add_argument('--quiet', '-q', action='store_true', help='Only print errors')
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)

	request = ExportRequest(
		input_file=args.excel_file,
		output_file=args.output,
		sheet_name=args.sheet,
		sheet_index=args.sheet_index,
		refresh=args.refresh,
		text_format=args.txt,
		use_culture=args.use_culture,
	)

	result = ExcelSheetExporter(verbose=not args.quiet).run(request)

	if not result.ok:
		print(f"Error: {result.error.message}", file=sys.stderr)
		if result.error.diagnostic:
			print(result.error.diagnostic, file=sys.stderr)
		return result.exit_code

	if not args.quiet:
		print("\nExport completed successfully!")
		print(f"Files written: {len(result.files)}")
	return result.exit_code


if __name__ == "__main__":
	sys.exit(main())
