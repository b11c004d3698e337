#!/usr/bin/env python3
import os
import re
from pathlib import Path
from typing import Optional

from .models import ExportRequest, ResolvedPaths, SaveFormat


if os.name == "nt":
	INVALID_FILENAME_CHARS = '<>:"/\\|?*' + "".join(chr(i) for i in range(32))
else:
	INVALID_FILENAME_CHARS = "/\0"

# Suffixes stripped from an explicit output name (case-sensitive)
_STRIPPED_SUFFIXES = (".txt", ".csv")


def sanitize_filename(name: str, invalid: Optional[str] = None) -> str:
	"""Remove characters the platform does not allow in a file name."""
	chars = INVALID_FILENAME_CHARS if invalid is None else invalid
	if not chars:
		return name
	return re.sub("[" + re.escape(chars) + "]", "", name)


def ensure_dir(path: Path) -> None:
	path.mkdir(parents=True, exist_ok=True)


def resolve_paths(request: ExportRequest) -> ResolvedPaths:
	"""
	Work out where the workbook lives and where exported files go

	Relative paths are resolved against the current working directory.

	Args:
		request (ExportRequest): The export request

	Returns:
		ResolvedPaths with absolute directories and the output base name
	"""
	input_path = Path(os.path.abspath(request.input_file))
	input_dir = input_path.parent
	input_name = input_path.name

	if not request.output_file:
		return ResolvedPaths(input_dir, input_name, input_dir, input_path.stem)

	output_path = Path(os.path.abspath(request.output_file))
	if output_path.is_dir():
		return ResolvedPaths(input_dir, input_name, output_path, input_path.stem)

	output_base = output_path.name
	for suffix in _STRIPPED_SUFFIXES:
		if output_base.endswith(suffix):
			output_base = output_base[:-len(suffix)]
			break
	return ResolvedPaths(input_dir, input_name, output_path.parent, output_base)


def target_filename(paths: ResolvedPaths, save_format: SaveFormat, sheet_name: Optional[str] = None) -> Path:
	"""Build ``<base>.<ext>``, or ``<base>_<sheet>.<ext>`` when exporting every sheet."""
	name = paths.output_base
	if sheet_name is not None:
		name = f"{name}_{sheet_name}"
	return paths.output_dir / sanitize_filename(name + save_format.extension)
