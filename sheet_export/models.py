#!/usr/bin/env python3
"""
Value types shared by the exporter: the request, the resolved paths,
the save format and the run result.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .errors import ExportError


class SaveFormat(Enum):
	"""Delimited text formats understood by Excel's SaveAs"""

	# Excel XlFileFormat codes: xlTextWindows, xlCSV
	DELIMITED_TEXT = (20, ".txt")
	COMMA_SEPARATED = (6, ".csv")

	def __init__(self, file_format: int, extension: str):
		self.file_format = file_format
		self.extension = extension


@dataclass(frozen=True)
class ExportRequest:
	input_file: str
	output_file: Optional[str] = None
	sheet_name: Optional[str] = None
	sheet_index: Optional[int] = None
	refresh: bool = False
	text_format: bool = False
	use_culture: bool = False

	@property
	def save_format(self) -> SaveFormat:
		return SaveFormat.DELIMITED_TEXT if self.text_format else SaveFormat.COMMA_SEPARATED

	@property
	def exports_all_sheets(self) -> bool:
		return self.sheet_name is None and self.sheet_index is None

	@property
	def selector(self) -> Optional[Union[str, int]]:
		"""The single-sheet selector in effect; the name wins over the index."""
		if self.sheet_name is not None:
			return self.sheet_name
		return self.sheet_index


@dataclass(frozen=True)
class ResolvedPaths:
	input_dir: Path
	input_file: str
	output_dir: Path
	output_base: str

	@property
	def input_path(self) -> Path:
		return self.input_dir / self.input_file


@dataclass
class ExportResult:
	"""Outcome of one export run"""

	request: ExportRequest
	files: List[Path] = field(default_factory=list)
	error: Optional[ExportError] = None

	@property
	def ok(self) -> bool:
		return self.error is None

	@property
	def exit_code(self) -> int:
		return 0 if self.ok else 1
