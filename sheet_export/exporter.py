#!/usr/bin/env python3
"""
Excel sheet exporter using xlwings
Opens a workbook in a hidden Excel instance and saves its worksheets
as CSV or tab-delimited text files
"""

from pathlib import Path
from typing import Any, Callable, List, Tuple

from .errors import ExportError, OpenFailure, RefreshFailure, SaveFailure, SheetNotFound
from .models import ExportRequest, ExportResult, ResolvedPaths, SaveFormat
from .paths import ensure_dir, resolve_paths, target_filename
from .session import AutomationSession, launch_excel


class ExcelSheetExporter:
	"""Export worksheets from Excel files to delimited text using xlwings"""

	def __init__(self, launcher: Callable[[], Any] = launch_excel, verbose: bool = True):
		"""
		Args:
			launcher (callable): Returns a started, hidden Excel app. Defaults to launch_excel.
			verbose (bool): Print progress lines
		"""
		self.launcher = launcher
		self.verbose = verbose

	def _log(self, message: str) -> None:
		if self.verbose:
			print(message)

	def open_workbook(self, paths: ResolvedPaths) -> AutomationSession:
		"""
		Start Excel and open the input workbook

		Args:
			paths (ResolvedPaths): Resolved input/output locations

		Returns:
			An open AutomationSession; the caller owns its teardown

		Raises:
			OpenFailure: The file is missing or Excel could not open it
		"""
		if not paths.input_path.exists():
			raise OpenFailure(f"Excel file not found: {paths.input_path}")

		session = AutomationSession(self.launcher)
		try:
			session.open(paths.input_path)
		except OpenFailure:
			session.close()
			raise
		self._log(f"Successfully opened: {paths.input_file}")
		return session

	def refresh(self, session: AutomationSession) -> None:
		"""Refresh all data connections and fully recalculate the workbook"""
		self._log("Refreshing workbook...")
		try:
			session.workbook.api.RefreshAll()
			session.app.api.CalculateUntilAsyncQueriesDone()
			session.app.api.CalculateFull()
		except Exception as e:
			raise RefreshFailure("Error refreshing workbook", str(e)) from e

	def select_sheets(self, session: AutomationSession, request: ExportRequest, paths: ResolvedPaths) -> List[Tuple[Any, Path]]:
		"""
		Pick the worksheets to export and the file each one goes to

		A sheet name or index selects one sheet written to ``<base>.<ext>``.
		Without a selector every sheet is exported, in workbook order, to
		``<base>_<sheet name>.<ext>``.

		Raises:
			OpenFailure: Excel could not list the workbook's sheets
			SheetNotFound: The requested name or index does not exist
			SaveFailure: Two sheets would be written to the same file
		"""
		try:
			sheets = list(session.workbook.sheets)
			names = [sheet.name for sheet in sheets]
		except Exception as e:
			raise OpenFailure("Error reading worksheets", str(e)) from e
		save_format = request.save_format

		if request.exports_all_sheets:
			selected = []
			claimed = {}
			for sheet, name in zip(sheets, names):
				filename = target_filename(paths, save_format, name)
				# Sanitizing can make two names collide; Windows paths ignore case
				key = str(filename).casefold()
				if key in claimed:
					raise SaveFailure(f"Sheets '{claimed[key]}' and '{name}' would both be written to {filename}")
				claimed[key] = name
				selected.append((sheet, filename))
			return selected

		selector = request.selector
		position = None
		if request.sheet_name is not None:
			# Excel sheet names are case-insensitive
			wanted = request.sheet_name.lower()
			for i, name in enumerate(names):
				if name.lower() == wanted:
					position = i
					break
		elif 1 <= request.sheet_index <= len(sheets):
			position = request.sheet_index - 1

		if position is None:
			raise SheetNotFound(selector, names)
		return [(sheets[position], target_filename(paths, save_format))]

	def export_sheet(self, worksheet: Any, filename: Path, save_format: SaveFormat, use_culture: bool) -> None:
		"""
		Save one worksheet as a delimited text file, overwriting any existing file

		Args:
			worksheet: xlwings sheet object
			filename (Path): Target file
			save_format (SaveFormat): CSV or tab-delimited text
			use_culture (bool): Use the regional list separator instead of a comma
		"""
		sheet_name = None
		try:
			sheet_name = worksheet.name
			ensure_dir(filename.parent)
			worksheet.api.SaveAs(
				Filename=str(filename),
				FileFormat=save_format.file_format,
				Local=use_culture
			)
		except Exception as e:
			label = "sheet" if sheet_name is None else f"sheet '{sheet_name}'"
			raise SaveFailure(f"Error saving {label} to {filename}", str(e)) from e
		self._log(f"Sheet exported to: {filename}")

	def run(self, request: ExportRequest) -> ExportResult:
		"""
		Export the requested sheet(s) and always shut Excel down afterwards

		The first failure stops the run. Files written before it stay on disk.

		Returns:
			ExportResult listing the files written and the error, if any
		"""
		result = ExportResult(request)
		paths = resolve_paths(request)
		try:
			with self.open_workbook(paths) as session:
				if request.refresh:
					self.refresh(session)
				for worksheet, filename in self.select_sheets(session, request, paths):
					session.worksheet = worksheet
					self.export_sheet(worksheet, filename, request.save_format, request.use_culture)
					session.worksheet = None
					result.files.append(filename)
		except ExportError as e:
			result.error = e
		return result
