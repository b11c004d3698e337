#!/usr/bin/env python3
"""
Excel automation session
Owns the application, workbook and worksheet handles for one export run
and releases them exactly once
"""

import gc
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import xlwings as xw

from .errors import OpenFailure


def shutdown_app(app: Any) -> None:
	"""Quit Excel, killing the process if it refuses. Errors are reported, not raised."""
	try:
		app.quit()
	except Exception as e:
		print(f"Error quitting Excel: {e}", file=sys.stderr)
		try:
			app.kill()
		except Exception as kill_error:
			print(f"Error killing Excel process: {kill_error}", file=sys.stderr)


def launch_excel() -> Any:
	"""Start a hidden Excel instance with prompts and alerts switched off"""
	app = xw.App(visible=False, add_book=False)
	try:
		app.display_alerts = False
		app.screen_updating = False
	except Exception:
		shutdown_app(app)
		raise
	return app


class AutomationSession:
	"""Handles to a running Excel instance and the workbook it has open"""

	def __init__(self, launcher: Callable[[], Any] = launch_excel):
		self.launcher = launcher
		self.app: Optional[Any] = None
		self.workbook: Optional[Any] = None
		self.worksheet: Optional[Any] = None
		self.closed = False

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.close()

	def open(self, workbook_path: Path) -> None:
		"""
		Launch Excel and open the workbook

		Args:
			workbook_path (Path): Absolute path of the workbook

		Raises:
			OpenFailure: Excel could not be started or refused the file
		"""
		try:
			self.app = self.launcher()
		except Exception as e:
			raise OpenFailure("Could not start Excel", str(e)) from e
		try:
			self.workbook = self.app.books.open(str(workbook_path))
		except Exception as e:
			raise OpenFailure(f"Could not open workbook: {workbook_path}", str(e)) from e

	def close(self) -> None:
		"""Release worksheet, workbook and application, in that order.

		Safe to call more than once; only the first call does anything.
		Errors are reported and not raised.
		"""
		if self.closed:
			return
		self.closed = True

		self.worksheet = None

		if self.workbook is not None:
			try:
				self.workbook.close()
			except Exception as e:
				print(f"Error closing workbook: {e}", file=sys.stderr)
			self.workbook = None

		if self.app is not None:
			shutdown_app(self.app)
			self.app = None

		gc.collect()
