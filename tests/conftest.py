"""
Pytest configuration and a fake Excel host for exporter tests.

The fake mimics the slice of the xlwings object model the exporter uses:
``app.books.open``, ``book.sheets``, ``sheet.name``, ``sheet.api.SaveAs``,
``book.api.RefreshAll`` and the ``app.api`` calculation calls. Every call is
appended to ``FakeExcel.log`` and any use of a closed workbook or a quit
application raises ``UseAfterRelease``.
"""
from pathlib import Path
from typing import List, Optional

import pytest


class UseAfterRelease(AssertionError):
	pass


class FakeSheetApi:
	def __init__(self, sheet: "FakeSheet"):
		self._sheet = sheet

	def SaveAs(self, Filename, FileFormat, Local=False):
		sheet = self._sheet
		sheet.book.check_open()
		sheet.book.host.log.append(("save", sheet._name, Filename, FileFormat, Local))
		if sheet.book.host.fail_save_on == sheet._name:
			raise RuntimeError("SaveAs method of Worksheet class failed")
		Path(Filename).write_text(f"{sheet._name}|{FileFormat}|{Local}")


class FakeSheet:
	def __init__(self, book: "FakeBook", name: str):
		self.book = book
		self._name = name
		self.api = FakeSheetApi(self)

	@property
	def name(self) -> str:
		self.book.check_open()
		if self.book.host.fail_name:
			raise RuntimeError("Call was rejected by callee")
		return self._name


class FakeBookApi:
	def __init__(self, book: "FakeBook"):
		self._book = book

	def RefreshAll(self):
		self._book.check_open()
		self._book.host.log.append("workbook.RefreshAll")
		if self._book.host.fail_refresh:
			raise RuntimeError("External data source unavailable")


class FakeBook:
	def __init__(self, host: "FakeExcel", path: str):
		self.host = host
		self.path = path
		self.closed = False
		self.on_close = None
		self.sheets = [FakeSheet(self, name) for name in host.sheet_names]
		self.api = FakeBookApi(self)

	def check_open(self):
		if self.closed:
			raise UseAfterRelease("workbook used after close")
		self.host.app.check_running()

	def close(self):
		self.check_open()
		if self.on_close is not None:
			self.on_close()
		self.host.log.append("workbook.close")
		self.closed = True
		if self.host.fail_close:
			raise RuntimeError("Close method failed")


class FakeBooks:
	def __init__(self, app: "FakeApp"):
		self._app = app

	def open(self, path: str) -> FakeBook:
		self._app.check_running()
		host = self._app.host
		host.log.append(("books.open", path))
		if host.fail_open:
			raise RuntimeError("Excel cannot open the file because the file format is not valid")
		host.book = FakeBook(host, path)
		return host.book


class FakeAppApi:
	def __init__(self, app: "FakeApp"):
		self._app = app

	def CalculateUntilAsyncQueriesDone(self):
		self._app.check_running()
		self._app.host.log.append("app.CalculateUntilAsyncQueriesDone")

	def CalculateFull(self):
		self._app.check_running()
		self._app.host.log.append("app.CalculateFull")


class FakeApp:
	def __init__(self, host: "FakeExcel"):
		self.host = host
		self.running = True
		self.books = FakeBooks(self)
		self.api = FakeAppApi(self)

	def check_running(self):
		if not self.running:
			raise UseAfterRelease("application used after quit")

	def quit(self):
		self.check_running()
		self.host.log.append("app.quit")
		self.running = False
		if self.host.fail_quit:
			raise RuntimeError("Quit failed")

	def kill(self):
		self.host.log.append("app.kill")
		self.running = False


class FakeExcel:
	"""Stand-in automation host; pass ``launch`` as the exporter's launcher."""

	def __init__(self, sheet_names: List[str]):
		self.sheet_names = list(sheet_names)
		self.log: list = []
		self.app: Optional[FakeApp] = None
		self.book: Optional[FakeBook] = None
		self.launches = 0
		self.fail_launch = False
		self.fail_open = False
		self.fail_refresh = False
		self.fail_name = False
		self.fail_save_on: Optional[str] = None
		self.fail_close = False
		self.fail_quit = False

	def launch(self) -> FakeApp:
		self.launches += 1
		self.log.append("launch")
		if self.fail_launch:
			raise RuntimeError("Invalid class string")
		self.app = FakeApp(self)
		return self.app

	def events(self, name: str) -> list:
		return [e for e in self.log if e == name]

	@property
	def saves(self) -> list:
		return [e for e in self.log if isinstance(e, tuple) and e[0] == "save"]


@pytest.fixture
def excel():
	"""Fake Excel host with a three-sheet workbook."""
	return FakeExcel(["Summary", "Data", "Notes"])


@pytest.fixture
def workbook(tmp_path):
	"""An (empty) input workbook file; the fake host never reads it."""
	path = tmp_path / "Foo.xlsx"
	path.write_bytes(b"")
	return path
