"""Exporter exceptions."""

from typing import Optional, Sequence, Union


class ExportError(Exception):
	"""Base error for a failed export run.

	``diagnostic`` holds the text of the underlying error raised by Excel
	(or the automation layer), when there was one.
	"""

	def __init__(self, message: str, diagnostic: Optional[str] = None):
		super().__init__(message)
		self.message = message
		self.diagnostic = diagnostic


class OpenFailure(ExportError):
	"""Raised when Excel cannot be started or the workbook cannot be opened."""


class RefreshFailure(ExportError):
	"""Raised when refreshing or recalculating the workbook fails."""


class SheetNotFound(ExportError):
	"""Raised when a requested sheet name or index does not exist."""

	def __init__(self, selector: Union[str, int], available: Sequence[str] = ()):
		if isinstance(selector, int):
			message = f"Sheet index {selector} not found"
		else:
			message = f"Sheet '{selector}' not found"
		diagnostic = None
		if available:
			diagnostic = "Available sheets: " + ", ".join(available)
		super().__init__(message, diagnostic)
		self.selector = selector
		self.available = list(available)


class SaveFailure(ExportError):
	"""Raised when saving a sheet as delimited text fails."""
