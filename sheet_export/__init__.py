from .errors import ExportError, OpenFailure, RefreshFailure, SaveFailure, SheetNotFound
from .exporter import ExcelSheetExporter
from .models import ExportRequest, ExportResult, ResolvedPaths, SaveFormat
from .paths import resolve_paths, sanitize_filename
from .session import AutomationSession

__all__ = [
	"ExcelSheetExporter",
	"AutomationSession",
	"ExportRequest",
	"ExportResult",
	"ResolvedPaths",
	"SaveFormat",
	"resolve_paths",
	"sanitize_filename",
	"ExportError",
	"OpenFailure",
	"RefreshFailure",
	"SheetNotFound",
	"SaveFailure",
]

__version__ = "0.1.0"
