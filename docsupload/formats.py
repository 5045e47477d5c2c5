"""Which local files can be uploaded and how the service will store them."""

from .models import LocalFile

DOCUMENT = "document"
SPREADSHEET = "spreadsheet"
PRESENTATION = "presentation"
PDF = "pdf"
OTHER = "other"

SUPPORTED_FORMATS: tuple[str, ...] = (
    "csv",
    "doc",
    "docx",
    "html",
    "htm",
    "ods",
    "odt",
    "pdf",
    "ppt",
    "pps",
    "rtf",
    "sxw",
    "tsv",
    "tab",
    "txt",
    "xls",
    "xlsx",
)

# Extension -> document type the service converts the file into
FORMAT_CATEGORIES: dict[str, str] = {
    "doc": DOCUMENT,
    "docx": DOCUMENT,
    "htm": DOCUMENT,
    "html": DOCUMENT,
    "rtf": DOCUMENT,
    "sxw": DOCUMENT,
    "txt": DOCUMENT,
    "odt": DOCUMENT,
    "csv": SPREADSHEET,
    "ods": SPREADSHEET,
    "tab": SPREADSHEET,
    "tsb": SPREADSHEET,
    "tsv": SPREADSHEET,
    "xls": SPREADSHEET,
    "xlsx": SPREADSHEET,
    "pps": PRESENTATION,
    "ppt": PRESENTATION,
    "pdf": PDF,
}

# Document type -> maximum accepted size in bytes
SIZE_LIMITS: dict[str, int] = {
    DOCUMENT: 500_000,
    SPREADSHEET: 1_000_000,
    PRESENTATION: 10_000_000,
    PDF: 10_000_000,
}


def is_supported_format(file: LocalFile) -> bool:
    """Check whether the file's extension can be uploaded."""
    return file.extension.lower() in SUPPORTED_FORMATS


def classify(file: LocalFile) -> str:
    """Return the document type the file will have once uploaded."""
    return FORMAT_CATEGORIES.get(file.extension.lower(), OTHER)


def is_within_size_limit(file: LocalFile) -> bool:
    """Check the file against the size ceiling of its document type.

    Types without a ceiling accept files of any size.
    """
    limit = SIZE_LIMITS.get(classify(file))
    return limit is None or file.size <= limit
