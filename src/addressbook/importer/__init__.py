from .csv_importer import (
    CSV_HEADER,
    CsvImportError,
    InvalidHeaderError,
    InvalidHeaderLengthError,
    InvalidRowLengthError,
    NoRowsInFileError,
    ImportRowError,
    ImportResult,
    parse_csv,
    import_csv,
)

__all__ = [
    "CSV_HEADER",
    "CsvImportError",
    "InvalidHeaderError",
    "InvalidHeaderLengthError",
    "InvalidRowLengthError",
    "NoRowsInFileError",
    "ImportRowError",
    "ImportResult",
    "parse_csv",
    "import_csv",
]
