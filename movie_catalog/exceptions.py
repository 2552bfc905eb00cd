class MovieCatalogError(Exception):
    """Base exception for the catalog"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class MovieExportError(MovieCatalogError):
    """Raised when a lookup fails while building an export document"""


class MovieImportError(MovieCatalogError):
    """Raised when an export document cannot be stored"""
