from __future__ import annotations


class SearchError(Exception):
    """Base class for errors raised by the search core."""


class EmptyQuery(SearchError, ValueError):
    def __init__(self, message: str = "Query is empty. Please enter a search term.") -> None:
        super().__init__(message)


class CatalogUnavailable(SearchError):
    """No manifest on disk, or it could not be parsed."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"Dataset has not been built ({path}). Build the dataset first: python -m docsearch --build"
        if reason:
            msg += f" [{reason}]"
        super().__init__(msg)


class DocumentUnreadable(SearchError):
    """One document's text could not be loaded. The scanner skips it."""

    def __init__(self, doc_id: str, path: str, reason: str = "") -> None:
        self.doc_id = doc_id
        self.path = path
        super().__init__(f"cannot read text of document {doc_id!r} at {path}: {reason}")


class IngestError(SearchError):
    pass
