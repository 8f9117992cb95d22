"""
Base document loader interface with common metadata schema.

Every loaded document carries:
- source_path: original file path
- doc_type: pdf, docx, html, markdown, text
- mime_type: MIME type of the source format
- created_at: ISO 8601 timestamp of extraction
- hash: SHA256 of extracted content
- char_count: length of extracted content
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import hashlib

from doc_ingest.models import TextDocument


PathLike = Union[str, Path]

MIME_TYPES = {
    'pdf': 'application/pdf',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'html': 'text/html',
    'markdown': 'text/markdown',
    'text': 'text/plain',
}


class LoadError(Exception):
    """
    Raised when a file cannot be turned into a TextDocument.

    Wraps I/O failures, unsupported formats and parser errors from the
    extraction libraries. The original message is kept in `cause`.
    """

    PREFIX = "unable to read document"

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"{self.PREFIX}: {cause}")


class BaseDocLoader(ABC):
    """Abstract base for format-specific loaders."""

    doc_type = 'text'

    @staticmethod
    def compute_hash(content: str) -> str:
        """
        Compute SHA256 hash of document content.

        Args:
            content: Extracted text

        Returns:
            Hex-encoded SHA256 hash
        """
        return hashlib.sha256(content.encode('utf-8')).hexdigest()

    @staticmethod
    def _require_file(path: PathLike) -> Path:
        file_path = Path(path)
        if not file_path.is_file():
            raise LoadError(f"file not found: {path}")
        return file_path

    @abstractmethod
    def load(self, path: PathLike) -> TextDocument:
        """
        Extract text and metadata from a file.

        Args:
            path: Path to document

        Returns:
            TextDocument with content and metadata

        Raises:
            LoadError: If the file is missing or cannot be parsed
        """
        pass

    def _create_document(self, content: str, source_path: PathLike,
                         doc_type: Optional[str] = None,
                         mime_type: Optional[str] = None,
                         **extra_metadata) -> TextDocument:
        """
        Build a TextDocument with the common metadata schema.

        Args:
            content: Extracted text
            source_path: Original file path
            doc_type: Format key, defaults to the loader's doc_type
            mime_type: MIME type, defaults to the one registered for doc_type
            **extra_metadata: Format-specific fields (page_count, title, ...)

        Returns:
            TextDocument
        """
        doc_type = doc_type or self.doc_type
        metadata = {
            'source_path': str(source_path),
            'doc_type': doc_type,
            'mime_type': mime_type or MIME_TYPES.get(doc_type, 'application/octet-stream'),
            'created_at': datetime.now(timezone.utc).isoformat(),
            'hash': self.compute_hash(content),
            'char_count': len(content),
            **extra_metadata
        }

        return TextDocument(content=content, metadata=metadata)
