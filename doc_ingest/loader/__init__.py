"""Document loading with format auto-detection."""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import zipfile

from doc_ingest.models import TextDocument
from .base import BaseDocLoader, LoadError, PathLike
from .docx import DOCXDocLoader
from .html import HTMLDocLoader
from .markdown import MarkdownDocLoader
from .pdf import PDFDocLoader


logger = logging.getLogger(__name__)

EXTENSION_MAP = {
    '.pdf': 'pdf',
    '.docx': 'docx',
    '.html': 'html',
    '.htm': 'html',
    '.xhtml': 'html',
    '.md': 'markdown',
    '.markdown': 'markdown',
    '.txt': 'text',
    '.text': 'text',
}

# Bytes read when sniffing files with unknown extensions
SNIFF_BYTES = 2048


class DocumentLoader:
    """Unified document loader with auto-detection."""

    def __init__(self, render_markdown: bool = True, encoding: str = 'utf-8'):
        """
        Initialize loaders.

        Args:
            render_markdown: Render .md files to plain text
            encoding: Encoding for text-based formats
        """
        text_loader = MarkdownDocLoader(render_markdown=render_markdown, encoding=encoding)
        self.encoding = encoding
        self.loaders: Dict[str, BaseDocLoader] = {
            'pdf': PDFDocLoader(),
            'docx': DOCXDocLoader(),
            'html': HTMLDocLoader(encoding=encoding),
            'markdown': text_loader,
            'text': text_loader,
        }

    def detect_format(self, path: PathLike) -> str:
        """
        Detect document format by extension, then by content.

        Args:
            path: Path to document

        Returns:
            Format key (pdf, docx, html, markdown, text)

        Raises:
            LoadError: If file missing or format not recognized
        """
        file_path = Path(path)

        if not file_path.is_file():
            raise LoadError(f"file not found: {path}")

        ext = file_path.suffix.lower()
        if ext in EXTENSION_MAP:
            return EXTENSION_MAP[ext]

        return self._sniff_format(file_path)

    def _sniff_format(self, file_path: Path) -> str:
        try:
            with open(file_path, 'rb') as f:
                head = f.read(SNIFF_BYTES)
        except OSError as e:
            raise LoadError(str(e)) from e

        if head.startswith(b'%PDF'):
            return 'pdf'

        if zipfile.is_zipfile(file_path):
            with zipfile.ZipFile(file_path) as archive:
                if 'word/document.xml' in archive.namelist():
                    return 'docx'
            raise LoadError(f"unsupported format: {file_path.name}")

        try:
            text = head.decode(self.encoding)
        except UnicodeDecodeError:
            # A multi-byte character may be cut at the sniff boundary
            try:
                text = head[:-3].decode(self.encoding)
            except UnicodeDecodeError:
                raise LoadError(f"unsupported format: {file_path.name}") from None

        if '\x00' in text:
            raise LoadError(f"unsupported format: {file_path.name}")

        lowered = text.lstrip().lower()
        if lowered.startswith('<!doctype html') or lowered.startswith('<html'):
            return 'html'

        return 'text'

    def load(self, path: PathLike) -> TextDocument:
        """
        Load document by auto-detecting format.

        Args:
            path: Path to document file

        Returns:
            TextDocument with content and metadata

        Raises:
            LoadError: If file missing, format unsupported or parsing fails
        """
        doc_format = self.detect_format(path)
        document = self.loaders[doc_format].load(path)

        logger.debug("Loaded %s as %s (%d chars)", path, doc_format, len(document.content))
        return document

    def iter_files(self, dir_path: PathLike) -> List[Path]:
        """List files under a directory with a supported extension, sorted."""
        dir_path = Path(dir_path)

        if not dir_path.is_dir():
            raise LoadError(f"directory not found: {dir_path}")

        return sorted(
            p for p in dir_path.rglob('*')
            if p.is_file() and p.suffix.lower() in EXTENSION_MAP
        )

    def load_directory(self, dir_path: PathLike) -> List[TextDocument]:
        """
        Load all supported documents from directory recursively.

        Files that fail to load are logged and skipped.

        Args:
            dir_path: Directory path

        Returns:
            Loaded documents in path order
        """
        documents = []

        for file in self.iter_files(dir_path):
            try:
                documents.append(self.load(file))
            except LoadError as e:
                logger.warning("Failed to load %s: %s", file, e)

        return documents


_default_loader: Optional[DocumentLoader] = None


def read_as_text_document(file_path: PathLike) -> TextDocument:
    """
    Read a file of any supported format as a TextDocument.

    Args:
        file_path: Path to document

    Returns:
        TextDocument

    Raises:
        LoadError: With message "unable to read document: <cause>"
    """
    global _default_loader
    if _default_loader is None:
        _default_loader = DocumentLoader()
    return _default_loader.load(file_path)


def get_document_loader(config: Optional[Dict[str, Any]] = None) -> DocumentLoader:
    """
    Create a DocumentLoader from the document_ingestion config section.

    Args:
        config: Dict with optional 'render_markdown' and 'encoding' keys

    Returns:
        DocumentLoader instance
    """
    config = config or {}
    return DocumentLoader(
        render_markdown=config.get('render_markdown', True),
        encoding=config.get('encoding', 'utf-8')
    )


__all__ = [
    'BaseDocLoader',
    'DocumentLoader',
    'LoadError',
    'get_document_loader',
    'read_as_text_document',
]
