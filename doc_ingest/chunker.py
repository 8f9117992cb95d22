"""
Line-based chunking of text documents.

Splits a document's content into windows of whole lines. Consecutive
windows share `overlap_size` lines so context survives chunk boundaries.
"""

import logging
from typing import Any, Dict, List, Mapping, Union

from doc_ingest.models import TextChunk, TextDocument


logger = logging.getLogger(__name__)

LINE_TERMINATOR = '\n'


class ChunkError(Exception):
    """Base class for chunking failures."""
    pass


class InvalidParameters(ChunkError):
    """Raised when chunk_size/overlap_size are out of range."""
    pass


class MalformedDocument(ChunkError):
    """Raised when a document record has no usable content."""
    pass


DocumentLike = Union[TextDocument, Mapping[str, Any]]


def validate_parameters(chunk_size: int, overlap_size: int):
    """
    Check window sizing.

    Args:
        chunk_size: Maximum lines per chunk, must be > 0
        overlap_size: Lines shared with the previous chunk, 0 <= overlap < chunk_size

    Raises:
        InvalidParameters: If either value is not an int or out of range
    """
    for name, value in (('chunk_size', chunk_size), ('overlap_size', overlap_size)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameters(f"{name} must be an integer, got {value!r}")

    if chunk_size <= 0:
        raise InvalidParameters(f"chunk_size must be positive, got {chunk_size}")

    if overlap_size < 0:
        raise InvalidParameters(f"overlap_size must not be negative, got {overlap_size}")

    if overlap_size >= chunk_size:
        raise InvalidParameters(
            f"overlap_size ({overlap_size}) must be smaller than chunk_size ({chunk_size})"
        )


def split_lines(content: str) -> List[str]:
    """
    Split text on the line terminator.

    A single trailing terminator closes the last line rather than
    starting an empty one.
    """
    if not content:
        return []

    lines = content.split(LINE_TERMINATOR)
    if content.endswith(LINE_TERMINATOR):
        lines.pop()
    return lines


def _coerce_document(document: DocumentLike) -> TextDocument:
    if isinstance(document, TextDocument):
        content = document.content
        metadata = document.metadata
    elif isinstance(document, Mapping):
        if 'content' not in document:
            raise MalformedDocument("document has no 'content' field")
        content = document['content']
        metadata = document.get('metadata')
        if metadata is not None and not isinstance(metadata, Mapping):
            raise MalformedDocument(
                f"document metadata must be a mapping, got {type(metadata).__name__}"
            )
    else:
        raise MalformedDocument(f"unsupported document type: {type(document).__name__}")

    if content is None:
        raise MalformedDocument("document content is missing")
    if not isinstance(content, str):
        raise MalformedDocument(
            f"document content must be a string, got {type(content).__name__}"
        )

    if isinstance(document, TextDocument):
        return document
    return TextDocument(content=content, metadata=metadata)


class LineChunker:
    """Chunks documents into overlapping windows of lines."""

    def __init__(self, chunk_size: int = 40, overlap_size: int = 5):
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum number of lines per chunk
            overlap_size: Trailing lines of one chunk repeated at the start of the next

        Raises:
            InvalidParameters: If sizing is out of range
        """
        validate_parameters(chunk_size, overlap_size)
        self.chunk_size = chunk_size
        self.overlap_size = overlap_size

    @property
    def step(self) -> int:
        """Line offset between the starts of consecutive chunks."""
        return self.chunk_size - self.overlap_size

    def chunk(self, document: DocumentLike) -> List[TextChunk]:
        """
        Chunk a document into line windows.

        Args:
            document: TextDocument, or a mapping with 'content' and optional 'metadata'

        Returns:
            Chunks in line order. Each chunk's metadata is a copy of the
            document metadata with 'index' set to its position. Empty
            content yields an empty list.

        Raises:
            MalformedDocument: If content is missing or not a string
        """
        doc = _coerce_document(document)
        lines = split_lines(doc.content)

        chunks = []
        offset = 0

        while offset < len(lines):
            window = lines[offset:offset + self.chunk_size]

            chunks.append(TextChunk(
                content=LINE_TERMINATOR.join(window),
                metadata=self._chunk_metadata(doc, len(chunks))
            ))

            offset += self.step

        logger.debug(
            "Chunked %d lines into %d chunks (chunk_size=%d, overlap_size=%d)",
            len(lines), len(chunks), self.chunk_size, self.overlap_size
        )
        return chunks

    @staticmethod
    def _chunk_metadata(document: TextDocument, index: int) -> Dict[str, Any]:
        metadata = dict(document.metadata or {})
        metadata['index'] = index
        return metadata


def chunk_document_by_line(document: DocumentLike, chunk_size: int,
                           overlap_size: int) -> List[TextChunk]:
    """
    Chunk a document by lines with overlap.

    Args:
        document: TextDocument or mapping with 'content' and optional 'metadata'
        chunk_size: Maximum number of lines per chunk
        overlap_size: Lines repeated between consecutive chunks

    Returns:
        Ordered list of TextChunk

    Raises:
        InvalidParameters: If sizing is out of range
        MalformedDocument: If the document has no string content
    """
    return LineChunker(chunk_size, overlap_size).chunk(document)
