"""
doc-ingest - document text extraction and line chunking.

Loads PDF, DOCX, HTML, Markdown and plain text files as TextDocuments and
splits them into overlapping line windows for embedding and indexing.
"""

__version__ = "1.0.0"

from doc_ingest.models import TextDocument, TextChunk
from doc_ingest.chunker import (
    ChunkError,
    InvalidParameters,
    MalformedDocument,
    LineChunker,
    chunk_document_by_line,
)
from doc_ingest.loader import DocumentLoader, LoadError, read_as_text_document
from doc_ingest.config import IngestConfig, load_config

__all__ = [
    'TextDocument',
    'TextChunk',
    'ChunkError',
    'InvalidParameters',
    'MalformedDocument',
    'LineChunker',
    'chunk_document_by_line',
    'DocumentLoader',
    'LoadError',
    'read_as_text_document',
    'IngestConfig',
    'load_config',
]
