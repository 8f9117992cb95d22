"""Ingestion pipeline: load files, chunk them, audit the run."""

from typing import Any, Dict, List, Mapping, Optional, Union
import logging
import time

from doc_ingest.audit.logger import get_audit_logger
from doc_ingest.chunker import ChunkError, LineChunker
from doc_ingest.loader import LoadError, PathLike, get_document_loader
from doc_ingest.models import TextChunk, TextDocument


logger = logging.getLogger(__name__)


class IngestPipeline:
    """Loads documents and splits them into line chunks."""

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize pipeline.

        Args:
            config_dict: Config with 'chunking', 'document_ingestion'
                and 'audit_log' sections (all optional)

        Raises:
            InvalidParameters: If chunking sizes are out of range
        """
        self.config = config_dict or {}
        chunking_cfg = self.config.get('chunking', {})

        self.loader = get_document_loader(self.config.get('document_ingestion', {}))
        self.chunker = LineChunker(
            chunk_size=chunking_cfg.get('chunk_size', 40),
            overlap_size=chunking_cfg.get('overlap_size', 5)
        )
        self.audit = get_audit_logger(self.config.get('audit_log', {'enabled': False}))

    def load(self, path: PathLike) -> TextDocument:
        """
        Load one file.

        Raises:
            LoadError: If the file cannot be read
        """
        try:
            document = self.loader.load(path)
        except LoadError as e:
            self.audit.log_error(type(e).__name__, str(e), {'source_path': str(path)})
            raise

        self.audit.log_document_load(
            source_path=str(path),
            doc_type=document.metadata.get('doc_type', 'unknown'),
            num_chars=len(document.content),
            content_hash=document.metadata.get('hash', '')
        )
        return document

    def ingest_document(self, document: Union[TextDocument, Mapping[str, Any]]) -> List[TextChunk]:
        """
        Chunk an already loaded document.

        Args:
            document: TextDocument (or equivalent mapping)

        Returns:
            Chunks with index metadata

        Raises:
            MalformedDocument: If the document has no content
        """
        start = time.time()

        try:
            chunks = self.chunker.chunk(document)
        except ChunkError as e:
            self.audit.log_error(type(e).__name__, str(e))
            raise

        if isinstance(document, Mapping):
            metadata = document.get('metadata') or {}
        else:
            metadata = document.metadata or {}
        self.audit.log_chunking(
            source_path=str(metadata.get('source_path', 'inline')),
            num_chunks=len(chunks),
            chunk_size=self.chunker.chunk_size,
            overlap_size=self.chunker.overlap_size,
            execution_time_ms=(time.time() - start) * 1000
        )
        return chunks

    def ingest_file(self, path: PathLike) -> List[TextChunk]:
        """
        Load a file and chunk it.

        Args:
            path: Path to document

        Returns:
            Chunks of the document

        Raises:
            LoadError: If the file cannot be read
        """
        return self.ingest_document(self.load(path))

    def ingest_directory(self, dir_path: PathLike) -> List[TextChunk]:
        """
        Load and chunk every supported file under a directory.

        Unreadable files are logged and skipped. Chunk indexes restart
        at 0 for each document.

        Args:
            dir_path: Directory path

        Returns:
            Chunks of all documents, in file path order
        """
        all_chunks = []

        for file in self.loader.iter_files(dir_path):
            try:
                all_chunks.extend(self.ingest_file(file))
            except LoadError as e:
                logger.warning("Skipping %s: %s", file, e)

        return all_chunks

    def close(self):
        self.audit.close()
