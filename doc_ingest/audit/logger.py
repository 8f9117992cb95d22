"""
Audit logging for document ingestion.

One JSON event per line. Document content is never logged, only its
provenance, size and hash.
"""

import logging
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class AuditLogger:
    """
    Structured audit logger for ingestion runs.

    Features:
    - JSON event logging
    - Load, chunking and error events
    - Append-only log file
    - Disabled mode that records nothing
    """

    def __init__(self, log_file: str = "./audit.log", level: str = "INFO",
                 enabled: bool = True):
        """
        Initialize audit logger.

        Args:
            log_file: Path to audit log
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enabled: If False, events are dropped and no file is created
        """
        self.enabled = enabled
        self.log_file = Path(log_file)

        # One logger per instance so handlers are never shared between runs
        self.logger = logging.getLogger(f"doc_ingest_audit.{id(self)}")
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.propagate = False

        # A recycled id may leave handlers from a collected instance
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = []

        if not enabled:
            self.logger.addHandler(logging.NullHandler())
            return

        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(self.log_file, mode='a')
        fh.setLevel(getattr(logging, level.upper()))

        # Plain formatter (each line is a JSON event)
        fh.setFormatter(logging.Formatter('%(message)s'))
        self.logger.addHandler(fh)

    def _log_event(self, event_dict: Dict[str, Any]):
        """
        Log a structured event as JSON.

        Args:
            event_dict: Event data to log
        """
        if not self.enabled:
            return
        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        self.logger.info(json.dumps(event_dict, default=str))

    def log_document_load(self, source_path: str, doc_type: str,
                          num_chars: int, content_hash: str = '', **kwargs):
        """
        Log document extraction event.

        Args:
            source_path: Path to loaded document
            doc_type: Detected format
            num_chars: Length of extracted text
            content_hash: SHA256 of extracted text
            **kwargs: Additional metadata
        """
        event = {
            "event": "document_load",
            "source_path": source_path,
            "doc_type": doc_type,
            "num_chars": num_chars,
            "hash": content_hash,
            **kwargs
        }
        self._log_event(event)

    def log_chunking(self, source_path: str, num_chunks: int, chunk_size: int,
                     overlap_size: int, execution_time_ms: float, **kwargs):
        """
        Log chunking of one document.

        Args:
            source_path: Document source, or "inline" for caller-built documents
            num_chunks: Number of chunks produced
            chunk_size: Lines per chunk
            overlap_size: Overlapping lines
            execution_time_ms: Chunking duration
            **kwargs: Additional metadata
        """
        event = {
            "event": "document_chunking",
            "source_path": source_path,
            "num_chunks": num_chunks,
            "chunk_size": chunk_size,
            "overlap_size": overlap_size,
            "execution_time_ms": execution_time_ms,
            **kwargs
        }
        self._log_event(event)

    def log_error(self, error_type: str, message: str, context: Optional[Dict] = None):
        """
        Log ingestion error.

        Args:
            error_type: Exception class name
            message: Error message
            context: Optional context dictionary
        """
        event = {
            "event": "error",
            "error_type": error_type,
            "message": message,
            **(context or {})
        }
        self._log_event(event)

    def close(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = []


def get_audit_logger(config: Optional[Dict[str, Any]] = None) -> AuditLogger:
    """
    Get configured audit logger instance.

    Args:
        config: Audit config dict with 'enabled', 'file' and 'level' keys

    Returns:
        AuditLogger instance
    """
    if config is None:
        config = {'file': './audit.log', 'level': 'INFO'}

    return AuditLogger(
        log_file=config.get('file', './audit.log'),
        level=config.get('level', 'INFO'),
        enabled=config.get('enabled', True)
    )
