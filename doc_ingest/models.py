"""
Document and chunk records.

Metadata is a string-keyed mapping of scalar values (str, int, float, bool).
Value types are decided once, when a record is built, by normalize_metadata.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union


MetadataValue = Union[str, int, float, bool]
Metadata = Dict[str, MetadataValue]

SCALAR_TYPES = (str, int, float, bool)


def normalize_metadata(raw: Optional[Mapping[Any, Any]]) -> Metadata:
    """
    Coerce a free-form mapping into scalar metadata.

    Args:
        raw: Mapping produced by a loader or supplied by a caller

    Returns:
        New dict with string keys and scalar values. None values are
        dropped, dates become ISO 8601 strings, other objects use str().
    """
    metadata: Metadata = {}

    for key, value in (raw or {}).items():
        if value is None:
            continue

        if isinstance(value, SCALAR_TYPES):
            metadata[str(key)] = value
        elif isinstance(value, (datetime, date)):
            metadata[str(key)] = value.isoformat()
        else:
            metadata[str(key)] = str(value)

    return metadata


@dataclass(frozen=True)
class TextDocument:
    """Extracted text of a single file plus its metadata."""

    content: str
    metadata: Optional[Metadata] = None

    def __post_init__(self):
        if self.metadata is not None:
            object.__setattr__(self, 'metadata', normalize_metadata(self.metadata))

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form, omitting metadata when absent."""
        data: Dict[str, Any] = {'content': self.content}
        if self.metadata is not None:
            data['metadata'] = dict(self.metadata)
        return data


@dataclass(frozen=True)
class TextChunk:
    """A contiguous run of lines cut from a TextDocument."""

    content: str
    metadata: Metadata = field(default_factory=dict)

    @property
    def index(self) -> int:
        """Position of this chunk in its output sequence."""
        return self.metadata['index']

    def to_dict(self) -> Dict[str, Any]:
        return {'content': self.content, 'metadata': dict(self.metadata)}
