"""DOCX document loader using python-docx."""

from typing import List

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from doc_ingest.models import TextDocument
from .base import BaseDocLoader, LoadError, PathLike


class DOCXDocLoader(BaseDocLoader):
    """Load Word documents, paragraphs and tables in body order."""

    doc_type = 'docx'

    def load(self, path: PathLike) -> TextDocument:
        """
        Load DOCX and extract body text.

        Each non-empty paragraph is one line, each non-empty table row
        is one line. Order follows the document body.

        Args:
            path: Path to DOCX file

        Returns:
            TextDocument with paragraph_count, table_count and core properties

        Raises:
            LoadError: If DOCX missing or invalid
        """
        docx_path = self._require_file(path)

        try:
            doc = Document(str(docx_path))
        except PackageNotFoundError as e:
            raise LoadError(f"invalid DOCX: {e}") from e
        except Exception as e:
            raise LoadError(f"error reading DOCX: {e}") from e

        lines = []
        paragraph_count = 0
        table_count = 0

        for block in doc.iter_inner_content():
            if isinstance(block, Table):
                table_count += 1
                lines.extend(self._table_lines(block))
                continue

            text = block.text.strip()
            if text:
                paragraph_count += 1
                lines.append(text)

        props = doc.core_properties

        return self._create_document(
            content='\n'.join(lines),
            source_path=docx_path,
            paragraph_count=paragraph_count,
            table_count=table_count,
            title=props.title or None,
            author=props.author or None
        )

    @staticmethod
    def _table_lines(table: Table) -> List[str]:
        """One line per non-empty row, cells joined with ' | '."""
        lines = []

        for row in table.rows:
            cells = []
            previous = None
            for cell in row.cells:
                # Merged cells repeat the same underlying element
                if previous is not None and cell._tc is previous:
                    continue
                previous = cell._tc
                text = ' '.join(cell.text.split())
                if text:
                    cells.append(text)

            if cells:
                lines.append(' | '.join(cells))

        return lines
