"""PDF document loader using PyPDF2."""

import PyPDF2

from doc_ingest.models import TextDocument
from .base import BaseDocLoader, LoadError, PathLike


class PDFDocLoader(BaseDocLoader):
    """Load PDF documents, one line block per page."""

    doc_type = 'pdf'

    # Document info keys copied into metadata
    INFO_FIELDS = {
        '/Title': 'title',
        '/Author': 'author',
        '/Producer': 'producer',
    }

    def load(self, path: PathLike) -> TextDocument:
        """
        Load PDF and extract text of all pages.

        Args:
            path: Path to PDF file

        Returns:
            TextDocument with page texts joined by newlines

        Raises:
            LoadError: If PDF missing or invalid
        """
        pdf_path = self._require_file(path)

        try:
            with open(pdf_path, 'rb') as f:
                pdf_reader = PyPDF2.PdfReader(f)

                pages = []
                for page in pdf_reader.pages:
                    text = page.extract_text() or ''
                    if text.strip():
                        pages.append(text.rstrip('\n'))

                info = {}
                for key, name in self.INFO_FIELDS.items():
                    value = (pdf_reader.metadata or {}).get(key)
                    if value:
                        info[name] = str(value)

                page_count = len(pdf_reader.pages)

        except PyPDF2.errors.PdfReadError as e:
            raise LoadError(f"invalid PDF: {e}") from e
        except Exception as e:
            raise LoadError(f"error reading PDF: {e}") from e

        return self._create_document(
            content='\n'.join(pages),
            source_path=pdf_path,
            page_count=page_count,
            **info
        )
