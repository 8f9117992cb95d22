"""Markdown and plain text document loader."""

import markdown

from doc_ingest.models import TextDocument
from .base import BaseDocLoader, LoadError, PathLike
from .html import extract_html_text


class MarkdownDocLoader(BaseDocLoader):
    """Load Markdown/TXT documents."""

    doc_type = 'markdown'

    def __init__(self, render_markdown: bool = True, encoding: str = 'utf-8'):
        """
        Initialize loader.

        Args:
            render_markdown: Strip markup by rendering Markdown to HTML
                and keeping its text. Raw text is kept otherwise.
            encoding: Text encoding of source files
        """
        self.render_markdown = render_markdown
        self.encoding = encoding

    def load(self, path: PathLike) -> TextDocument:
        """
        Load Markdown/TXT file.

        Args:
            path: Path to Markdown or TXT file

        Returns:
            TextDocument with line_count metadata

        Raises:
            LoadError: If file not found or not decodable
        """
        file_path = self._require_file(path)
        is_markdown = file_path.suffix.lower() in ('.md', '.markdown')

        try:
            content = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"error reading file: {e}") from e

        if is_markdown and self.render_markdown:
            try:
                content, _ = extract_html_text(markdown.markdown(content))
            except Exception as e:
                raise LoadError(f"error rendering Markdown: {e}") from e

        return self._create_document(
            content=content,
            source_path=file_path,
            doc_type='markdown' if is_markdown else 'text',
            line_count=len(content.splitlines())
        )
