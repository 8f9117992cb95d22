"""HTML document loader."""

from html.parser import HTMLParser
from typing import List, Optional, Tuple
import re

from doc_ingest.models import TextDocument
from .base import BaseDocLoader, LoadError, PathLike


# Elements whose boundaries end a line of text
BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'br', 'dd', 'div', 'dl',
    'dt', 'figcaption', 'figure', 'footer', 'h1', 'h2', 'h3', 'h4', 'h5',
    'h6', 'header', 'hr', 'li', 'main', 'nav', 'ol', 'p', 'pre', 'section',
    'table', 'td', 'th', 'tr', 'ul',
}

# Elements whose text is never visible
SKIP_TAGS = {'script', 'style', 'noscript', 'template', 'head'}


class _TextExtractor(HTMLParser):
    """Collects visible text, one block element per line."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._lines: List[str] = []
        self._buffer: List[str] = []
        self._skip_depth = 0
        self._pre_depth = 0
        self._in_title = False
        self.title: Optional[str] = None

    def _flush(self):
        line = ''.join(self._buffer)
        self._buffer = []
        if self._pre_depth:
            # Preformatted text keeps its indentation
            line = line.rstrip()
        else:
            line = re.sub(r'\s+', ' ', line).strip()
        if line:
            self._lines.append(line)

    def handle_starttag(self, tag, attrs):
        if tag == 'title':
            self._in_title = True
        elif tag in SKIP_TAGS:
            self._skip_depth += 1
        elif tag in BLOCK_TAGS:
            self._flush()
            if tag == 'pre':
                self._pre_depth += 1

    def handle_endtag(self, tag):
        if tag == 'title':
            self._in_title = False
        elif tag in SKIP_TAGS:
            self._skip_depth = max(self._skip_depth - 1, 0)
        elif tag in BLOCK_TAGS:
            self._flush()
            if tag == 'pre':
                self._pre_depth = max(self._pre_depth - 1, 0)

    def handle_data(self, data):
        if self._in_title:
            self.title = ((self.title or '') + data).strip() or None
        elif self._skip_depth:
            return
        elif self._pre_depth:
            pieces = data.split('\n')
            self._buffer.append(pieces[0])
            for piece in pieces[1:]:
                self._flush()
                self._buffer.append(piece)
        else:
            # Source newlines are whitespace; only block tags break lines
            self._buffer.append(data)

    def text(self) -> str:
        self._flush()
        return '\n'.join(self._lines)


def extract_html_text(markup: str) -> Tuple[str, Optional[str]]:
    """
    Extract visible text and <title> from HTML.

    Args:
        markup: HTML source

    Returns:
        (text, title) where text has one block element per line
    """
    parser = _TextExtractor()
    parser.feed(markup)
    parser.close()
    return parser.text(), parser.title


class HTMLDocLoader(BaseDocLoader):
    """Load HTML pages as plain text."""

    doc_type = 'html'

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def load(self, path: PathLike) -> TextDocument:
        """
        Load HTML file and extract its visible text.

        Args:
            path: Path to HTML file

        Returns:
            TextDocument with title metadata when the page has one

        Raises:
            LoadError: If file missing or unreadable
        """
        file_path = self._require_file(path)

        try:
            markup = file_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"error reading HTML: {e}") from e

        content, title = extract_html_text(markup)

        return self._create_document(
            content=content,
            source_path=file_path,
            title=title
        )
