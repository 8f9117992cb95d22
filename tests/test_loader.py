"""Tests for document loading."""

import pytest
from docx import Document
from PyPDF2 import PdfWriter

from doc_ingest.loader import DocumentLoader, LoadError, read_as_text_document
from doc_ingest.loader.html import HTMLDocLoader, extract_html_text
from doc_ingest.loader.markdown import MarkdownDocLoader


SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Hello Page</title><style>p { color: red; }</style></head>
<body>
  <h1>Heading</h1>
  <p>Para   one
  continues</p>
  <script>var x = 1;</script>
  <p>Two &amp; three</p>
</body>
</html>
"""

SAMPLE_MARKDOWN = "# Title\n\nSome *bold* text.\n\n- a\n- b\n"


@pytest.fixture
def loader():
    return DocumentLoader()


def _write_docx(path, paragraphs, author=None):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if author:
        doc.core_properties.author = author
    doc.save(str(path))


def _write_docx_with_table(path, before, row, after):
    doc = Document()
    doc.add_paragraph(before)
    table = doc.add_table(rows=1, cols=len(row))
    for i, text in enumerate(row):
        table.cell(0, i).text = text
    doc.add_paragraph(after)
    doc.save(str(path))


def _write_pdf(path, title=None, author=None):
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    info = {}
    if title:
        info['/Title'] = title
    if author:
        info['/Author'] = author
    if info:
        writer.add_metadata(info)
    with open(path, 'wb') as f:
        writer.write(f)


class TestTextLoading:
    """Tests for plain text and Markdown."""

    def test_plain_text_kept_verbatim(self, loader, tmp_path):
        path = tmp_path / 'notes.txt'
        path.write_text("line one\nline two\n", encoding='utf-8')

        document = loader.load(path)

        assert document.content == "line one\nline two\n"
        assert document.metadata['doc_type'] == 'text'
        assert document.metadata['mime_type'] == 'text/plain'
        assert document.metadata['line_count'] == 2
        assert document.metadata['source_path'] == str(path)
        assert len(document.metadata['hash']) == 64  # SHA256

    def test_markdown_rendered_to_text(self, loader, tmp_path):
        path = tmp_path / 'readme.md'
        path.write_text(SAMPLE_MARKDOWN, encoding='utf-8')

        document = loader.load(path)

        assert document.content.split('\n') == ['Title', 'Some bold text.', 'a', 'b']
        assert document.metadata['doc_type'] == 'markdown'

    def test_markdown_raw(self, tmp_path):
        path = tmp_path / 'readme.md'
        path.write_text(SAMPLE_MARKDOWN, encoding='utf-8')

        document = DocumentLoader(render_markdown=False).load(path)

        assert document.content == SAMPLE_MARKDOWN

    def test_markdown_code_block_keeps_lines(self, loader, tmp_path):
        path = tmp_path / 'snippet.md'
        path.write_text('Intro\n\n    x = 1\n    y = 2\n    z = 3\n', encoding='utf-8')

        document = loader.load(path)

        assert document.content == 'Intro\nx = 1\ny = 2\nz = 3'
        assert document.metadata['mime_type'] == 'text/markdown'

    def test_undecodable_text(self, loader, tmp_path):
        path = tmp_path / 'latin.txt'
        path.write_bytes('caf\xe9'.encode('latin-1'))

        with pytest.raises(LoadError):
            loader.load(path)

    def test_alternate_encoding(self, tmp_path):
        path = tmp_path / 'latin.txt'
        path.write_bytes('caf\xe9'.encode('latin-1'))

        document = DocumentLoader(encoding='latin-1').load(path)

        assert document.content == 'caf\xe9'


class TestHTMLLoading:
    """Tests for HTML text extraction."""

    def test_extract_text(self):
        text, title = extract_html_text(SAMPLE_HTML)

        assert text == "Heading\nPara one continues\nTwo & three"
        assert title == 'Hello Page'

    def test_no_title(self):
        text, title = extract_html_text('<p>a</p><p>b</p>')

        assert text == 'a\nb'
        assert title is None

    def test_pre_keeps_line_breaks(self):
        text, _ = extract_html_text('<pre>line a\nline b\nline c</pre>')

        assert text == 'line a\nline b\nline c'

    def test_pre_keeps_indentation(self):
        text, _ = extract_html_text('<p>Code:</p><pre>def f():\n    return 1</pre><p>Done</p>')

        assert text == 'Code:\ndef f():\n    return 1\nDone'

    def test_load_html_file(self, loader, tmp_path):
        path = tmp_path / 'page.html'
        path.write_text(SAMPLE_HTML, encoding='utf-8')

        document = loader.load(path)

        assert 'var x' not in document.content
        assert document.metadata['doc_type'] == 'html'
        assert document.metadata['title'] == 'Hello Page'


class TestBinaryFormats:
    """Tests for DOCX and PDF."""

    def test_docx(self, loader, tmp_path):
        path = tmp_path / 'report.docx'
        _write_docx(path, ['First', '', 'Second'], author='Jane')

        document = loader.load(path)

        assert document.content == 'First\nSecond'
        assert document.metadata['paragraph_count'] == 2
        assert document.metadata['author'] == 'Jane'
        assert document.metadata['doc_type'] == 'docx'

    def test_docx_table_rows_in_order(self, loader, tmp_path):
        path = tmp_path / 'table.docx'
        _write_docx_with_table(path, 'Before', ['A', 'B'], 'After')

        document = loader.load(path)

        assert document.content == 'Before\nA | B\nAfter'
        assert document.metadata['table_count'] == 1
        assert document.metadata['paragraph_count'] == 2

    def test_corrupt_docx(self, loader, tmp_path):
        path = tmp_path / 'bad.docx'
        path.write_text('not a zip archive')

        with pytest.raises(LoadError) as exc_info:
            loader.load(path)

        assert str(exc_info.value).startswith('unable to read document: ')

    def test_pdf(self, loader, tmp_path):
        path = tmp_path / 'paper.pdf'
        _write_pdf(path, title='Blank', author='Jane')

        document = loader.load(path)

        assert document.content == ''
        assert document.metadata['page_count'] == 1
        assert document.metadata['title'] == 'Blank'
        assert document.metadata['author'] == 'Jane'
        assert document.metadata['mime_type'] == 'application/pdf'

    def test_invalid_pdf(self, loader, tmp_path):
        path = tmp_path / 'bad.pdf'
        path.write_bytes(b'this is not a pdf')

        with pytest.raises(LoadError):
            loader.load(path)


class TestFormatDetection:
    """Tests for auto-detection and error reporting."""

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            loader.load(tmp_path / 'nope.txt')

        err = exc_info.value
        assert str(err) == f"unable to read document: {err.cause}"
        assert 'nope.txt' in err.cause

    def test_sniff_text(self, loader, tmp_path):
        path = tmp_path / 'NOTES'
        path.write_text('plain words\n')

        assert loader.detect_format(path) == 'text'
        assert loader.load(path).metadata['doc_type'] == 'text'

    def test_sniff_html(self, loader, tmp_path):
        path = tmp_path / 'page.dat'
        path.write_text('<!DOCTYPE html><html><body><p>x</p></body></html>')

        document = loader.load(path)

        assert document.metadata['doc_type'] == 'html'
        assert document.content == 'x'

    def test_sniff_pdf(self, loader, tmp_path):
        path = tmp_path / 'download'
        _write_pdf(path)

        assert loader.detect_format(path) == 'pdf'

    def test_sniff_docx(self, loader, tmp_path):
        path = tmp_path / 'report.bin'
        _write_docx(path, ['Body'])

        assert loader.detect_format(path) == 'docx'
        assert loader.load(path).content == 'Body'

    def test_sniff_binary(self, loader, tmp_path):
        path = tmp_path / 'blob.bin'
        path.write_bytes(b'\x00\x01\x02\x03')

        with pytest.raises(LoadError) as exc_info:
            loader.load(path)

        assert 'unsupported format' in exc_info.value.cause

    def test_read_as_text_document(self, tmp_path):
        path = tmp_path / 'a.txt'
        path.write_text('hello')

        assert read_as_text_document(str(path)).content == 'hello'


class TestDocumentMetadata:
    """Tests for the common metadata schema."""

    def test_defaults_follow_loader(self):
        document = HTMLDocLoader()._create_document('x', 'page.html')

        assert document.metadata['doc_type'] == 'html'
        assert document.metadata['mime_type'] == 'text/html'
        assert document.metadata['char_count'] == 1

    def test_doc_type_selects_mime_type(self):
        document = MarkdownDocLoader()._create_document('x', 'notes.txt', doc_type='text')

        assert document.metadata['doc_type'] == 'text'
        assert document.metadata['mime_type'] == 'text/plain'

    def test_explicit_mime_type(self):
        document = MarkdownDocLoader()._create_document(
            'x', 'notes.mdx', mime_type='text/x-markdown'
        )

        assert document.metadata['doc_type'] == 'markdown'
        assert document.metadata['mime_type'] == 'text/x-markdown'


class TestLoadDirectory:
    """Tests for recursive loading."""

    def test_load_directory(self, loader, tmp_path):
        (tmp_path / 'a.txt').write_text('alpha')
        (tmp_path / 'sub').mkdir()
        (tmp_path / 'sub' / 'b.md').write_text('beta')
        (tmp_path / 'bad.pdf').write_bytes(b'garbage')
        (tmp_path / 'ignored.xyz').write_text('skip me')

        documents = loader.load_directory(tmp_path)

        assert [d.content for d in documents] == ['alpha', 'beta']

    def test_missing_directory(self, loader, tmp_path):
        with pytest.raises(LoadError):
            loader.load_directory(tmp_path / 'missing')
