"""Setup configuration for doc-ingest."""

from setuptools import setup, find_packages

setup(
    name='doc-ingest',
    version='1.0.0',
    description='Document text extraction and overlapping line chunking',
    packages=find_packages(include=['doc_ingest', 'doc_ingest.*']),
    python_requires='>=3.9',
    install_requires=[
        'python-dotenv==1.0.1',
        'PyYAML==6.0.2',
        'click==8.1.7',
        'PyPDF2==3.0.1',
        'python-docx==1.1.2',
        'markdown==3.7',
    ],
    extras_require={
        'test': ['pytest>=7.4'],
    },
    entry_points={
        'console_scripts': [
            'doc-ingest=doc_ingest.cli:cli',
        ],
    },
)
