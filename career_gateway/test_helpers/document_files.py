"""document_files.py
Builds small .txt, .pdf and .docx files on the fly for document extraction tests.
"""
from pathlib import Path

from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def write_txt(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def write_pdf(path: Path, lines: list[str]) -> Path:
    """One-page PDF with one line of text per entry (an empty list gives a blank page)."""
    pdf = canvas.Canvas(str(path), pagesize=letter)
    y = 750
    for line in lines:
        pdf.drawString(72, y, line)
        y -= 16
    pdf.showPage()
    pdf.save()
    return path


def write_docx(path: Path, paragraphs: list[str]) -> Path:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    document.save(str(path))
    return path
