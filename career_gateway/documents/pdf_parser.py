"""pdf_parser.py

Holds PDFParser class.
"""
import pymupdf

from career_gateway.exceptions import FileOpenError
from career_gateway.documents.file_parser import FileParser

class PDFParser(FileParser):
    """
    Concrete parser for PDF documents (.pdf).

    This class extends the abstract ``FileParser`` and uses PyMuPDF to extract
    the text of every page, in page order.

    Attributes:
        SUPPORTED_EXTENSIONS (List[str]): List of file extensions supported by
            this parser (only ``.pdf``).
    """
    SUPPORTED_EXTENSIONS = ['.pdf']

    def parse(self) -> str:
        """
        Parses the PDF document and returns its trimmed text.

        Raises:
            FileOpenError: If the file cannot be opened or read by PyMuPDF.
            FileEmptyError: If the PDF contains too little readable text
                (e.g. a scanned image without a text layer).
        """
        full_text = self._get_pdf_contents()
        return self._check_final_text(full_text)

    def _get_pdf_contents(self) -> str:
        """
        Opens the PDF file using PyMuPDF and joins the text of all pages.

        Raises:
            FileOpenError: If the PDF file cannot be opened.
        """
        try:
            doc = pymupdf.open(self.file_path)
        except Exception as e:
            raise FileOpenError(self.file_path, str(e))

        try:
            pages = [page.get_text("text") for page in doc]
        finally:
            doc.close()

        return "\n".join(pages)
