"""word_document_parser.py

Holds WordDocumentParser class using docx2txt for text extraction.
"""
import docx2txt

from career_gateway.exceptions import FileOpenError
from career_gateway.documents.file_parser import FileParser


class WordDocumentParser(FileParser):
    """
    Concrete parser for Microsoft Word documents (.docx).

    Uses ``docx2txt``, which also picks up text placed in textboxes, a common
    layout trick in resume templates.
    """

    SUPPORTED_EXTENSIONS = ['.docx']

    def parse(self) -> str:
        """
        Parses the Word document and returns its trimmed text.

        Raises:
            FileOpenError: If the file cannot be opened or read.
            FileEmptyError: If the document contains too little readable text.
        """
        try:
            full_text = docx2txt.process(self.file_path)
        except Exception as e:
            raise FileOpenError(self.file_path, str(e))

        return self._check_final_text(full_text)
