"""text_file_parser.py

Holds TextFileParser class for plain-text uploads.
"""
from career_gateway.exceptions import FileOpenError
from career_gateway.documents.file_parser import FileParser


class TextFileParser(FileParser):
    """
    Concrete parser for plain-text documents (.txt).

    Bytes that are not valid UTF-8 are replaced rather than rejected, since
    pasted resumes regularly carry stray characters from other encodings.
    """
    SUPPORTED_EXTENSIONS = ['.txt']

    def parse(self) -> str:
        try:
            with open(self.file_path, "r", encoding="utf-8", errors="replace") as f:
                full_text = f.read()
        except OSError as e:
            raise FileOpenError(self.file_path, str(e))

        return self._check_final_text(full_text)
