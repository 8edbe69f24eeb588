"""document_text_extractor.py
Holds DocumentTextExtractor, which picks the right FileParser for an uploaded
resume or job description and returns its plain text.
"""
from typing import Dict, Optional, Type

from career_gateway.config import GATEWAY_DEFAULTS
from career_gateway.documents.file_parser import FileParser
from career_gateway.documents.helpers.check_file_extension import check_file_extension
from career_gateway.documents.pdf_parser import PDFParser
from career_gateway.documents.text_file_parser import TextFileParser
from career_gateway.documents.word_document_parser import WordDocumentParser
from career_gateway.logging import LoggerFactory

logger = LoggerFactory().get_logger(name="document_text_extractor", logger_type="default")


class DocumentTextExtractor:
    """
    Turns a document on disk into text that can be sent to an adapter.

    Args:
        max_file_size_mb (float | None): Maximum allowed file size in MB.
        min_text_length (int): Minimum characters of usable text.
        filetype_parser_map (Dict[str, Type[FileParser]] | None): Override of the
            extension -> parser map.

    Example:
        >>> extractor = DocumentTextExtractor()
        >>> text = extractor.extract_text("path/to/resume.pdf")
    """

    FILETYPE_PARSER_MAP: Dict[str, Type[FileParser]] = {
        ".txt": TextFileParser,
        ".pdf": PDFParser,
        ".docx": WordDocumentParser,
    }

    def __init__(
        self,
        max_file_size_mb: Optional[float] = GATEWAY_DEFAULTS.MAX_FILE_SIZE_MB,
        min_text_length: int = GATEWAY_DEFAULTS.MIN_DOCUMENT_TEXT_LENGTH,
        filetype_parser_map: Optional[Dict[str, Type[FileParser]]] = None,
    ):
        self.max_file_size_mb = max_file_size_mb
        self.min_text_length = min_text_length
        self.filetype_parser_map = filetype_parser_map or dict(self.FILETYPE_PARSER_MAP)

    @property
    def supported_extensions(self):
        return list(self.filetype_parser_map.keys())

    def extract_text(self, file_path: str) -> str:
        """
        Extract trimmed text from `file_path`.

        Args:
            file_path (str): Path to a .txt, .pdf or .docx file.

        Returns:
            str: The document text.

        Raises:
            FileNotSupportedError: If the extension has no parser.
            FileNotFoundError: If the file does not exist.
            FileTooLargeError: If the file exceeds `max_file_size_mb`.
            FileOpenError: If the parser cannot read the file.
            FileEmptyError: If too little text could be extracted.
        """
        ext = check_file_extension(
            file_path=file_path,
            supported_extensions=self.supported_extensions,
        )
        parser_class = self.filetype_parser_map[ext]

        parser = parser_class(
            file_path=file_path,
            max_file_size_mb=self.max_file_size_mb,
            min_text_length=self.min_text_length,
        )
        text = parser.parse()
        logger.info(f"Extracted {len(text)} characters from `{ext}` document")
        return text
