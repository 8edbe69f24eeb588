"""file_parser.py

Holds abstract FileParser class inherited by filetype-specific parsers.
"""

import os
from abc import ABC, abstractmethod

from career_gateway.config import GATEWAY_DEFAULTS
from career_gateway.exceptions import FileTooLargeError, FileEmptyError
from career_gateway.documents.helpers.check_file_extension import check_file_extension

class FileParser(ABC):
    """
    Abstract base class representing a generic document text parser.

    All concrete parsers must implement the `parse` method.

    Args:
        file_path (str): Path to the file to parse.
        max_file_size_mb (float | None, optional): Maximum allowed file size in megabytes.
            If None, no size limit is enforced.
        min_text_length (int, optional): Extracted text shorter than this (after
            trimming) is treated as empty.

    Attributes:
        file_path (str): Path to the file.
        max_file_size_mb (float | None): Maximum allowed file size.
        min_text_length (int): Minimum number of characters of usable text.
    """
    # Extensions supported by a specific concrete class (to be overwritten by children)
    SUPPORTED_EXTENSIONS = []

    def __init__(
        self,
        file_path: str,
        max_file_size_mb: float | None = GATEWAY_DEFAULTS.MAX_FILE_SIZE_MB,
        min_text_length: int = GATEWAY_DEFAULTS.MIN_DOCUMENT_TEXT_LENGTH,
    ):
        self.file_path = file_path
        self.max_file_size_mb = max_file_size_mb
        self.min_text_length = min_text_length
        self._validate_file()
        check_file_extension(self.file_path, self.SUPPORTED_EXTENSIONS)

    def _validate_file(self):
        """Validate whether the file can be parsed by this parser.

        Raises:
            FileNotFoundError: Raised if the file cannot be found at file_path
            FileTooLargeError: Raised if the file exceeds the max_file_size_mb
        """
        if not os.path.exists(self.file_path):
            raise FileNotFoundError(f"File not found: {self.file_path}")

        if self.max_file_size_mb is not None:
            # 1 MB = 1024 * 1024 bytes
            max_size_bytes = int(self.max_file_size_mb * 1024 * 1024)
            actual_size_bytes = os.path.getsize(self.file_path)

            if actual_size_bytes > max_size_bytes:
                raise FileTooLargeError(
                    max_size=max_size_bytes,
                    actual_size=actual_size_bytes
                )

    def _check_final_text(self, full_text: str) -> str:
        """
        Trim the extracted text and make sure enough of it is left to be useful.

        Args:
            full_text (str): The complete text extracted from a file.

        Returns:
            str: The trimmed text.

        Raises:
            FileEmptyError: If fewer than `min_text_length` characters remain.
        """
        text = (full_text or "").strip()
        if len(text) < self.min_text_length:
            raise FileEmptyError(
                self.file_path,
                message="File appears to be empty. Please paste the text directly.",
            )
        return text

    @abstractmethod
    def parse(self) -> str:
        """
        Parse the file located at `self.file_path` and return its trimmed text.
        """
        pass
