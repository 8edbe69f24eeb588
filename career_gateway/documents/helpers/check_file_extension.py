"""check_file_extension.py
Checks a file name's extension against the extensions a document parser accepts.
"""

import os
from typing import Iterable

from career_gateway.exceptions import FileNotSupportedError

def check_file_extension(file_path: str, supported_extensions: Iterable[str]) -> str:
    """
    Validate and return the lowercase extension of `file_path`.

    The longest matching supported extension wins, so multi-dot entries such
    as '.tar.gz' can be listed.

    Raises:
        FileNotSupportedError: If no supported extension matches.
    """
    supported_extensions = list(supported_extensions)
    file_name = os.path.basename(file_path).lower()

    for ext in sorted(supported_extensions, key=len, reverse=True):
        if file_name.endswith(ext.lower()):
            return ext.lower()

    ext = os.path.splitext(file_name)[1]
    raise FileNotSupportedError(
        extension=ext,
        supported_extensions=supported_extensions
    )
