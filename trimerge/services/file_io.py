"""
File I/O service for reading merge inputs and writing merge output.

Handles:
- Encoding detection
- Binary file rejection
- Atomic writes
- Permission handling
"""

from __future__ import annotations

import os
import shutil
import tempfile
import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import chardet

logger = logging.getLogger(__name__)


class LineEnding(Enum):
    """Line ending style."""
    LF = auto()      # Unix: \n
    CRLF = auto()    # Windows: \r\n
    CR = auto()      # Old Mac: \r
    MIXED = auto()   # Mixed endings
    NONE = auto()    # No line endings (single line)


@dataclass
class FileContent:
    """Container for file content with metadata."""
    content: str
    encoding: str
    line_ending: LineEnding
    bom: bool
    size: int


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    content: Optional[FileContent] = None
    error: Optional[str] = None
    is_binary: bool = False


@dataclass
class WriteResult:
    """Result of a file write operation."""
    success: bool
    bytes_written: int = 0
    error: Optional[str] = None


class FileIOService:
    """Service for safe file I/O operations."""

    # Binary file signatures (magic bytes)
    BINARY_SIGNATURES = [
        b'\x89PNG',        # PNG
        b'\xff\xd8\xff',   # JPEG
        b'GIF8',           # GIF
        b'PK\x03\x04',     # ZIP
        b'\x1f\x8b',       # GZIP
        b'%PDF',           # PDF
        b'\x7fELF',        # ELF
    ]

    BOMS = [
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    ]

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1',
        binary_check_size: int = 8192
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding
        self.binary_check_size = binary_check_size

    def read_file(
        self,
        path: Path | str,
        encoding: Optional[str] = None,
        max_text_size: int = 50 * 1024 * 1024
    ) -> ReadResult:
        """
        Read a text file with automatic encoding detection.

        Args:
            path: Path to the file
            encoding: Force specific encoding (auto-detect if None)
            max_text_size: Maximum file size in bytes to read as text

        Returns:
            ReadResult with content or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            raw_content = path.read_bytes()
        except PermissionError:
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            return ReadResult(success=False, error=f"OS error: {e}")

        size = len(raw_content)
        if size > max_text_size:
            return ReadResult(
                success=False,
                error=f"File too large to merge ({size / 1024 / 1024:.2f} MB). "
                      f"Max size is {max_text_size / 1024 / 1024:.2f} MB."
            )

        bom = False
        detected_encoding = encoding
        for marker, bom_encoding in self.BOMS:
            if raw_content.startswith(marker):
                bom = True
                detected_encoding = detected_encoding or bom_encoding
                break

        if not bom and self._is_binary(raw_content[:self.binary_check_size]):
            return ReadResult(success=False, is_binary=True,
                              error=f"File appears to be binary: {path}")

        detected_encoding = detected_encoding or self._detect_encoding(raw_content)

        try:
            content = raw_content.decode(detected_encoding)
        except (UnicodeDecodeError, LookupError):
            logger.warning(
                "Could not decode %s as %s, falling back to %s",
                path, detected_encoding, self.fallback_encoding
            )
            content = raw_content.decode(self.fallback_encoding, errors='replace')
            detected_encoding = self.fallback_encoding

        logger.debug("Read %s (%d bytes, %s)", path, size, detected_encoding)
        return ReadResult(
            success=True,
            content=FileContent(
                content=content,
                encoding=detected_encoding,
                line_ending=self.detect_line_ending(content),
                bom=bom,
                size=size
            )
        )

    def write_file(
        self,
        path: Path | str,
        content: str,
        encoding: str = 'utf-8',
        line_ending: LineEnding = LineEnding.LF,
        atomic: bool = True,
        create_backup: bool = False,
        backup_extension: str = '.orig'
    ) -> WriteResult:
        """
        Write content to a file.

        Args:
            path: Path to write to
            content: Text to write
            encoding: Encoding to use
            line_ending: Line ending style to write
            atomic: Use atomic write (write to temp then move)
            create_backup: Copy an existing file aside before overwriting
            backup_extension: Suffix appended to the backup copy

        Returns:
            WriteResult with success status
        """
        path = Path(path)

        try:
            if create_backup and path.exists():
                backup_path = path.with_suffix(path.suffix + backup_extension)
                shutil.copy2(path, backup_path)

            line_sep = self._get_line_separator(line_ending)
            if line_sep != '\n':
                content = content.replace('\n', line_sep)
            encoded = content.encode(encoding)

            if atomic:
                dir_path = path.parent
                dir_path.mkdir(parents=True, exist_ok=True)

                fd, temp_path = tempfile.mkstemp(dir=dir_path)
                try:
                    with os.fdopen(fd, 'wb') as f:
                        f.write(encoded)
                    shutil.move(temp_path, path)
                except Exception:
                    if os.path.exists(temp_path):
                        os.unlink(temp_path)
                    raise
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(encoded)

            logger.debug("Wrote %d bytes to %s", len(encoded), path)
            return WriteResult(success=True, bytes_written=len(encoded))

        except PermissionError:
            return WriteResult(success=False, error=f"Permission denied: {path}")
        except (OSError, UnicodeEncodeError) as e:
            return WriteResult(success=False, error=f"Could not write {path}: {e}")

    def _is_binary(self, chunk: bytes) -> bool:
        """Check if a leading chunk of a file looks binary."""
        for sig in self.BINARY_SIGNATURES:
            if chunk.startswith(sig):
                return True

        if b'\x00' in chunk:
            return True

        # Ratio of control bytes other than tab/newline/form feed/CR
        non_text = sum(1 for b in chunk if b < 9 or 13 < b < 32)
        return len(chunk) > 0 and non_text / len(chunk) > 0.3

    def _detect_encoding(self, content: bytes) -> str:
        """Detect encoding of content."""
        if not content:
            return self.default_encoding

        result = chardet.detect(content)

        if result['confidence'] > 0.7 and result['encoding']:
            encoding = result['encoding'].lower()
            if encoding == 'ascii':
                return 'utf-8'  # ASCII is subset of UTF-8
            return encoding

        return self.default_encoding

    @staticmethod
    def detect_line_ending(content: str) -> LineEnding:
        """Detect line ending style in content."""
        crlf_count = content.count('\r\n')
        lf_count = content.count('\n') - crlf_count
        cr_count = content.count('\r') - crlf_count

        total = crlf_count + lf_count + cr_count
        if total == 0:
            return LineEnding.NONE

        if crlf_count == total:
            return LineEnding.CRLF
        elif lf_count == total:
            return LineEnding.LF
        elif cr_count == total:
            return LineEnding.CR
        else:
            return LineEnding.MIXED

    @staticmethod
    def _get_line_separator(line_ending: LineEnding) -> str:
        """Get the line separator string for a line ending type."""
        if line_ending == LineEnding.CRLF:
            return '\r\n'
        elif line_ending == LineEnding.CR:
            return '\r'
        else:
            return '\n'
