"""Loading option descriptor tables from files."""

from pathlib import Path

from .environment_helper import debug_log
from .exceptions import DescriptorFileError
from .option_table import OptionTable
from .types import ArgsList

MAX_FILE_SIZE = 1024 * 1024
MAX_LINE_LENGTH = 1024


class DescriptorLoader:
    """Reads descriptor strings, one per line, from a table file."""

    @staticmethod
    def load(path: Path) -> ArgsList:
        """
        Load descriptor strings from a file.

        Blank lines and lines starting with '#' are skipped. Leading
        whitespace is kept because a leading space is the "no short form"
        sentinel.

        Args:
            path: Path to the descriptor file

        Returns:
            Descriptor strings in file order

        Raises:
            DescriptorFileError: If the file cannot be read or is too large
        """
        descriptors: ArgsList = []

        try:
            file_size = path.stat().st_size
            if file_size > MAX_FILE_SIZE:
                raise DescriptorFileError(
                    str(path), message=f"File too large ({file_size} bytes)"
                )

            with open(path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    DescriptorLoader._process_line(
                        line, line_num, str(path), descriptors
                    )
        except UnicodeDecodeError as e:
            raise DescriptorFileError(
                str(path), message=f"Invalid file encoding: {e}"
            ) from e
        except OSError as e:
            raise DescriptorFileError(
                str(path), message=f"Cannot read file: {e.strerror}"
            ) from e

        debug_log(f"load: {len(descriptors)} descriptors from {path}")
        return descriptors

    @staticmethod
    def load_table(path: Path) -> OptionTable:
        """Load and compile a descriptor file."""
        return OptionTable.compile(DescriptorLoader.load(path))

    @staticmethod
    def _process_line(
        line: str, line_num: int, path: str, descriptors: ArgsList
    ) -> None:
        line = line.rstrip("\r\n")

        if not line.strip() or line.startswith("#"):
            return

        if len(line) > MAX_LINE_LENGTH:
            raise DescriptorFileError(
                path, line_num, f"Line too long ({len(line)} characters)"
            )

        descriptors.append(line)
