"""Input discovery and output naming for batch conversion."""

from pathlib import Path
from typing import List


def mbox_path_for(lafite_path: Path, output_dir: Path, output_suffix: str = ".mbox") -> Path:
    """
    Name the mbox file for a Lafite file: the full original name plus the suffix.

    Examples:
        >>> mbox_path_for(Path("/in/Active.mail"), Path("/out"))
        PosixPath('/out/Active.mail.mbox')
    """
    return output_dir / f"{lafite_path.name}{output_suffix}"


def find_lafite_files(directory: Path, input_suffix: str = ".mail") -> List[Path]:
    """
    List the regular files directly in directory whose names end with input_suffix.

    Args:
        directory: Directory to scan (not recursive)
        input_suffix: File name ending to select

    Returns:
        Matching paths sorted by name
    """
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(input_suffix)
    )
