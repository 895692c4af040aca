"""repotoc: build a markdown table of contents for a repository.

Each file is described by the first comment at its top, each directory by
its README.md. A check mode verifies that a committed TOC.md is current.
"""

__version__ = "0.1.0"

from repotoc.cli import main
from repotoc.file_operations import get_file_description
from repotoc.models import Record

__all__ = ["main", "get_file_description", "Record", "__version__"]
