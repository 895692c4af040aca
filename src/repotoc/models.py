"""Data models for repotoc."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Record:
    """Description of a single walked entry.

    Attributes:
        path: POSIX path relative to the scan root
        description: Extracted or configured description, "" if none
        is_dir: Whether the entry is a directory
    """

    path: str
    description: str
    is_dir: bool


@dataclass
class Layout:
    """A node of the rendered tree."""

    complete_path: str
    filename: str
    is_dir: bool
    description: str
    children: dict[str, "Layout"] = field(default_factory=dict)


@dataclass
class Stats:
    """Entries still lacking a description."""

    missing: list[str] = field(default_factory=list)
    missing_dir_count: int = 0
    missing_file_count: int = 0

    def add_missing_file(self, path: str) -> None:
        self.missing_file_count += 1
        self.missing.append(path)

    def add_missing_dir(self, path: str) -> None:
        self.missing_dir_count += 1
        self.missing.append(path)

    @property
    def is_complete(self) -> bool:
        return self.missing_dir_count == 0 and self.missing_file_count == 0


@dataclass
class Config:
    """Settings read from ``.toc.yaml``.

    Attributes:
        ignore: Extra gitignore-style patterns
        no_directory_contents: Directories whose children are not listed
        descriptions: Relative path -> literal description
        default_descriptions: Path suffix -> fallback description
        show_first: Relative paths listed before their siblings, in order
    """

    ignore: list[str] = field(default_factory=list)
    no_directory_contents: list[str] = field(default_factory=list)
    descriptions: dict[str, str] = field(default_factory=dict)
    default_descriptions: dict[str, str] = field(default_factory=dict)
    show_first: list[str] = field(default_factory=list)
