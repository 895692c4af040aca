"""File system operations: description extraction, ignore matching and the walk."""

import enum
import os
import pathlib
import sys
from collections.abc import Callable, Iterable
from itertools import islice

import pathspec
from tqdm import tqdm

from repotoc.comment_grammar import (
    get_extension,
    get_grammar,
    is_uncommented,
    read_first_comment,
)
from repotoc.constants import (
    BUILTIN_DESCRIPTIONS,
    BUILTIN_IGNORE_PATTERNS,
    GITIGNORE_FILENAME,
    LEADING_LINE_COUNT,
    README_FILENAME,
)
from repotoc.escape import escape_markdown
from repotoc.models import Config, Record


class WalkAction(enum.Enum):
    """Returned by a walk visitor to steer the traversal."""

    CONTINUE = "continue"
    SKIP_SUBTREE = "skip_subtree"


def read_leading_lines(file_path: pathlib.Path, count: int = LEADING_LINE_COUNT) -> list[str]:
    """Read up to ``count`` lines from the top of a file, dropping a shebang line.

    A leading ``#!`` line is discarded and does not count towards ``count``.

    Args:
        file_path: File to read
        count: Maximum number of lines to return

    Returns:
        Lines without their line terminators

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(file_path, encoding="utf-8", errors="ignore") as f:
        first_line = f.readline()
        if not first_line:
            return []
        lines = [] if first_line.startswith("#!") else [first_line]
        lines.extend(islice(f, count - len(lines)))
    return [line.rstrip("\r\n") for line in lines]


def get_file_description(file_path: pathlib.Path) -> str:
    """Get a file's description from its first top-level comment.

    Files with a denylisted extension are never opened.

    Args:
        file_path: File to describe

    Returns:
        Markdown-escaped description, or "" if the file has no leading comment

    Raises:
        OSError: If the file cannot be opened or read
    """
    extension = get_extension(file_path.name)
    if is_uncommented(extension):
        return ""
    lines = read_leading_lines(file_path)
    description = read_first_comment(get_grammar(extension), lines)
    return escape_markdown(description)


def get_directory_description(dir_path: pathlib.Path) -> str:
    """Describe a directory by its README.md; no README means no description."""
    readme_path = dir_path / README_FILENAME
    if not readme_path.is_file():
        return ""
    return get_file_description(readme_path)


def get_default_description(relative_path: str, config: Config) -> str:
    """Find a suffix-based default description; configured defaults win over builtin ones."""
    description = ""
    for suffix, default in BUILTIN_DESCRIPTIONS.items():
        if relative_path.endswith(suffix):
            description = default
    for suffix, default in config.default_descriptions.items():
        if relative_path.endswith(suffix):
            description = default
    return description


def describe_entry(root: pathlib.Path, relative_path: str, is_dir: bool, config: Config) -> str:
    """Work out the description of one walked entry.

    Precedence: configured description for the path, then the description
    read from the file (or the directory's README), then a default
    description matched by suffix. Read errors degrade to no description.
    """
    if relative_path in config.descriptions:
        return config.descriptions[relative_path]

    entry_path = root / relative_path
    try:
        if is_dir:
            description = get_directory_description(entry_path)
        else:
            description = get_file_description(entry_path)
    except OSError as e:
        print(f"Warning: Could not read {relative_path}: {e}", file=sys.stderr)
        description = ""

    if description:
        return description
    return escape_markdown(get_default_description(relative_path, config))


class IgnoreMatcher:
    """Gitignore-style matching over paths relative to the scan root.

    Patterns from a nested ``.gitignore`` only apply below the directory that
    holds it, and are matched against paths relative to that directory.
    """

    def __init__(self):
        self._specs: list[tuple[str, pathspec.PathSpec]] = []

    def add_lines(self, lines: Iterable[str], base: str = "") -> None:
        spec = pathspec.PathSpec.from_lines("gitwildmatch", lines)
        self._specs.append((base, spec))

    def add_file(self, path: pathlib.Path, base: str = "") -> None:
        """Add the patterns of a gitignore file.

        Raises:
            OSError: If the file cannot be read
        """
        with open(path, encoding="utf-8", errors="ignore") as f:
            self.add_lines(f.readlines(), base)

    def add_builtin(self, root: pathlib.Path) -> None:
        """Add the builtin patterns and the root ``.gitignore``, if there is one."""
        self.add_lines(BUILTIN_IGNORE_PATTERNS)
        root_ignore_file = root / GITIGNORE_FILENAME
        if root_ignore_file.is_file():
            self.add_file(root_ignore_file)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check a POSIX path relative to the root against every pattern set."""
        candidate = relative_path + "/" if is_dir else relative_path
        for base, spec in self._specs:
            if base:
                if not candidate.startswith(base + "/"):
                    continue
                local = candidate[len(base) + 1:]
            else:
                local = candidate
            if spec.match_file(local):
                return True
        return False


def walk_tree(root: pathlib.Path, visit: Callable[[str, bool], WalkAction]) -> None:
    """Depth-first walk of everything below ``root``.

    Entries of each directory are visited in lexical order, except that a
    ``.gitignore`` is always visited first so its patterns apply to its
    siblings. Symlinked directories are not descended into.

    Args:
        root: Directory to walk; not itself visited
        visit: Called with the POSIX relative path and whether the entry is a
            directory; returning SKIP_SUBTREE prunes a directory

    Raises:
        OSError: If a directory cannot be listed
    """
    _walk_directory(root, "", visit)


def _walk_directory(
    directory: pathlib.Path, prefix: str, visit: Callable[[str, bool], WalkAction]
) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: (e.name != GITIGNORE_FILENAME, e.name))

    for entry in entries:
        relative_path = prefix + entry.name
        is_dir = entry.is_dir(follow_symlinks=False)
        action = visit(relative_path, is_dir)
        if is_dir and action is WalkAction.CONTINUE:
            _walk_directory(pathlib.Path(entry.path), relative_path + "/", visit)


def collect_records(
    root: pathlib.Path, config: Config, ignores: IgnoreMatcher, verbose: bool = False
) -> dict[str, Record]:
    """Walk ``root`` and describe every entry that is not ignored.

    Nested ``.gitignore`` files are added to ``ignores`` as they are found.
    Directories listed in ``config.no_directory_contents`` are recorded but
    their contents are not.

    Args:
        root: Directory to scan
        config: Repository configuration
        ignores: Matcher for ignored paths
        verbose: Print each entry and show a progress bar

    Returns:
        Mapping from relative path to Record
    """
    no_listing = {path.rstrip("/") for path in config.no_directory_contents}
    records: dict[str, Record] = {}

    with tqdm(desc="Scanning", unit="entry", disable=not verbose) as pbar:

        def visit(relative_path: str, is_dir: bool) -> WalkAction:
            pbar.update(1)
            parent, _, name = relative_path.rpartition("/")

            # The root .gitignore was added up front
            if not is_dir and name == GITIGNORE_FILENAME and parent:
                ignores.add_file(root / relative_path, base=parent)
                return WalkAction.CONTINUE

            if ignores.matches(relative_path, is_dir):
                return WalkAction.SKIP_SUBTREE

            description = describe_entry(root, relative_path, is_dir, config)
            records[relative_path] = Record(
                path=relative_path, description=description, is_dir=is_dir
            )
            if verbose:
                print(f"  ✓ {relative_path}: {description or '(no description)'}")

            if is_dir and relative_path in no_listing:
                return WalkAction.SKIP_SUBTREE
            return WalkAction.CONTINUE

        walk_tree(root, visit)

    return records
