"""Markdown output generation: layout, rendering, build and check."""

import pathlib
from collections.abc import Mapping

from repotoc.config import load_config
from repotoc.constants import TOC_FILENAME
from repotoc.errors import OrphanedPathError
from repotoc.file_operations import IgnoreMatcher, collect_records
from repotoc.models import Config, Layout, Record, Stats

LINE_WIDTH = 80


def convert_records_to_layout(records: Mapping[str, Record]) -> Layout:
    """Arrange records into a tree keyed by path segment.

    Paths are inserted in sorted order, so a directory is always inserted
    before anything inside it.

    Args:
        records: Mapping from relative path to Record

    Returns:
        The root Layout node

    Raises:
        OrphanedPathError: If a record's parent directory was never recorded
    """
    root = Layout(complete_path="", filename="", is_dir=True, description="root")

    for path in sorted(p for p in records if p):
        record = records[path]
        *parents, filename = path.split("/")

        parent = root
        for segment in parents:
            if segment not in parent.children:
                raise OrphanedPathError(path)
            parent = parent.children[segment]

        parent.children[filename] = Layout(
            complete_path=path,
            filename=filename,
            is_dir=record.is_dir,
            description=record.description,
        )
    return root


def order_children(layout: Layout, show_first: list[str]) -> list[str]:
    """Order the children of ``layout`` for display.

    Children named in ``show_first`` come first, in the order given, then the
    remaining names alphabetically, then dotfiles alphabetically.
    """
    prioritized: list[str] = []
    for priority_path in show_first:
        parent, _, name = priority_path.rstrip("/").rpartition("/")
        if parent == layout.complete_path and name in layout.children and name not in prioritized:
            prioritized.append(name)

    rest = [name for name in layout.children if name not in prioritized]
    regular = sorted(name for name in rest if not name.startswith("."))
    dotfiles = sorted(name for name in rest if name.startswith("."))
    return prioritized + regular + dotfiles


def render_layout(
    out: list[str], layout: Layout, config: Config, stats: Stats, indent: int
) -> None:
    """Append the markdown for ``layout`` and its descendants to ``out``."""
    if layout.description == "":
        if layout.is_dir:
            stats.add_missing_dir(layout.complete_path)
        else:
            stats.add_missing_file(layout.complete_path)

    if layout.filename:
        indent_str = " " * indent
        out.append(f"{indent_str}- [{layout.filename}]({layout.complete_path}):")
        width = (
            len(layout.description)
            + indent
            + len(layout.filename)
            + len(layout.complete_path)
            + 8
        )
        if layout.description == "" or width < LINE_WIDTH:
            out.append(f" {layout.description}")
        else:
            out.append(f"\n{indent_str}  {layout.description}")
        out.append("\n")

    for child in order_children(layout, config.show_first):
        render_layout(out, layout.children[child], config, stats, indent + 2)


def render_stats(stats: Stats) -> str:
    """Render the footer summarizing missing descriptions."""
    footer = "\n\n*Generated by repotoc* - *"
    if stats.is_complete:
        return footer + "the table of contents is fully specified!* 🎉 \n\n"
    return (
        footer
        + f"{stats.missing_dir_count} dirs and {stats.missing_file_count} files "
        + "still need descriptions*\n\n"
    )


def render_toc(layout: Layout, config: Config) -> tuple[Stats, str]:
    """Render the full table of contents for ``layout``."""
    stats = Stats()
    out: list[str] = []
    # The root node sits one level above the first printed level
    render_layout(out, layout, config, stats, -2)
    out.append(render_stats(stats))
    return stats, "".join(out)


def generate_toc(directory: pathlib.Path, verbose: bool = False) -> tuple[Stats, str]:
    """Scan ``directory`` and produce its table of contents.

    Args:
        directory: Repository root
        verbose: Print per-entry progress

    Returns:
        Tuple of the missing-description Stats and the markdown text

    Raises:
        ConfigError: If ``.toc.yaml`` is unusable
        OrphanedPathError: If the walk produced a child before its parent
        OSError: If the directory tree or an ignore file cannot be read
    """
    config = load_config(directory)

    ignores = IgnoreMatcher()
    ignores.add_builtin(directory)
    ignores.add_lines(config.ignore)

    records = collect_records(directory, config, ignores, verbose)
    layout = convert_records_to_layout(records)
    return render_toc(layout, config)


def write_toc(directory: pathlib.Path, text: str) -> pathlib.Path:
    """Write ``text`` to the directory's TOC.md and return its path."""
    toc_path = directory / TOC_FILENAME
    toc_path.write_bytes(text.encode("utf-8"))
    return toc_path


def is_toc_current(directory: pathlib.Path, text: str) -> bool:
    """Compare ``text`` byte for byte with the stored TOC.md; a missing file is stale."""
    try:
        current = (directory / TOC_FILENAME).read_bytes()
    except OSError:
        return False
    return current == text.encode("utf-8")
