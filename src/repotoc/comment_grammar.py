"""Comment grammars and the readers that pull a description out of them.

A grammar is an ordered tuple of strategies. Each strategy is either a
``LinePrefix`` (a run of lines starting with the same marker) or a
``DelimitedBlock`` (a block bounded by start and end markers). Strategies are
tried in order and the first non-empty result wins, so the order of each
grammar is significant and must not be rearranged.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType

from repotoc.constants import UNCOMMENTED_EXTENSIONS


@dataclass(frozen=True)
class LinePrefix:
    """Contiguous lines starting with ``prefix``, e.g. ``#`` or ``//``."""

    prefix: str

    def __post_init__(self):
        if not self.prefix:
            raise ValueError("LinePrefix requires a non-empty prefix")


@dataclass(frozen=True)
class DelimitedBlock:
    """A single block bounded by ``start`` ... ``end``, e.g. ``/*`` ... ``*/``."""

    start: str
    end: str

    def __post_init__(self):
        if not self.start or not self.end:
            raise ValueError("DelimitedBlock requires non-empty delimiters")


CommentStrategy = LinePrefix | DelimitedBlock
Grammar = tuple[CommentStrategy, ...]


def read_line_prefix(lines: Sequence[str], prefix: str) -> str:
    """Read the first run of lines that start with ``prefix``.

    Lines before the run are skipped. The run ends at the first line that
    does not start with the prefix. A repeated prefix (``## text`` for ``#``)
    is stripped entirely. Only the first captured line is whitespace-trimmed;
    later lines keep whatever follows their prefix. Captured lines are
    concatenated without a separator.

    Args:
        lines: Leading lines of a file
        prefix: Comment marker

    Returns:
        The concatenated comment text, or "" if no line starts with the prefix
    """
    captured: list[str] = []
    for line in lines:
        if not line.startswith(prefix):
            if captured:
                break
            continue
        while line.startswith(prefix):
            line = line[len(prefix):]
        captured.append(line if captured else line.strip())
    return "".join(captured)


def read_delimited_block(lines: Sequence[str], start: str, end: str) -> str:
    """Read the first block opened by ``start`` and closed by ``end``.

    The opening line has ``start`` removed and is whitespace-trimmed. Each
    following line is kept verbatim until one ends with ``end``; that line has
    ``end`` removed and closes the block. A block opened and closed on the same
    line yields its trimmed inner text. A block that never closes within
    ``lines`` yields "".

    Args:
        lines: Leading lines of a file
        start: Opening delimiter, matched at the start of a line
        end: Closing delimiter, matched at the end of a line

    Returns:
        The concatenated block text, or "" if no closed block was found
    """
    captured: list[str] = []
    started = False
    for line in lines:
        if not started:
            if not line.startswith(start):
                continue
            started = True
            line = line[len(start):].strip()
            if line.endswith(end):
                return line[: -len(end)].strip()
            captured.append(line)
        elif line.endswith(end):
            captured.append(line[: -len(end)])
            return "".join(captured)
        else:
            captured.append(line)
    return ""


def read_comment(strategy: CommentStrategy, lines: Sequence[str]) -> str:
    """Apply a single strategy to ``lines``."""
    if isinstance(strategy, LinePrefix):
        return read_line_prefix(lines, strategy.prefix)
    if isinstance(strategy, DelimitedBlock):
        return read_delimited_block(lines, strategy.start, strategy.end)
    raise TypeError(f"Unknown comment strategy: {strategy!r}")


def read_first_comment(grammar: Grammar, lines: Sequence[str]) -> str:
    """Try each strategy of ``grammar`` in order; return the first match."""
    for strategy in grammar:
        description = read_comment(strategy, lines)
        if description:
            return description
    return ""


# --- Grammar table ---

SLASHES = LinePrefix("//")
HASH = LinePrefix("#")
SEMICOLON = LinePrefix(";")
PERCENT = LinePrefix("%")
DOUBLE_DASH = LinePrefix("--")
DOUBLE_QUOTE = LinePrefix('"')
C_BLOCK = DelimitedBlock("/*", "*/")
JAVADOC_BLOCK = DelimitedBlock("/**", "*/")
OCAML_BLOCK = DelimitedBlock("(*", "*)")
OCAML_DOC_BLOCK = DelimitedBlock("(**", "*)")
HTML_BLOCK = DelimitedBlock("<!--", "-->")
LISP_BLOCK = DelimitedBlock("#|", "|#")

C_STYLE: Grammar = (SLASHES, C_BLOCK)
JAVA_STYLE: Grammar = C_STYLE + (JAVADOC_BLOCK,)
XML_STYLE: Grammar = (HTML_BLOCK,)
PERL_STYLE: Grammar = (HASH,)
LISP_STYLE: Grammar = (SEMICOLON, LISP_BLOCK)
HASKELL_STYLE: Grammar = (DOUBLE_DASH, DelimitedBlock("{-", "-}"))
FSHARP_STYLE: Grammar = (SLASHES, OCAML_BLOCK, OCAML_DOC_BLOCK)

DEFAULT_GRAMMAR: Grammar = (SLASHES, HASH)

COMMENT_GRAMMARS: MappingProxyType[str, Grammar] = MappingProxyType(
    {
        "bash": PERL_STYLE,
        "c": C_STYLE,
        "cl": LISP_STYLE,  # common lisp
        "clj": (SEMICOLON,),
        "coffee": PERL_STYLE,
        "cpp": C_STYLE,
        "cr": PERL_STYLE,  # crystal
        "cs": C_STYLE,
        "css": (C_BLOCK,),
        "cxx": C_STYLE,
        "d": C_STYLE + (DelimitedBlock("/+", "+/"),),
        "dart": C_STYLE,
        "edn": (SEMICOLON,),
        "el": (SEMICOLON,),  # emacs lisp
        "elm": HASKELL_STYLE,
        "erl": (PERCENT,),
        "ex": PERL_STYLE,
        "exs": PERL_STYLE,
        "fish": PERL_STYLE,
        "fs": FSHARP_STYLE,
        "fsi": FSHARP_STYLE,
        "fsx": FSHARP_STYLE,
        "groovy": C_STYLE,
        "hs": HASKELL_STYLE,
        "html": XML_STYLE,
        "hx": C_STYLE,  # haxe
        "java": JAVA_STYLE,
        "jl": PERL_STYLE + (DelimitedBlock("#=", "=#"),),  # julia
        "js": C_STYLE,
        "jsp": JAVA_STYLE,
        "kt": JAVA_STYLE,
        "lisp": LISP_STYLE,
        "lua": (DOUBLE_DASH, DelimitedBlock("--[[", "]]")),
        "m": C_STYLE,  # objective-c
        "matlab": (PERCENT,),
        "md": PERL_STYLE,
        "ml": (OCAML_BLOCK, OCAML_DOC_BLOCK),
        "nim": (HASH, DelimitedBlock("#[", "]#")),
        "php": C_STYLE + (HASH,),
        "pl": PERL_STYLE,
        "ps1": (HASH, DelimitedBlock("<#", "#>")),  # powershell
        "py": (HASH, DelimitedBlock('"""', '"""')),
        "r": PERL_STYLE,
        "rb": (HASH, DelimitedBlock("=begin", "=end")),
        "res": C_STYLE,  # rescript
        "resi": C_STYLE,
        "rkt": LISP_STYLE + (LinePrefix("#;"),),  # racket
        "rss": XML_STYLE,
        "rs": C_STYLE + (DelimitedBlock("/*!", "*/"), LinePrefix("//!")),
        "sass": C_STYLE,
        "scala": C_STYLE,
        "scm": LISP_STYLE,  # scheme
        "scss": C_STYLE,
        "sh": PERL_STYLE,
        "sql": (DOUBLE_DASH,),
        "st": (DOUBLE_QUOTE,),  # smalltalk
        "swift": C_STYLE,
        "tex": (PERCENT,),
        "ts": C_STYLE,
        "vb": (LinePrefix("'"), LinePrefix("REM")),
        "vim": (DOUBLE_QUOTE,),
        "xml": XML_STYLE,
        "yaml": PERL_STYLE,
        "yml": PERL_STYLE,
        "zig": (LinePrefix("///"), SLASHES),
        "zsh": PERL_STYLE,
    }
)


def get_extension(filename: str) -> str:
    """Return the text after the last ``.`` of ``filename``, or "" if none.

    Examples:
        >>> get_extension("main.py")
        'py'
        >>> get_extension("Makefile")
        ''
    """
    _, dot, extension = filename.rpartition(".")
    return extension if dot else ""


def get_grammar(extension: str) -> Grammar:
    """Look up the grammar for ``extension``, falling back to DEFAULT_GRAMMAR."""
    return COMMENT_GRAMMARS.get(extension, DEFAULT_GRAMMAR)


def is_uncommented(extension: str) -> bool:
    """True for formats that are never scanned for a description."""
    return extension in UNCOMMENTED_EXTENSIONS
