"""Builtin configuration data for repotoc."""

TOC_FILENAME = "TOC.md"
README_FILENAME = "README.md"
CONFIG_FILENAME = ".toc.yaml"
GITIGNORE_FILENAME = ".gitignore"

# Number of lines read from the top of a file, not counting a shebang line
LEADING_LINE_COUNT = 6

BUILTIN_IGNORE_PATTERNS: tuple[str, ...] = (
    ".git",
    ".gitkeep",
    ".gitignore",
    ".gitattributes",
    ".dockerignore",
    "node_modules",
    README_FILENAME,
    TOC_FILENAME,
)

# Binary and font formats: never opened for a description
UNCOMMENTED_EXTENSIONS: frozenset[str] = frozenset(
    {"eot", "woff", "ttf", "jpeg", "gif", "jpg", "pdf", "png"}
)

# Path suffix -> description, used when a file has no leading comment
BUILTIN_DESCRIPTIONS: dict[str, str] = {
    ".circleci/config.yml": "CircleCI configuration",
    "dune": "Dune build",
    ".fsproj": "F# project",
    ".csproj": "C# project",
    "package.json": "npm configuration",
    "go.mod": "Go dependency management",
    "go.sum": "Lockfile for go.mod",
    CONFIG_FILENAME: "repotoc configuration",
}
