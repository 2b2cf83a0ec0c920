"""Extension normalization and content-kind classification."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import FrozenSet, Tuple

NO_EXTENSION = "(no-ext)"


class ContentKind(str, Enum):
    """Coarse content category that drives extraction dispatch."""

    TEXT = "text"
    PDF = "pdf"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
    UNKNOWN = "generic"


# Source, config and markup formats read directly as UTF-8.
TEXT_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        # plain text
        ".txt", ".md", ".csv", ".tsv", ".log",
        # data and config
        ".json", ".xml", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf", ".env",
        # javascript / typescript
        ".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs",
        # web and templates
        ".html", ".htm", ".css", ".scss", ".sass", ".less", ".svg",
        ".vue", ".svelte", ".pug", ".jade", ".slim", ".haml",
        ".ejs", ".handlebars", ".hbs", ".mustache", ".twig", ".blade", ".erb",
        ".asp", ".aspx", ".jsp",
        # python
        ".py", ".pyw", ".pyx", ".pyi",
        # jvm
        ".java", ".kt", ".scala", ".clj", ".gradle", ".maven",
        # c family
        ".c", ".cpp", ".cc", ".cxx", ".h", ".hpp", ".hh", ".hxx",
        # .net
        ".cs", ".vb", ".vbs", ".fs",
        ".go", ".rs", ".rb", ".php", ".phtml", ".swift",
        # shell
        ".sh", ".bash", ".zsh", ".fish", ".ps1", ".bat", ".cmd",
        # other languages
        ".r", ".m", ".matlab", ".sql", ".pl", ".perl", ".lua", ".dart", ".elm",
        ".ex", ".exs", ".cr", ".nim", ".zig", ".v", ".hx", ".purs", ".reason",
        ".re", ".rescript", ".coffee", ".ls", ".asm", ".s", ".f", ".f90",
        ".pas", ".dpr", ".ml",
        # build tooling and dotfiles
        ".cmake", ".makefile", ".dockerfile", ".webpack", ".gulpfile",
        ".gruntfile", ".sbt", ".gitignore", ".gitattributes", ".editorconfig",
        ".npmrc", ".yarnrc", ".babelrc", ".eslintrc", ".prettierrc",
        ".stylelintrc", ".dockerignore",
        # misc
        ".vim", ".proto", ".graphql", ".gql", ".prisma", ".tf", ".tfvars",
    }
)

PDF_EXTENSIONS: FrozenSet[str] = frozenset({".pdf"})
DOCUMENT_EXTENSIONS: FrozenSet[str] = frozenset({".doc", ".docx"})
SPREADSHEET_EXTENSIONS: FrozenSet[str] = frozenset({".xls", ".xlsx", ".xlsm", ".xlsb"})


def file_extension(path: str) -> str:
    """Return the lowercase extension of the final path segment.

    The extension is everything after the last dot, so ``.gitignore`` maps to
    itself and ``archive.tar.gz`` maps to ``.gz``. Names without a dot (or
    ending in one) map to ``(no-ext)``.
    """
    name = PurePath(path.replace("\\", "/")).name
    if "." not in name:
        return NO_EXTENSION
    suffix = name.rsplit(".", 1)[1].lower()
    if not suffix:
        return NO_EXTENSION
    return f".{suffix}"


def content_kind(extension: str) -> ContentKind:
    if extension in PDF_EXTENSIONS:
        return ContentKind.PDF
    if extension in DOCUMENT_EXTENSIONS:
        return ContentKind.DOCUMENT
    if extension in SPREADSHEET_EXTENSIONS:
        return ContentKind.SPREADSHEET
    if extension in TEXT_EXTENSIONS:
        return ContentKind.TEXT
    return ContentKind.UNKNOWN


def classify(path: str) -> Tuple[str, ContentKind]:
    """Return ``(extension, content_kind)`` for a path."""
    extension = file_extension(path)
    return extension, content_kind(extension)


__all__ = [
    "ContentKind",
    "NO_EXTENSION",
    "TEXT_EXTENSIONS",
    "classify",
    "content_kind",
    "file_extension",
]
