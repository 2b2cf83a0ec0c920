"""Base class and placeholder helpers for extraction strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..classifier import ContentKind
from ..logging import get_logger

SKIPPED_PLACEHOLDER = "[File skipped based on extension filters]"
BINARY_PLACEHOLDER = "[Binary file - cannot extract text]"

logger = get_logger("extractors")


def error_placeholder(label: str, exc: BaseException) -> str:
    message = str(exc) or "Unknown error"
    return f"[Error processing {label}: {message}]"


def unsupported_placeholder(extension: str) -> str:
    return f"[Unsupported file type: {extension}]"


class Extractor(ABC):
    """Contract for strategies that turn one file into text.

    ``extract`` never raises: failures inside ``read_text`` are logged and
    returned as an ``[Error processing <label>: ...]`` placeholder.
    """

    kind: ContentKind
    label: str

    def extract(self, path: str) -> str:
        try:
            return self.read_text(path)
        except Exception as exc:
            logger.error("%s error (%s): %s", self.label, path, exc)
            return error_placeholder(self.label, exc)

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Return the text content of ``path``, raising on failure."""
