"""Hand a document body to a clipboard sink."""

from __future__ import annotations

import logging
from typing import Callable

from freelanly.errors import ExportError

logger = logging.getLogger(__name__)

ClipboardSink = Callable[[str], object]


def export_to_clipboard(body: str, sink: ClipboardSink) -> None:
    """Pass the raw text to ``sink``; any sink failure becomes an ExportError."""
    try:
        body.encode("utf-8")
        sink(body)
    except Exception as e:
        logger.warning("Clipboard export failed: %s", e)
        raise ExportError("Could not copy to clipboard") from e
    logger.debug("Copied %d characters to clipboard", len(body))
