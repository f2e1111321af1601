"""Best-effort copy of the share text.

Strategies are tried in order; each either places the text or raises
ClipboardUnavailable. When all of them fail the caller gets the raw text back
to show for manual copying. Nothing here touches game state.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .errors import ClipboardUnavailable

logger = logging.getLogger(__name__)

CopyStrategy = Callable[[str], None]

MANUAL_COPY_PROMPT = "Kopieren nicht möglich. Bitte den Text manuell kopieren:"


@dataclass(frozen=True)
class CopyOutcome:
    copied: bool
    method: str | None = None
    manual_text: str | None = None


def command_strategy(*argv: str) -> CopyStrategy:
    """Pipe the text into a clipboard command such as ``pbcopy``."""

    def copy(text: str) -> None:
        if shutil.which(argv[0]) is None:
            raise ClipboardUnavailable(f"{argv[0]} not installed")
        try:
            subprocess.run(list(argv), input=text.encode("utf-8"), check=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardUnavailable(f"{argv[0]} failed: {exc}") from exc

    copy.__name__ = argv[0]
    return copy


def default_strategies() -> list[CopyStrategy]:
    return [
        command_strategy("pbcopy"),
        command_strategy("wl-copy"),
        command_strategy("xclip", "-selection", "clipboard"),
        command_strategy("clip"),
    ]


def copy_with_fallback(text: str, strategies: Iterable[CopyStrategy]) -> CopyOutcome:
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            strategy(text)
        except ClipboardUnavailable as exc:
            logger.debug("[clipboard] %s unavailable (%s). Trying next.", name, exc)
            continue
        logger.info("[clipboard] Copied share text via %s.", name)
        return CopyOutcome(copied=True, method=name)
    logger.warning("[clipboard] No clipboard strategy worked; falling back to manual copy.")
    return CopyOutcome(copied=False, manual_text=text)
