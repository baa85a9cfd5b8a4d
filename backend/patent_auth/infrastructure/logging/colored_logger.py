"""Colored ledger logger — ANSI-colored console logging for certificate lifecycle events.

Provides a LedgerLogger with color-coded output per ledger stage, so the
apply → render → pay sequence of a certificate can be followed in the
terminal.

Color scheme:
    🟢 Green   — Apply / issuance
    🟡 Yellow  — Payment (pay-on-download)
    🟣 Magenta — Render / export
    🔵 Blue    — Admin edits
    🟠 Cyan    — Auth
    🔴 Red     — Errors and integrity problems
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Ledger Stage Definitions ─────────────────────────────────────────

class LedgerStage:
    """Predefined ledger stages with colors and icons."""

    APPLY = ("APPLY", _Colors.GREEN, "📝")
    PAYMENT = ("PAYMENT", _Colors.YELLOW, "💳")
    EXPORT = ("EXPORT", _Colors.MAGENTA, "📄")
    ADMIN = ("ADMIN", _Colors.BLUE, "🛠️")
    AUTH = ("AUTH", _Colors.CYAN, "🔑")
    INTEGRITY = ("INTEGRITY", _Colors.RED, "⚠️")


# ── LedgerLogger ─────────────────────────────────────────────────────

class LedgerLogger:
    """Color-coded logger for ledger and certificate events.

    Usage:
        log = LedgerLogger("LedgerService")
        log.step_start(LedgerStage.PAYMENT, "Settling 2024011512000012345")
        log.step_complete(LedgerStage.PAYMENT, "Paid", balance=800)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        return " | ".join(f"{k}={v}" for k, v in kwargs.items())

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a ledger step with its stage color."""
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a ledger step."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_rejected(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log a step that was refused without mutating anything."""
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.YELLOW}✗ {message}{_Colors.RESET}"
        )
        if kwargs:
            formatted += f" {_Colors.GRAY}({self._details(kwargs)}){_Colors.RESET}"
        self._logger.warning(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a ledger step error in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Usage:
            with log.timed_step(LedgerStage.EXPORT, "Rendering certificate"):
                content = await exporter.export(document)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)
