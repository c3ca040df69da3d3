"""Colored gateway call logger — ANSI console traces for every gateway round trip.

Color scheme:
    🔵 Blue    — SELECT / COUNT
    🟢 Green   — INSERT
    🟡 Yellow  — UPDATE
    🟣 Magenta — DELETE
    🟠 Cyan    — AUTH
    🔴 Red     — Errors
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
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


class GatewayStage:
    """Gateway operations with their colors and icons."""

    SELECT = ("SELECT", _Colors.BLUE, "🔎")
    COUNT = ("COUNT", _Colors.BLUE, "🔢")
    INSERT = ("INSERT", _Colors.GREEN, "➕")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DELETE = ("DELETE", _Colors.MAGENTA, "🗑️")
    AUTH = ("AUTH", _Colors.CYAN, "🔑")


class GatewayCallLogger:
    """Color-coded logger for gateway calls.

    Usage:
        log = GatewayCallLogger("SupabaseDataGateway")
        with log.timed_step(GatewayStage.SELECT, "machines", columns="*"):
            response = await client.get(...)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger("GatewayCalls").getChild(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.debug(formatted)

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
        if kwargs:
            details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            formatted += f" {_Colors.GRAY}({details}){_Colors.RESET}"
        self._logger.info(formatted)

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, icon = stage
        formatted = f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} {_Colors.RED}{message}{_Colors.RESET}"
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start/end of a gateway call with the elapsed time."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed * 1000:.0f} ms)")
