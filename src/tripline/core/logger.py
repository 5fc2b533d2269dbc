"""Verbose logger for Tripline."""

from typing import Any, Optional
from rich.console import Console

# Global instance
_console = Console(stderr=True)
_verbose = False
_web_mode = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable verbose mode."""
    global _verbose
    _verbose = enabled


def is_verbose() -> bool:
    """Return whether verbose mode is on."""
    return _verbose


def set_web_mode(enabled: bool) -> None:
    """Enable web mode - entries are mirrored into the web log buffer."""
    global _web_mode
    _web_mode = enabled


def _web_log(level: str, message: str, data: Optional[dict] = None) -> None:
    """Log into the web buffer when web mode is active."""
    if not _web_mode:
        return
    from tripline.web.state import log_buffer
    log_buffer.add(level, message, data)


def _shorten(value: Any, limit: int) -> str:
    text = str(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def log_call(service: str, method: str, **kwargs: Any) -> None:
    """Log a service call with its parameters.

    Args:
        service: Service name (e.g. "GridBuilder")
        method: Method name (e.g. "build")
        **kwargs: Call parameters
    """
    params = [f"{key}={_shorten(value, 50)}" for key, value in kwargs.items() if value is not None]
    message = f"→ {service}.{method}({', '.join(params)})"

    _web_log("call", message, {"service": service, "method": method, "params": {k: str(v) for k, v in kwargs.items()}})

    if _verbose:
        _console.print(f"  [dim]{message}[/dim]")


def log_result(service: str, method: str, result: Any) -> None:
    """Log the result of a service call."""
    message = f"← {service}.{method} = {_shorten(result, 80)}"

    _web_log("result", message, {"service": service, "method": method, "result": str(result)})

    if _verbose:
        _console.print(f"  [dim]{message}[/dim]")


def log_info(message: str) -> None:
    """Log an informational message."""
    _web_log("info", message)

    if _verbose:
        _console.print(f"  [dim]{message}[/dim]")


def log_warning(message: str) -> None:
    """Log a warning (always printed)."""
    _web_log("warning", message)

    _console.print(f"  [yellow]⚠ {message}[/yellow]")
