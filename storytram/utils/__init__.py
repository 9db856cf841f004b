"""Shared helpers: the generation event log."""

from storytram.utils.logging import (
    EngineLogger,
    LogBuffer,
    LogEntry,
    api_logger,
    configure_logging,
    engine_logger,
    get_log_buffer,
    validator_logger,
)

__all__ = [
    "EngineLogger",
    "LogBuffer",
    "LogEntry",
    "api_logger",
    "configure_logging",
    "engine_logger",
    "get_log_buffer",
    "validator_logger",
]
