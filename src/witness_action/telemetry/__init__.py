"""Logging and trace correlation for witness-action."""

from __future__ import annotations

from witness_action.telemetry.logging import add_trace_context, configure_logging

__all__ = ["add_trace_context", "configure_logging"]
