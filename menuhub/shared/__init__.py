"""Shared utilities and cross-cutting concerns (telemetry, time helpers)."""
