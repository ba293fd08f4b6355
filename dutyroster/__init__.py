"""Duty roster: two-person weekday rotation over a fixed set of slots.

Modules:
- domain: roster state, rotation history models and repositories
- engine: rotation engine, forecasting, presence signal and visibility policy
- services: calendar rules and date providers (system, fixed, NTP)
- io: configuration, INI state store and CSV export
- host: headless event-loop host with recurring checks
- cli: command-line interface entrypoints
"""

__all__ = [
    "domain",
    "engine",
    "services",
    "io",
    "host",
    "cli",
]
