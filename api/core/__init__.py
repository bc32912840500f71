"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks the feature packages use (DB wiring,
settings, logging). Keep feature-specific SQL and business logic in the
corresponding feature package (e.g. `properties/`).
"""
