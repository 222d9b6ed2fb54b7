"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks the feature packages lean on
(DB wiring, settings, logging). Feature-specific SQL and business logic
stay in the feature package (e.g. `users/`).
"""
