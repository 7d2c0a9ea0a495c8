"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every feature uses
(DB wiring, settings, logging, error rendering). Keep feature-specific SQL
and request handling in the corresponding feature package (e.g. `texts/`).
"""
