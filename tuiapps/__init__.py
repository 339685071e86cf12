"""Small terminal applications (counters, a JSON pair editor, a stopwatch) and their rendering layer."""

__version__ = "0.1.0"