"""Build helpers for Go multi-module repositories: semconv code generation, semver and change detection."""

__version__ = "0.1.0"