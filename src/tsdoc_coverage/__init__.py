"""tsdoc-coverage: TSDoc documentation coverage for TypeScript sources."""

__version__ = "0.0.0"
