"""Core traversal: classification, path naming, redaction, stringify."""
