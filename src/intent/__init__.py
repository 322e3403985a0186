"""Intent classification and value extraction.

The intent layer converts a free-text mutation request into a strict `Intent` object plus the
literal values implied by the request. Both are consumed by the template-driven script builder.
"""
