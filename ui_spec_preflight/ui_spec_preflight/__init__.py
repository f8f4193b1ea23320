"""Cross-document consistency validation for UI-SPEC design trees."""

__version__ = "1.0.0"
