"""Unit converter plugin."""

manifest = {
    "title": "Unit Converter",
    "summary": "Type a value with its unit (\"400 km\" or \"400 km to m\") and convert it across a category.",
    "blueprint": "unit_converter",
    "category": "General Utilities",
    "api": "/api/unit_converter",
}


__all__ = ["manifest"]
