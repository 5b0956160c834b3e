"""
Core Package

Contains the source-agnostic core of the quote pipeline:
- config / logging: Settings and the application logger
- universe: The fixed set of tracked instruments and their categories
- schemas: Pydantic models for cached quotes, fetch results and the heatmap payload
- utils: Locale-aware number parsing, change-percentage math and time helpers
"""
