"""
Services Package

Long-lived application services built on top of the core and the sources:
- refresh_scheduler: Background loop that keeps the quote cache current
- heatmap: Read-side projection of the cache into sorted display groups
"""
