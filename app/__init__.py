"""
FastAPI Application Package

This package contains the FastAPI application that exposes the cached
quote heatmap and runs the background refresh scheduler.
"""
