"""Streamlit interface adapters."""

__all__ = []
