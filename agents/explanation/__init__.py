"""
Explanation enrichment package
"""

from .service import ExplanationProvider, ExplanationService

__all__ = ["ExplanationProvider", "ExplanationService"]
