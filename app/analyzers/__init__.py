"""
Pipeline de análise de comentários: chunking, análise por chunk,
agregação e síntese premium.
"""

from app.analyzers.pipeline import run_analysis_pipeline

__all__ = ["run_analysis_pipeline"]
