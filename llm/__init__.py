"""
Módulo LLM: cliente do modelo generativo externo (Gemini via LangChain).
"""

from llm.gemini_client import GeminiClient, LLMClient

__all__ = ["GeminiClient", "LLMClient"]
