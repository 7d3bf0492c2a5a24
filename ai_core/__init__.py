"""
Study-tools backbone.

Prompt templates, the Gemini client, document text extraction and the tutor
memory, without any HTTP code.
"""

__all__ = [
    "chains",
    "cleaning",
    "ingest",
    "llm_client",
    "prompts",
    "tutor_chain",
]
