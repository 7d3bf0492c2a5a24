"""Thin chains for the study tools.

Each function fills one template from prompts.py, makes a single llm_client
call and applies the bilingual wrap. Outputs are returned as raw model text;
nothing is parsed back.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from . import llm_client
from .prompts import (
    CITATIONS,
    ESSAY_FEEDBACK,
    EXTRACT_TABLE,
    FLASHCARDS,
    FLASHCARD_COUNT,
    KNOWLEDGE_GRAPH,
    MINDMAP,
    MOTIVATION,
    PARAPHRASE,
    PARAPHRASE_VARIATIONS,
    QUIZ,
    QUIZ_COUNT,
    STUDY_PLAN,
    SUMMARY,
    TRANSCRIPT_SUMMARY,
    clamp_count,
    format_hours,
    render_paraphrase_versions,
    wrap_bilingual,
)


def _run(prompt: str, temperature: float, language: Optional[str], llm: Dict[str, Any]) -> str:
    out = llm_client.generate(prompt, temperature=temperature, **llm)
    return wrap_bilingual(out, language)


def chat(question: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(question, 0.7, language, llm)


def summarize_text(text: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(SUMMARY.format(lang="English", text=text), 0.5, language, llm)


def summarize_document(text: str, language: Optional[str] = None, **llm: Any) -> str:
    """Summary of text extracted from an uploaded file; slightly cooler sampling."""
    return _run(SUMMARY.format(lang="English", text=text), 0.4, language, llm)


def summarize_transcript(transcript: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(TRANSCRIPT_SUMMARY.format(transcript=transcript), 0.5, language, llm)


def make_quiz(text: str, count: Any = None, language: Optional[str] = None, **llm: Any) -> str:
    n = clamp_count(count, *QUIZ_COUNT)
    return _run(QUIZ.format(count=n, text=text), 0.7, language, llm)


def make_flashcards(text: str, count: Any = None, language: Optional[str] = None, **llm: Any) -> str:
    n = clamp_count(count, *FLASHCARD_COUNT)
    return _run(FLASHCARDS.format(count=n, text=text), 0.6, language, llm)


def make_study_plan(
    subjects: List[str],
    exam_date: str,
    hours_per_day: Any = None,
    language: Optional[str] = None,
    **llm: Any,
) -> str:
    prompt = STUDY_PLAN.format(
        subjects=", ".join(subjects),
        exam_date=exam_date,
        hours_per_day=format_hours(hours_per_day),
    )
    return _run(prompt, 0.5, language, llm)


def make_mindmap(text: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(MINDMAP.format(text=text), 0.5, language, llm)


def make_motivation(context: Optional[str] = None, language: Optional[str] = None, **llm: Any) -> str:
    ctx = context.strip() if isinstance(context, str) else ""
    return _run(MOTIVATION.format(context=ctx or "N/A"), 0.8, language, llm)


def essay_feedback(essay: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(ESSAY_FEEDBACK.format(essay=essay), 0.7, language, llm)


def paraphrase(
    text: str,
    tone: Optional[str] = None,
    variations: Any = None,
    language: Optional[str] = None,
    **llm: Any,
) -> str:
    n = clamp_count(variations, *PARAPHRASE_VARIATIONS)
    prompt = PARAPHRASE.format(
        variations=n,
        tone=str(tone or "academic"),
        versions=render_paraphrase_versions(n),
        text=text,
    )
    return _run(prompt, 0.7, language, llm)


def extract_table(text: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(EXTRACT_TABLE.format(text=text), 0.5, language, llm)


def format_citations(references: str, style: Optional[str] = None, language: Optional[str] = None, **llm: Any) -> str:
    return _run(CITATIONS.format(style=style or "APA", references=references), 0.4, language, llm)


def make_knowledge_graph(text: str, language: Optional[str] = None, **llm: Any) -> str:
    return _run(KNOWLEDGE_GRAPH.format(text=text), 0.5, language, llm)
