# AI Adapter Service - wraps ai_core for the backend
# Provides a logged interface for document extraction, study chains and the tutor

from typing import Any, Dict, List, Optional
import logging

from ai_core import chains
from ai_core.ingest import DocumentKind, extract_text
from ai_core.tutor_chain import TutorMemory, tutor_turn
from backend.config import Settings

logger = logging.getLogger("backend.ai_adapter")


def _llm_options(settings: Optional[Settings]) -> Dict[str, Any]:
    """Model key and name from settings; empty means llm_client reads the env."""
    if settings is None:
        return {}
    return {"api_key": settings.gemini_api_key or None, "model_name": settings.gemini_model or None}


def extract_document(path: str, kind: DocumentKind) -> str:
    """Extract text from a stored upload."""
    try:
        logger.info(f"Extracting {kind.value} document")
        text = extract_text(path, kind)
        logger.info(f"Document extracted: {len(text)} chars")
        return text
    except Exception as e:
        logger.error(f"Error extracting document: {e}")
        raise


def ask(question: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    logger.debug(f"Chat question: {len(question)} chars")
    return chains.chat(question, language, **_llm_options(settings))


def summarize(
    text: str,
    language: Optional[str] = None,
    from_upload: bool = False,
    settings: Optional[Settings] = None,
) -> str:
    """Summarize pasted text or text extracted from an upload."""
    try:
        logger.debug(f"Summarizing {len(text)} chars (upload={from_upload})")
        if from_upload:
            result = chains.summarize_document(text, language, **_llm_options(settings))
        else:
            result = chains.summarize_text(text, language, **_llm_options(settings))
        logger.debug(f"Summary generated: {len(result)} chars")
        return result
    except Exception as e:
        logger.error(f"Error summarizing: {e}")
        raise


def summarize_transcript(transcript: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    logger.debug(f"Summarizing transcript: {len(transcript)} chars")
    return chains.summarize_transcript(transcript, language, **_llm_options(settings))


def generate_quiz(
    text: str, count: Any = None, language: Optional[str] = None, settings: Optional[Settings] = None
) -> str:
    try:
        logger.debug(f"Generating quiz for {len(text)} chars (count={count!r})")
        result = chains.make_quiz(text, count, language, **_llm_options(settings))
        logger.debug(f"Quiz generated: {len(result)} chars")
        return result
    except Exception as e:
        logger.error(f"Error generating quiz: {e}")
        raise


def generate_flashcards(
    text: str, count: Any = None, language: Optional[str] = None, settings: Optional[Settings] = None
) -> str:
    try:
        logger.debug(f"Generating flashcards for {len(text)} chars (count={count!r})")
        result = chains.make_flashcards(text, count, language, **_llm_options(settings))
        logger.debug(f"Flashcards generated: {len(result)} chars")
        return result
    except Exception as e:
        logger.error(f"Error generating flashcards: {e}")
        raise


def plan_study(
    subjects: List[str],
    exam_date: str,
    hours_per_day: Any = None,
    language: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    logger.debug(f"Planning {len(subjects)} subjects until {exam_date}")
    return chains.make_study_plan(subjects, exam_date, hours_per_day, language, **_llm_options(settings))


def mindmap(text: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    return chains.make_mindmap(text, language, **_llm_options(settings))


def motivate(context: Optional[str] = None, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    return chains.make_motivation(context, language, **_llm_options(settings))


def review_essay(essay: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    logger.debug(f"Reviewing essay: {len(essay)} chars")
    return chains.essay_feedback(essay, language, **_llm_options(settings))


def paraphrase(
    text: str,
    tone: Optional[str] = None,
    variations: Any = None,
    language: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> str:
    logger.debug(f"Paraphrasing {len(text)} chars (tone={tone!r}, variations={variations!r})")
    return chains.paraphrase(text, tone, variations, language, **_llm_options(settings))


def extract_table(text: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    return chains.extract_table(text, language, **_llm_options(settings))


def format_citations(
    references: str, style: Optional[str] = None, language: Optional[str] = None, settings: Optional[Settings] = None
) -> str:
    logger.debug(f"Formatting {references.count(chr(10)) + 1} reference line(s) as {style or 'APA'}")
    return chains.format_citations(references, style, language, **_llm_options(settings))


def knowledge_graph(text: str, language: Optional[str] = None, settings: Optional[Settings] = None) -> str:
    return chains.make_knowledge_graph(text, language, **_llm_options(settings))


def tutor(
    memory: TutorMemory,
    question: str,
    session_id: Optional[str] = None,
    language: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> dict:
    try:
        logger.debug(f"Tutor turn: session={session_id or 'new'}")
        result = tutor_turn(memory, question, session_id=session_id, language=language, **_llm_options(settings))
        logger.debug(f"Tutor answered in session {result['session_id']}")
        return result
    except Exception as e:
        logger.error(f"Error in tutor turn: {e}")
        raise
