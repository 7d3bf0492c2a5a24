from fastapi import APIRouter, Depends, HTTPException
from backend.config import Settings, get_settings
from backend.models.schemas import (
    ChatReq,
    CitationsReq,
    CountedTextReq,
    EssayReq,
    MotivationReq,
    ParaphraseReq,
    StudyPlanReq,
    TextReq,
    TranscriptReq,
)
from backend.routers.common import api_error, bad_request, failed, is_blank
from backend.services import ai_adapter
from ai_core.prompts import normalize_references, normalize_subjects
import logging

logger = logging.getLogger("backend.study")
router = APIRouter()


@router.post("/chat")
def chat(req: ChatReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"💬 Chat request: {len(req.question or '')} chars, language={req.language}")
        if is_blank(req.question):
            logger.warning("⚠️ Chat request without question")
            raise bad_request("missing_question")
        answer = ai_adapter.ask(req.question, req.language, settings=settings)
        logger.info(f"✅ Answer generated: {len(answer)} chars")
        return {"answer": answer}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Chat failed: {str(e)}")
        logger.exception(e)
        raise failed("chat_failed", e)


@router.post("/summarize-text")
def summarize_text(req: TextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"📝 Summarize text request: {len(req.text or '')} chars, language={req.language}")
        if is_blank(req.text):
            logger.warning("⚠️ Summarize request without text")
            raise bad_request("missing_text")
        summary = ai_adapter.summarize(req.text, req.language, settings=settings)
        logger.info(f"✅ Summary generated: {len(summary)} chars")
        return {"summary": summary}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Summarize text failed: {str(e)}")
        logger.exception(e)
        raise failed("summarize_text_failed", e)


@router.post("/summarize-audio")
def summarize_audio(req: TranscriptReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"🎧 Transcript summary request: {len(req.transcript or '')} chars")
        if is_blank(req.transcript):
            logger.warning("⚠️ Transcript summary request without transcript")
            raise bad_request("missing_transcript", hint="Send the lecture transcript as `transcript`.")
        summary = ai_adapter.summarize_transcript(req.transcript, req.language, settings=settings)
        logger.info(f"✅ Transcript summary generated: {len(summary)} chars")
        return {"summary": summary}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Transcript summary failed: {str(e)}")
        logger.exception(e)
        raise failed("summarize_audio_failed", e)


@router.post("/generate-quiz")
def generate_quiz(req: CountedTextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"❓ Quiz request: {len(req.text or '')} chars, count={req.count!r}")
        if is_blank(req.text):
            logger.warning("⚠️ Quiz request without text")
            raise bad_request("missing_text")
        quiz = ai_adapter.generate_quiz(req.text, req.count, req.language, settings=settings)
        logger.info(f"✅ Quiz generated: {len(quiz)} chars")
        return {"quiz": quiz}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Quiz failed: {str(e)}")
        logger.exception(e)
        raise failed("quiz_failed", e)


@router.post("/flashcards")
def flashcards(req: CountedTextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"🃏 Flashcards request: {len(req.text or '')} chars, count={req.count!r}")
        if is_blank(req.text):
            logger.warning("⚠️ Flashcards request without text")
            raise bad_request("missing_text")
        cards = ai_adapter.generate_flashcards(req.text, req.count, req.language, settings=settings)
        logger.info(f"✅ Flashcards generated: {len(cards)} chars")
        return {"cards": cards}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Flashcards failed: {str(e)}")
        logger.exception(e)
        raise failed("flashcards_failed", e)


@router.post("/study-planner")
def study_planner(req: StudyPlanReq, settings: Settings = Depends(get_settings)):
    try:
        subjects = normalize_subjects(req.subjects)
        logger.info(f"📅 Study plan request: {len(subjects)} subjects, exam_date={req.exam_date}")
        if is_blank(req.exam_date) or not subjects:
            logger.warning("⚠️ Study plan request missing subjects or exam date")
            raise bad_request("missing_fields", hint="Provide subjects[] and examDate.")
        plan = ai_adapter.plan_study(subjects, req.exam_date.strip(), req.hours_per_day, req.language, settings=settings)
        logger.info(f"✅ Study plan generated: {len(plan)} chars")
        return {"plan": plan}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Study plan failed: {str(e)}")
        logger.exception(e)
        raise failed("planner_failed", e)


@router.post("/mindmap")
def mindmap(req: TextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"🧠 Mindmap request: {len(req.text or '')} chars")
        if is_blank(req.text):
            logger.warning("⚠️ Mindmap request without text")
            raise bad_request("missing_text")
        code = ai_adapter.mindmap(req.text, req.language, settings=settings)
        logger.info(f"✅ Mindmap generated: {len(code)} chars")
        return {"mermaid": code}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Mindmap failed: {str(e)}")
        logger.exception(e)
        raise failed("mindmap_failed", e)


@router.post("/motivation")
def motivation(req: MotivationReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"💪 Motivation request: context={bool(req.context)}")
        message = ai_adapter.motivate(req.context, req.language, settings=settings)
        logger.info(f"✅ Motivation generated: {len(message)} chars")
        return {"message": message}
    except Exception as e:
        logger.error(f"❌ Motivation failed: {str(e)}")
        logger.exception(e)
        raise failed("motivation_failed", e)


@router.post("/essay-feedback")
def essay_feedback(req: EssayReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"✍️ Essay feedback request: {len(req.essay or '')} chars")
        if is_blank(req.essay):
            logger.warning("⚠️ Essay feedback request without essay")
            raise bad_request("missing_essay")
        feedback = ai_adapter.review_essay(req.essay, req.language, settings=settings)
        logger.info(f"✅ Essay feedback generated: {len(feedback)} chars")
        return {"feedback": feedback}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Essay feedback failed: {str(e)}")
        logger.exception(e)
        raise failed("essay_feedback_failed", e)


@router.post("/paraphrase")
def paraphrase(req: ParaphraseReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"🔄 Paraphrase request: {len(req.text or '')} chars, tone={req.tone!r}, variations={req.variations!r}")
        if is_blank(req.text):
            logger.warning("⚠️ Paraphrase request without text")
            raise bad_request("missing_text")
        paraphrases = ai_adapter.paraphrase(req.text, req.tone, req.variations, req.language, settings=settings)
        logger.info(f"✅ Paraphrases generated: {len(paraphrases)} chars")
        return {"paraphrases": paraphrases}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Paraphrase failed: {str(e)}")
        logger.exception(e)
        raise failed("paraphrase_failed", e)


@router.post("/extract-table")
def extract_table(req: TextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"📊 Table extraction request: {len(req.text or '')} chars")
        if is_blank(req.text):
            logger.warning("⚠️ Table extraction request without text")
            raise bad_request("missing_text")
        table = ai_adapter.extract_table(req.text, req.language, settings=settings)
        logger.info(f"✅ Table extracted: {len(table)} chars")
        return {"table": table}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Table extraction failed: {str(e)}")
        logger.exception(e)
        raise failed("table_failed", e)


@router.post("/generate-citations")
def generate_citations(req: CitationsReq, settings: Settings = Depends(get_settings)):
    try:
        refs_text = normalize_references(req.references)
        logger.info(f"📚 Citations request: {len(refs_text)} chars, style={req.style!r}")
        if not refs_text:
            logger.warning("⚠️ Citations request without references")
            raise bad_request("missing_references", hint="Send `references` as a string OR array of strings.")
        if len(refs_text) > settings.max_reference_chars:
            logger.warning(f"⚠️ References too large: {len(refs_text)} chars")
            raise api_error(413, "payload_too_large", hint=f"Keep total references under {settings.max_reference_chars} chars.")
        citations = ai_adapter.format_citations(refs_text, req.style, req.language, settings=settings)
        logger.info(f"✅ Citations generated: {len(citations)} chars")
        return {"citations": citations}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Citations failed: {str(e)}")
        logger.exception(e)
        raise failed("citations_failed", e)


@router.post("/knowledge-graph")
def knowledge_graph(req: TextReq, settings: Settings = Depends(get_settings)):
    try:
        logger.info(f"🕸️ Knowledge graph request: {len(req.text or '')} chars")
        if is_blank(req.text):
            logger.warning("⚠️ Knowledge graph request without text")
            raise bad_request("missing_text")
        graph = ai_adapter.knowledge_graph(req.text, req.language, settings=settings)
        logger.info(f"✅ Knowledge graph generated: {len(graph)} chars")
        return {"mermaid": graph}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Knowledge graph failed: {str(e)}")
        logger.exception(e)
        raise failed("graph_failed", e)
