from fastapi import APIRouter, Depends, HTTPException, Request
from backend.config import Settings, get_settings
from backend.models.schemas import TutorReq
from backend.routers.common import bad_request, failed, is_blank
from backend.services import ai_adapter
from ai_core.tutor_chain import TutorMemory
import logging

logger = logging.getLogger("backend.tutor")
router = APIRouter()


def get_tutor_memory(request: Request) -> TutorMemory:
    return request.app.state.tutor_memory


@router.post("/tutor")
def tutor(
    req: TutorReq,
    memory: TutorMemory = Depends(get_tutor_memory),
    settings: Settings = Depends(get_settings),
):
    try:
        logger.info(f"🎓 Tutor request: session={req.session_id or 'new'}, {len(req.question or '')} chars")
        if is_blank(req.question):
            logger.warning("⚠️ Tutor request without question")
            raise bad_request("missing_question")
        result = ai_adapter.tutor(memory, req.question, session_id=req.session_id, language=req.language, settings=settings)
        logger.info(f"✅ Tutor answered: session={result['session_id']}, {len(result['answer'])} chars")
        return {"answer": result["answer"], "sessionId": result["session_id"]}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Tutor failed: {str(e)}")
        logger.exception(e)
        raise failed("tutor_failed", e)


@router.delete("/tutor/{session_id}")
def clear_tutor_session(session_id: str, memory: TutorMemory = Depends(get_tutor_memory)):
    cleared = memory.end(session_id)
    logger.info(f"🧹 Tutor session cleared: session={session_id}, existed={cleared}")
    return {"cleared": cleared}
