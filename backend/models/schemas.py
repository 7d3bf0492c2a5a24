from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# Required fields are optional at the schema level so that a missing or blank
# value is reported by the route as a 400 with a stable error code.


class _Req(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language: Optional[str] = None


class ChatReq(_Req):
    question: Optional[str] = None


class TextReq(_Req):
    text: Optional[str] = None


class CountedTextReq(TextReq):
    count: Any = None


class TranscriptReq(_Req):
    transcript: Optional[str] = None


class StudyPlanReq(_Req):
    subjects: Any = None
    exam_date: Optional[str] = Field(default=None, alias="examDate")
    hours_per_day: Any = Field(default=None, alias="hoursPerDay")


class MotivationReq(_Req):
    context: Optional[str] = None


class EssayReq(_Req):
    essay: Optional[str] = None


class ParaphraseReq(TextReq):
    tone: Optional[str] = None
    variations: Any = None


class TutorReq(_Req):
    question: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class CitationsReq(_Req):
    references: Any = None
    style: Optional[str] = None
