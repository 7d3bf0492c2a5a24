"""Tutor chain: session-keyed conversation memory and the tutoring turn.

The memory is an in-process store: each session keeps its most recent turns,
idle sessions expire, and the number of live sessions is capped.
"""
from __future__ import annotations

import threading
import time
import uuid
from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional

from . import llm_client
from .prompts import TUTOR, render_conversation, wrap_bilingual


class TutorMemory:
    """In-memory conversation store keyed by session id.

    Sessions are kept in least-recently-used order; each access refreshes the
    session. Not persistent: a restart clears everything.
    """

    def __init__(
        self,
        max_turns: int = 40,
        ttl_seconds: float = 3600.0,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_turns = max(1, int(max_turns))
        self.ttl_seconds = float(ttl_seconds)
        self.max_sessions = max(1, int(max_sessions))
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            self._prune_locked()
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return self._get_locked(session_id) is not None

    def start(self, session_id: Optional[str] = None) -> str:
        sid = session_id or uuid.uuid4().hex
        with self._lock:
            self._sessions[sid] = {"touched": self._clock(), "messages": []}
            self._sessions.move_to_end(sid)
            self._evict_locked()
        return sid

    def end(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def history(self, session_id: str) -> List[Dict[str, str]]:
        with self._lock:
            sess = self._get_locked(session_id)
            if sess is None:
                return []
            return [dict(m) for m in sess["messages"]]

    def append(self, session_id: str, role: str, text: str) -> None:
        with self._lock:
            sess = self._get_locked(session_id)
            if sess is None:
                sess = {"touched": self._clock(), "messages": []}
                self._sessions[session_id] = sess
                self._evict_locked()
            sess["messages"].append({"role": role, "text": text})
            # keep recent messages only
            if len(sess["messages"]) > self.max_turns:
                sess["messages"] = sess["messages"][-self.max_turns:]

    def prune(self) -> int:
        """Drop expired sessions; returns how many were removed."""
        with self._lock:
            return self._prune_locked()

    def _expired(self, sess: Dict[str, Any], now: float) -> bool:
        return self.ttl_seconds > 0 and now - sess["touched"] > self.ttl_seconds

    def _get_locked(self, session_id: object) -> Optional[Dict[str, Any]]:
        sess = self._sessions.get(session_id)  # type: ignore[arg-type]
        if sess is None:
            return None
        now = self._clock()
        if self._expired(sess, now):
            del self._sessions[session_id]  # type: ignore[arg-type]
            return None
        sess["touched"] = now
        self._sessions.move_to_end(session_id)  # type: ignore[arg-type]
        return sess

    def _prune_locked(self) -> int:
        now = self._clock()
        dead = [sid for sid, sess in self._sessions.items() if self._expired(sess, now)]
        for sid in dead:
            del self._sessions[sid]
        return len(dead)

    def _evict_locked(self) -> None:
        self._prune_locked()
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)


def build_tutor_prompt(turns: List[Dict[str, str]]) -> str:
    return TUTOR.format(conversation=render_conversation(turns))


def tutor_turn(
    memory: TutorMemory,
    question: str,
    session_id: Optional[str] = None,
    language: Optional[str] = None,
    **llm: Any,
) -> Dict[str, str]:
    """Answer one tutoring question in the context of its session.

    Starts a new session when `session_id` is missing. The stored assistant
    turn is the model's reply without the translation suffix.
    Returns: {answer, session_id}
    """
    sid = session_id or memory.start()
    question = question.strip()

    turns = memory.history(sid) + [{"role": "user", "text": question}]
    answer = llm_client.generate(build_tutor_prompt(turns), temperature=0.7, **llm)

    memory.append(sid, "user", question)
    memory.append(sid, "assistant", answer)
    return {"answer": wrap_bilingual(answer, language), "session_id": sid}
