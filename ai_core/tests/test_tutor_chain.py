from __future__ import annotations

import pytest

from ai_core.tutor_chain import TutorMemory, build_tutor_prompt, tutor_turn


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_memory_keeps_recent_turns_only():
    memory = TutorMemory(max_turns=3)
    sid = memory.start()
    for i in range(5):
        memory.append(sid, "user", f"q{i}")
    assert [m["text"] for m in memory.history(sid)] == ["q2", "q3", "q4"]


def test_memory_sessions_are_isolated():
    memory = TutorMemory()
    a, b = memory.start(), memory.start()
    memory.append(a, "user", "about cells")
    assert memory.history(b) == []
    assert memory.history(a) == [{"role": "user", "text": "about cells"}]


def test_history_is_a_copy():
    memory = TutorMemory()
    sid = memory.start()
    memory.append(sid, "user", "hi")
    memory.history(sid).append({"role": "user", "text": "injected"})
    assert len(memory.history(sid)) == 1


def test_idle_sessions_expire():
    clock = FakeClock()
    memory = TutorMemory(ttl_seconds=60, clock=clock)
    sid = memory.start()
    memory.append(sid, "user", "hello")
    clock.now += 30
    assert memory.history(sid)  # access refreshes the session
    clock.now += 61
    assert memory.history(sid) == []
    assert sid not in memory


def test_prune_drops_only_expired():
    clock = FakeClock()
    memory = TutorMemory(ttl_seconds=10, clock=clock)
    old = memory.start()
    fresh = memory.start()
    clock.now += 5
    memory.history(fresh)
    clock.now += 8
    assert memory.prune() == 1
    assert old not in memory
    assert fresh in memory


def test_least_recently_used_session_is_evicted():
    memory = TutorMemory(max_sessions=2)
    a = memory.start()
    b = memory.start()
    memory.history(a)  # a becomes most recent
    c = memory.start()
    assert a in memory and c in memory
    assert b not in memory
    assert len(memory) == 2


def test_end_session():
    memory = TutorMemory()
    sid = memory.start("fixed-id")
    assert sid == "fixed-id"
    assert memory.end(sid) is True
    assert memory.end(sid) is False


def test_tutor_turn_accumulates_history(fake_llm):
    memory = TutorMemory()
    fake_llm.reply = "Think about what a cell needs."
    first = tutor_turn(memory, "What is a cell?")
    sid = first["session_id"]
    assert first["answer"] == "Think about what a cell needs."
    assert fake_llm.last_prompt.endswith("Conversation so far:\nUSER: What is a cell?")

    fake_llm.reply = "Good question."
    tutor_turn(memory, "  And a tissue?  ", session_id=sid)
    assert fake_llm.last_prompt.endswith(
        "USER: What is a cell?\nASSISTANT: Think about what a cell needs.\nUSER: And a tissue?"
    )
    assert len(memory.history(sid)) == 4
    assert fake_llm.calls[-1]["temperature"] == 0.7


def test_tutor_turn_without_session_starts_new_one(fake_llm):
    memory = TutorMemory()
    a = tutor_turn(memory, "Q1")["session_id"]
    b = tutor_turn(memory, "Q2")["session_id"]
    assert a != b
    assert "Q1" not in fake_llm.last_prompt


def test_tutor_turn_stores_unwrapped_answer(fake_llm):
    memory = TutorMemory()
    result = tutor_turn(memory, "Explain osmosis", language="German")
    assert "German Translation" in result["answer"]
    stored = memory.history(result["session_id"])[-1]
    assert stored == {"role": "assistant", "text": "model reply"}


def test_failed_turn_records_nothing(fake_llm):
    memory = TutorMemory()
    sid = memory.start()
    fake_llm.error = RuntimeError("boom")
    with pytest.raises(RuntimeError):
        tutor_turn(memory, "Q", session_id=sid)
    assert memory.history(sid) == []


def test_build_tutor_prompt_header():
    prompt = build_tutor_prompt([])
    assert prompt.startswith("You are a patient subject-matter tutor.")
