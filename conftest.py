from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import pytest


class FakeLLM:
    """Stands in for llm_client.generate and records every prompt."""

    def __init__(self, reply: str = "model reply"):
        self.reply = reply
        self.error: Optional[BaseException] = None
        self.calls: List[Dict[str, Any]] = []
        self.options: List[Dict[str, Any]] = []

    def __call__(self, prompt: str, temperature: float = 0.7, **kwargs: Any) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature})
        self.options.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["prompt"]


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr("ai_core.llm_client.generate", fake)
    return fake


def write_pdf(path: str, lines: List[str]) -> str:
    import fitz  # type: ignore

    doc = fitz.open()
    page = doc.new_page(width=400, height=400)
    y = 72
    for line in lines:
        page.insert_text((36, y), line, fontsize=11)
        y += 18
    doc.save(path)
    doc.close()
    return path


def write_docx(path: str, paragraphs: List[str]) -> str:
    from docx import Document  # type: ignore

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    doc.save(path)
    return path


@pytest.fixture
def sample_pdf(tmp_path) -> str:
    return write_pdf(
        os.path.join(tmp_path, "notes.pdf"),
        ["Photosynthesis converts light energy into chemical energy.", "Chlorophyll absorbs light."],
    )


@pytest.fixture
def make_pdf():
    return write_pdf


@pytest.fixture
def make_docx():
    return write_docx
