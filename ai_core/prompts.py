"""Prompt templates for the study tools, plus the small helpers that feed them."""
from __future__ import annotations

import json
import math
from typing import Any, List, Optional, Union


SUMMARY = (
    "You are an academic summarizer. Create a deep, structured, readable summary in {lang}.\n"
    "Use this layout:\n\n"
    "Title: (infer)\n\n"
    "Executive Summary (6–10 sentences):\n"
    "- What it's about\n"
    "- Why it matters\n"
    "- Context/scope\n"
    "- Main results or conclusions\n\n"
    "Key Concepts (bulleted, concise)\n\n"
    "Step-by-Step Explanation (8–14 numbered steps)\n\n"
    "Examples & Analogies (2–4)\n\n"
    "Important Data/Formulae (if any)\n\n"
    "Assumptions & Limitations (3–6)\n\n"
    "Implications & Applications (3–6)\n\n"
    "Common Pitfalls / Misconceptions (3–6)\n\n"
    "🎯 10 High-Impact Takeaways (exactly 10 bullets)\n\n"
    "Source:\n{text}"
)


QUIZ = (
    "Create {count} multiple-choice questions from the content below.\n"
    "Rules:\n"
    "- Each question should test meaningful understanding.\n"
    "- 4 options (A–D), one correct answer.\n"
    "- Mix recall, inference, application.\n"
    '- After options, give "Answer: <Letter> — one-line reason".\n\n'
    "Format exactly:\n\n"
    "1) Question text\n"
    "A) ...\n"
    "B) ...\n"
    "C) ...\n"
    "D) ...\n"
    "Answer: <Letter> — reason\n\n"
    "Content:\n{text}"
)


FLASHCARDS = (
    "Generate {count} high-quality active-recall flashcards from the content.\n"
    "Return lines exactly as:\n"
    "Q: <question>\n"
    "A: <answer>\n\n"
    "CONTENT:\n{text}"
)


STUDY_PLAN = (
    "Create a day-by-day study plan until the exam date.\n"
    "- Subjects: {subjects}\n"
    "- Exam Date: {exam_date}\n"
    "- Hours/Day: {hours_per_day}\n\n"
    "Format:\n"
    "Title, Days Remaining, then a daily schedule (Date: topics, tasks, checkpoints).\n"
    "Include weekly review slots, spaced repetition pointers, and 3 tips for exam week."
)


MINDMAP = (
    "Convert the following content to Mermaid mind map.\n"
    'Return ONLY Mermaid code starting with "mindmap".\n'
    "Use 3–4 levels of depth, short node text.\n\n"
    "CONTENT:\n{text}"
)


MOTIVATION = (
    "Write a 120–180 word motivational note for a student preparing for exams.\n"
    "Tone: supportive, focused, practical (include 1 actionable tip).\n"
    "Context (optional): {context}"
)


ESSAY_FEEDBACK = (
    "You are a rigorous writing coach. Provide detailed, actionable feedback on the essay below.\n"
    "Include sections: Overview (2–4 sentences), Strengths (bulleted), Areas to Improve (bulleted), "
    "Specific Line Edits (quote > suggest), Organization & Flow, Argument Quality, Evidence & Citations, "
    "Style & Tone, Grammar/Mechanics, Final Score (0–100) with a 1–2 sentence rationale.\n"
    "Essay:\n{essay}"
)


PARAPHRASE = (
    "Paraphrase the text below into {variations} distinct versions in a {tone} tone.\n"
    "Rules:\n"
    "- Preserve meaning and citations if any.\n"
    "- Avoid plagiarism; alter syntax and word choice.\n"
    "- For each version, provide a 1-line note about what changed (e.g., simpler syntax, more formal).\n"
    "Format:\n"
    "{versions}"
    "TEXT:\n{text}"
)


EXTRACT_TABLE = (
    "Extract structured data from the text below.\n"
    "Return:\n"
    "1) A Markdown table\n"
    "2) A JSON array of objects (keys = column headers)\n"
    "Only include columns that are clearly inferable.\n"
    "TEXT:\n{text}"
)


CITATIONS = (
    "Format the following references in {style} style.\n"
    "If any fields are missing, infer reasonably and mark [n.d.] or [Place unknown] as needed.\n"
    "Return as a numbered list, then a plain-text bibliography block.\n"
    "REFERENCES:\n{references}"
)


KNOWLEDGE_GRAPH = (
    "Create a Mermaid ER diagram (entity-relationship) from the following text.\n"
    'Return ONLY Mermaid code starting with "erDiagram".\n'
    "Use concise entity and relationship names. Prefer crow's foot notations expressible in Mermaid ER syntax.\n"
    "TEXT:\n{text}"
)


TRANSCRIPT_SUMMARY = (
    "Summarize this lecture transcript with:\n"
    "- 8–12 bullet key points\n"
    "- 3 exam-style questions with answers\n"
    "- 2 analogies/examples\n"
    "- A 7-day spaced-repetition review plan\n"
    "TRANSCRIPT:\n{transcript}"
)


TUTOR = (
    "You are a patient subject-matter tutor. Continue the conversation. Use Socratic questioning "
    "and examples. Keep answers concise but helpful.\n"
    "Conversation so far:\n{conversation}"
)


BILINGUAL_SUFFIX = (
    "\n\n---\n\n🔁 {language} Translation:\n"
    "Translate the entire answer above to {language}, preserving structure, headings, lists and tone."
)


# (default, low, high)
QUIZ_COUNT = (10, 1, 50)
FLASHCARD_COUNT = (20, 1, 100)
PARAPHRASE_VARIATIONS = (3, 1, 6)
STUDY_HOURS = (2, 1, 24)


def _as_number(value: Any) -> Optional[Union[int, float]]:
    """Numeric reading of a user-supplied value; None when missing, non-numeric or NaN."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        n = value
    elif isinstance(value, str):
        s = value.strip()
        try:
            return int(s)
        except ValueError:
            pass
        try:
            n = float(s)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(n) else n


def clamp_number(value: Any, default: Union[int, float], low: Union[int, float], high: Union[int, float]) -> Union[int, float]:
    """Clamp a user-supplied number into [low, high], keeping fractions.

    Missing, boolean, non-numeric and NaN values use `default`; infinities
    and arbitrarily large integers clamp to the nearest bound.
    """
    n = _as_number(value)
    if n is None:
        n = default
    return max(low, min(n, high))


def clamp_count(value: Any, default: int, low: int, high: int) -> int:
    """Like clamp_number, truncated to a whole count."""
    return int(clamp_number(value, default, low, high))


def format_hours(value: Any) -> str:
    return f"{clamp_number(value, *STUDY_HOURS):g}"


def translation_requested(language: Optional[str]) -> bool:
    if not language or not isinstance(language, str):
        return False
    return language.lower() != "none"


def wrap_bilingual(text: str, language: Optional[str]) -> str:
    """Append the translation request for `language` unless it is empty or exactly "none" (any case)."""
    if not translation_requested(language):
        return text
    return text + BILINGUAL_SUFFIX.format(language=language)


def _ref_to_line(ref: Any) -> str:
    if isinstance(ref, str):
        return ref
    return json.dumps(ref, ensure_ascii=False, separators=(",", ":"))


def normalize_references(value: Any) -> str:
    """Flatten a references payload (string or list of strings/objects) into lines."""
    if isinstance(value, list):
        lines = (_ref_to_line(r).strip() for r in value)
        return "\n".join(line for line in lines if line)
    if isinstance(value, str):
        return value.strip()
    if value is None:
        return ""
    if isinstance(value, dict):
        return _ref_to_line(value).strip()
    return str(value).strip()


def normalize_subjects(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list):
        return []
    subjects = (str(s).strip() for s in value if s is not None)
    return [s for s in subjects if s]


def render_paraphrase_versions(variations: int) -> str:
    return "".join(f"## Version {i}\n<text>\nNote: ...\n" for i in range(1, variations + 1))


def render_conversation(turns: List[dict]) -> str:
    """Render turns as 'ROLE: text' lines, oldest first."""
    return "\n".join(f"{t.get('role', 'user').upper()}: {t.get('text', '')}" for t in turns)
