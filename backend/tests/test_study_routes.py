from __future__ import annotations

import pytest


TEXT_ROUTES = [
    ("/chat", "question", "missing_question"),
    ("/summarize-text", "text", "missing_text"),
    ("/summarize-audio", "transcript", "missing_transcript"),
    ("/generate-quiz", "text", "missing_text"),
    ("/flashcards", "text", "missing_text"),
    ("/mindmap", "text", "missing_text"),
    ("/essay-feedback", "essay", "missing_essay"),
    ("/paraphrase", "text", "missing_text"),
    ("/tutor", "question", "missing_question"),
    ("/extract-table", "text", "missing_text"),
    ("/knowledge-graph", "text", "missing_text"),
]

OUTPUT_KEYS = [
    ("/chat", "question", "answer"),
    ("/summarize-text", "text", "summary"),
    ("/summarize-audio", "transcript", "summary"),
    ("/generate-quiz", "text", "quiz"),
    ("/flashcards", "text", "cards"),
    ("/mindmap", "text", "mermaid"),
    ("/essay-feedback", "essay", "feedback"),
    ("/paraphrase", "text", "paraphrases"),
    ("/extract-table", "text", "table"),
    ("/knowledge-graph", "text", "mermaid"),
]


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "✅ EDU AI Lab backend is running."
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize("path, field, code", TEXT_ROUTES)
@pytest.mark.parametrize("value", [None, "", "   \n\t"])
def test_blank_required_field_is_400(client, fake_llm, path, field, code, value):
    body = {} if value is None else {field: value}
    r = client.post(path, json=body)
    assert r.status_code == 400
    assert r.json()["error"] == code
    assert fake_llm.calls == []


@pytest.mark.parametrize("path, field, key", OUTPUT_KEYS)
def test_success_returns_task_key(client, path, field, key):
    r = client.post(path, json={field: "Newton's laws of motion"})
    assert r.status_code == 200
    assert r.json() == {key: "model reply"}


@pytest.mark.parametrize("path, field, code", [p for p in TEXT_ROUTES if p[0] != "/tutor"])
def test_model_failure_is_500(client, fake_llm, path, field, code):
    fake_llm.error = RuntimeError("quota exceeded")
    r = client.post(path, json={field: "content"})
    assert r.status_code == 500
    body = r.json()
    assert body["error"].endswith("_failed")
    assert body["details"] == "quota exceeded"


@pytest.mark.parametrize(
    "count, expected",
    [(500, 50), (0, 1), ("abc", 10), ("7", 7), (None, 10), (10 ** 400, 50), (-(10 ** 400), 1), ("1e400", 50)],
)
def test_quiz_count_clamped(client, fake_llm, count, expected):
    r = client.post("/generate-quiz", json={"text": "Cells", "count": count})
    assert r.status_code == 200
    assert fake_llm.last_prompt.startswith(f"Create {expected} multiple-choice questions")


def test_quiz_count_infinity_clamps_to_bound(client, fake_llm):
    r = client.post(
        "/generate-quiz",
        content=b'{"text": "Cells", "count": Infinity}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 200
    assert fake_llm.last_prompt.startswith("Create 50 multiple-choice questions")


def test_flashcard_count_clamped(client, fake_llm):
    client.post("/flashcards", json={"text": "Cells", "count": 101})
    assert fake_llm.last_prompt.startswith("Generate 100 high-quality")


def test_paraphrase_variations_clamped(client, fake_llm):
    client.post("/paraphrase", json={"text": "Cells", "variations": "lots", "tone": "casual"})
    assert "into 3 distinct versions in a casual tone" in fake_llm.last_prompt
    client.post("/paraphrase", json={"text": "Cells", "variations": 0})
    assert "into 1 distinct versions in a academic tone" in fake_llm.last_prompt


@pytest.mark.parametrize("language", ["none", "NONE", "None"])
def test_language_none_never_wraps(client, language):
    r = client.post("/summarize-text", json={"text": "Cells", "language": language})
    assert r.json()["summary"] == "model reply"


def test_padded_none_language_still_wraps(client):
    r = client.post("/summarize-text", json={"text": "Cells", "language": " none "})
    assert r.json()["summary"] == "model reply\n\n---\n\n🔁  none  Translation:\n" + (
        "Translate the entire answer above to  none , preserving structure, headings, lists and tone."
    )


def test_language_wraps_every_route(client):
    suffix = (
        "\n\n---\n\n🔁 Hindi Translation:\n"
        "Translate the entire answer above to Hindi, preserving structure, headings, lists and tone."
    )
    for path, field, key in OUTPUT_KEYS:
        r = client.post(path, json={field: "Cells", "language": "Hindi"})
        assert r.json()[key] == "model reply" + suffix


def test_motivation_needs_no_input(client, fake_llm):
    r = client.post("/motivation", json={})
    assert r.status_code == 200
    assert r.json() == {"message": "model reply"}
    assert fake_llm.last_prompt.endswith("Context (optional): N/A")
    assert fake_llm.calls[-1]["temperature"] == 0.8


def test_study_planner(client, fake_llm):
    r = client.post(
        "/study-planner",
        json={"subjects": ["Math", "Chemistry"], "examDate": "2026-12-15", "hoursPerDay": 4, "language": "none"},
    )
    assert r.status_code == 200
    assert r.json() == {"plan": "model reply"}
    assert "- Subjects: Math, Chemistry" in fake_llm.last_prompt
    assert "- Hours/Day: 4" in fake_llm.last_prompt


@pytest.mark.parametrize("hours, expected", [("1.5", "1.5"), (2.75, "2.75"), (100, "24"), (None, "2")])
def test_study_planner_hours_not_truncated(client, fake_llm, hours, expected):
    body = {"subjects": ["Math"], "examDate": "2026-12-15", "hoursPerDay": hours}
    assert client.post("/study-planner", json=body).status_code == 200
    assert f"- Hours/Day: {expected}\n" in fake_llm.last_prompt


def test_model_settings_reach_the_client(client, fake_llm, settings):
    settings.gemini_api_key = "configured-key"
    settings.gemini_model = "gemini-test"
    for path, field, _ in OUTPUT_KEYS:
        client.post(path, json={field: "Cells"})
    client.post("/study-planner", json={"subjects": ["Math"], "examDate": "2026-12-15"})
    client.post("/motivation", json={})
    client.post("/generate-citations", json={"references": "Smith 2020"})
    assert len(fake_llm.options) == len(OUTPUT_KEYS) + 3
    assert all(o == {"api_key": "configured-key", "model_name": "gemini-test"} for o in fake_llm.options)


@pytest.mark.parametrize(
    "body",
    [{}, {"subjects": [], "examDate": "2026-12-15"}, {"subjects": ["Math"]}, {"subjects": ["Math"], "examDate": " "}],
)
def test_study_planner_missing_fields(client, body):
    r = client.post("/study-planner", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "missing_fields", "hint": "Provide subjects[] and examDate."}


def test_citations_string_and_array_normalize_alike(client, fake_llm):
    client.post("/generate-citations", json={"references": ["Smith 2020", " ", "Doe 2019 "]})
    from_array = fake_llm.last_prompt
    client.post("/generate-citations", json={"references": "Smith 2020\nDoe 2019"})
    assert fake_llm.last_prompt == from_array
    assert from_array.endswith("REFERENCES:\nSmith 2020\nDoe 2019")


def test_citations_objects_and_style(client, fake_llm):
    r = client.post("/generate-citations", json={"references": [{"title": "Origin"}], "style": "Chicago"})
    assert r.json() == {"citations": "model reply"}
    assert "in Chicago style" in fake_llm.last_prompt
    assert fake_llm.last_prompt.endswith('{"title":"Origin"}')


@pytest.mark.parametrize("references", [[], "", "   ", None, ["", "  "]])
def test_citations_missing_references(client, references):
    r = client.post("/generate-citations", json={"references": references})
    assert r.status_code == 400
    assert r.json()["error"] == "missing_references"


def test_citations_too_large(client, fake_llm, settings):
    r = client.post("/generate-citations", json={"references": "x" * (settings.max_reference_chars + 1)})
    assert r.status_code == 413
    assert r.json()["error"] == "payload_too_large"
    assert fake_llm.calls == []


def test_json_body_too_large(client, settings):
    r = client.post("/summarize-text", json={"text": "x" * (settings.max_json_bytes + 10)})
    assert r.status_code == 413
    assert r.json()["error"] == "payload_too_large"


def test_malformed_json_is_400(client):
    r = client.post("/chat", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_request"


def test_wrong_field_type_is_400(client):
    r = client.post("/chat", json={"question": ["not", "a", "string"]})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid_request"
