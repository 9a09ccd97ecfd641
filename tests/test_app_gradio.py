"""Tests for the Gradio handlers."""

import pytest

from src.ui import app_gradio


@pytest.fixture
def wired(service, monkeypatch):
    monkeypatch.setattr(app_gradio, "get_analysis_service", lambda: service)
    return service


@pytest.mark.asyncio
async def test_analyze_ui_returns_analysis_and_priority(wired):
    response = await app_gradio.analyze_ui(
        "I am extremely frustrated with the delays, this is unacceptable", "", 3
    )

    assert response["dominant_emotion"] == "frustration"
    assert response["priority_category"] == "high"
    assert "used_fallback" not in response


@pytest.mark.asyncio
async def test_analyze_ui_logs_message_for_customer(wired):
    await app_gradio.analyze_ui("hello", "c1", 1)

    assert wired.message_log.interaction_counts() == {"c1": 1}


@pytest.mark.asyncio
async def test_feedback_ui_applies_correction(wired):
    entry = await app_gradio.feedback_ui("c1", "foo", "joy", app_gradio.NO_CORRECTION, "")

    assert entry["was_correct"] is False
    assert entry["corrected_sentiment"] is None
    assert (await wired.analyze("foo")).dominant_emotion == "joy"


@pytest.mark.asyncio
async def test_feedback_ui_confirmation(wired):
    entry = await app_gradio.feedback_ui("c1", "foo", None, None, "looks right")

    assert entry["was_correct"] is True
    assert entry["notes"] == "looks right"
    assert len(app_gradio.history_ui()) == 1


@pytest.mark.asyncio
async def test_customers_ui(wired):
    wired.record_message("c1", "Ana", "Thanks, great service")

    report = await app_gradio.customers_ui()

    assert report["priorities"]["low"] == 1
    assert report["customers"][0]["customer_id"] == "c1"
