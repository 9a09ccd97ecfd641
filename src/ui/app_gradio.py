"""Gradio web interface for customer sentiment analysis and prioritization"""
from __future__ import annotations

from typing import Optional

import gradio as gr

from config import logger
from src.analysis import get_analysis_service
from src.analysis.insights import emotion_distribution, priority_distribution
from src.core import EMOTIONS, SENTIMENTS, AppError

NO_CORRECTION = "(no correction)"

async def analyze_ui(text: str, customer_id: str, interaction_count: float) -> dict:
    """
    Gradio handler for analysis requests

    Args:
        text: Customer message text input from UI
        customer_id: Optional customer identifier; when given the message is logged
        interaction_count: Number of interactions used for the priority score

    Returns:
        Dictionary containing either:
            - AnalysisResult fields plus priority_score / priority_category
            - Error dictionary with 'error' key on failure
    """
    logger.info("Received analysis request")
    srv = get_analysis_service()

    try:
        if customer_id:
            srv.record_message(customer_id=customer_id, customer_name=customer_id, text=text)
        result = await srv.analyze(text)
        score, category = srv.prioritize(result, int(interaction_count or 0))
        return {
            **result.model_dump(),
            "priority_score": score,
            "priority_category": category,
        }
    except AppError as e:
        logger.warning(f"AppError: {e}")
        return e.to_dict()

async def feedback_ui(
    customer_id: str,
    text: str,
    corrected_emotion: Optional[str],
    corrected_sentiment: Optional[str],
    notes: str,
) -> dict:
    """
    Gradio handler for feedback on a prediction

    The current prediction for the text is fetched first, then stored with
    the reviewer's corrections (none means the prediction was right).
    """
    logger.info("Received feedback")
    srv = get_analysis_service()
    emotion = None if corrected_emotion in (None, "", NO_CORRECTION) else corrected_emotion
    sentiment = None if corrected_sentiment in (None, "", NO_CORRECTION) else corrected_sentiment

    try:
        prediction = await srv.analyze(text)
        entry = srv.record_feedback(
            customer_id=customer_id or "anonymous",
            original_prediction=prediction,
            corrected_emotion=emotion,
            corrected_sentiment=sentiment,
            original_text=text,
            notes=notes or None,
        )
        return entry.model_dump(mode="json")
    except AppError as e:
        logger.warning(f"AppError: {e}")
        return e.to_dict()

def history_ui() -> list:
    return [entry.model_dump(mode="json") for entry in get_analysis_service().get_all_feedback()]

async def customers_ui() -> dict:
    customers = await get_analysis_service().analyze_customers()
    return {
        "priorities": priority_distribution(customers),
        "emotions": emotion_distribution(customers),
        "customers": [c.model_dump(mode="json") for c in customers],
    }

analyze_tab = gr.Interface(
    fn=analyze_ui,
    inputs=[
        gr.Textbox(label="Customer message", lines=3),
        gr.Textbox(label="Customer id (optional, logs the message)"),
        gr.Number(label="Interaction count", value=1, precision=0),
    ],
    outputs=gr.JSON(label="Analysis result"),
    description="Sentiment, emotions, language and follow-up priority of a message",
)

feedback_tab = gr.Interface(
    fn=feedback_ui,
    inputs=[
        gr.Textbox(label="Customer id"),
        gr.Textbox(label="Customer message", lines=3),
        gr.Dropdown(choices=[NO_CORRECTION, *EMOTIONS], value=NO_CORRECTION, label="Correct emotion"),
        gr.Dropdown(choices=[NO_CORRECTION, *SENTIMENTS], value=NO_CORRECTION, label="Correct sentiment"),
        gr.Textbox(label="Notes"),
    ],
    outputs=gr.JSON(label="Feedback entry"),
    description="Confirm or correct a prediction; corrections apply to future analyses of the same text",
)

history_tab = gr.Interface(fn=history_ui, inputs=None, outputs=gr.JSON(label="Feedback history"))

customers_tab = gr.Interface(fn=customers_ui, inputs=None, outputs=gr.JSON(label="Customer priorities"))

demo = gr.TabbedInterface(
    [analyze_tab, feedback_tab, history_tab, customers_tab],
    tab_names=["Analyze", "Feedback", "History", "Customers"],
    title="Customer Priority Analyzer",
)

if __name__ == "__main__":
    demo.launch()
