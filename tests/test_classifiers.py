"""Tests for the transformer-backed sentiment engine."""

from unittest.mock import patch

import pytest

from src.analysis.classifiers import ModelSentimentEngine
from src.core import AnalysisFailedError, ModelNotLoadedError


class FakePipeline:
    """Callable returning canned text-classification output."""

    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    def __call__(self, text, top_k=None, truncation=None):
        self.calls.append((text, top_k))
        if isinstance(self.outputs, Exception):
            raise self.outputs
        return self.outputs


def make_factory(sentiment_outputs, emotion_outputs):
    pipelines = {
        "sentiment-model": FakePipeline(sentiment_outputs),
        "emotion-model": FakePipeline(emotion_outputs),
    }
    built = []

    def factory(task, model, device):
        built.append(model)
        return pipelines[model]

    return factory, pipelines, built


def make_engine():
    return ModelSentimentEngine(
        sentiment_model_name="sentiment-model",
        emotion_model_name="emotion-model",
    )


class TestModelSentimentEngine:
    """Test cases for ModelSentimentEngine."""

    @pytest.mark.asyncio
    async def test_positive_prediction(self):
        factory, pipelines, _ = make_factory(
            [{"label": "POSITIVE", "score": 0.98}, {"label": "NEGATIVE", "score": 0.02}],
            [{"label": "joy", "score": 0.91}, {"label": "surprise", "score": 0.05}],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            result = await engine.analyze("I love this")

        assert result.sentiment == "positive"
        assert result.sentiment_score == pytest.approx(0.98)
        assert result.dominant_emotion == "joy"
        assert result.confidence_score == pytest.approx(0.91)
        assert result.used_fallback is False
        assert pipelines["sentiment-model"].calls == [("I love this", 2)]
        assert pipelines["emotion-model"].calls == [("I love this", 5)]

    @pytest.mark.asyncio
    async def test_negative_score_is_inverted(self):
        factory, _, _ = make_factory(
            [{"label": "NEGATIVE", "score": 0.9}, {"label": "POSITIVE", "score": 0.1}],
            [{"label": "anger", "score": 0.7}, {"label": "sadness", "score": 0.2}],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            result = await engine.analyze("This is terrible")

        assert result.sentiment == "negative"
        assert result.sentiment_score == pytest.approx(0.1)
        assert result.dominant_emotion == "anger"

    @pytest.mark.asyncio
    async def test_labels_mapped_and_unknown_labels_become_neutral(self):
        factory, _, _ = make_factory(
            [[{"label": "POSITIVE", "score": 0.6}]],
            [[
                {"label": "confusion", "score": 0.4},
                {"label": "Scared", "score": 0.5},
                {"label": "happy", "score": 0.1},
            ]],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            result = await engine.analyze("Hmm")

        assert [e.emotion for e in result.emotions] == ["fear", "neutral", "joy"]
        assert result.dominant_emotion == "fear"

    @pytest.mark.asyncio
    async def test_labels_mapping_to_same_emotion_are_merged(self):
        factory, _, _ = make_factory(
            [[{"label": "NEGATIVE", "score": 0.7}]],
            [[
                {"label": "confusion", "score": 0.3},
                {"label": "anger", "score": 0.35},
                {"label": "boredom", "score": 0.2},
                {"label": "angry", "score": 0.1},
            ]],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            result = await engine.analyze("Meh")

        assert [(e.emotion, e.score) for e in result.emotions] == [("anger", 0.35), ("neutral", 0.3)]

    @pytest.mark.asyncio
    async def test_non_english_text_passed_verbatim(self):
        factory, pipelines, _ = make_factory(
            [{"label": "POSITIVE", "score": 0.7}],
            [{"label": "joy", "score": 0.6}],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            result = await engine.analyze("¡Muy bueno!")

        assert result.language == "es"
        assert pipelines["sentiment-model"].calls[0][0] == "¡Muy bueno!"

    @pytest.mark.asyncio
    async def test_models_built_once(self):
        factory, _, built = make_factory(
            [{"label": "POSITIVE", "score": 0.7}],
            [{"label": "joy", "score": 0.6}],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            await engine.analyze("one")
            await engine.analyze("two")

        assert built == ["sentiment-model", "emotion-model"]
        assert engine.loaded

    @pytest.mark.asyncio
    async def test_load_failure_is_permanent(self):
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=OSError("no network")) as factory:
            with pytest.raises(ModelNotLoadedError):
                await engine.analyze("first")
            with pytest.raises(ModelNotLoadedError):
                await engine.analyze("second")

        assert engine.failed
        assert factory.call_count == 1

    @pytest.mark.asyncio
    async def test_inference_failure_is_not_permanent(self):
        factory, pipelines, _ = make_factory(
            RuntimeError("CUDA out of memory"),
            [{"label": "joy", "score": 0.6}],
        )
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            with pytest.raises(AnalysisFailedError):
                await engine.analyze("text")

            pipelines["sentiment-model"].outputs = [{"label": "POSITIVE", "score": 0.8}]
            result = await engine.analyze("text")

        assert not engine.failed
        assert result.sentiment == "positive"

    @pytest.mark.asyncio
    async def test_empty_emotion_output_fails(self):
        factory, _, _ = make_factory([{"label": "POSITIVE", "score": 0.8}], [])
        engine = make_engine()

        with patch("src.analysis.classifiers.pipeline", side_effect=factory):
            with pytest.raises(AnalysisFailedError):
                await engine.analyze("text")
