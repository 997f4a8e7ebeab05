"""Tests for answer synthesis."""

from unittest.mock import AsyncMock

import pytest

from answer_engine.errors import NO_ANSWER_MESSAGE, NotFoundError
from answer_engine.llm.base import LLMProvider
from answer_engine.query import AnswerSynthesizer, Provenance, ResolvedContext
from answer_engine.query.synthesizer import ANSWER_PREAMBLE, build_answer_prompt

from factories import make_response


@pytest.fixture
def answer_model():
    provider = AsyncMock(spec=LLMProvider)
    provider.generate_response.return_value = make_response("  You can get a refund within 30 days.\n")
    return provider


class TestBuildAnswerPrompt:
    """Test answer prompt assembly."""

    def test_sections_in_order(self):
        """Preamble, context, source and question appear in that order."""
        prompt = build_answer_prompt("Refunds within 30 days.", "What is the refund policy?", Provenance.VECTOR_DB)

        positions = [
            prompt.index(ANSWER_PREAMBLE),
            prompt.index("Context sections:\nRefunds within 30 days."),
            prompt.index("Context source:\nvectorDB"),
            prompt.index('Question: """\nWhat is the refund policy?\n"""'),
            prompt.index("Answer as simple text:"),
        ]
        assert positions == sorted(positions)
        assert prompt.endswith("Answer as simple text:")

    def test_preamble_mentions_sentinel(self):
        """The model is told to reply -1 when the context has no answer."""
        assert "return -1" in ANSWER_PREAMBLE


class TestAnswerSynthesizer:
    """Test AnswerSynthesizer."""

    @pytest.mark.asyncio
    async def test_returns_trimmed_answer(self, answer_model):
        """The model's answer comes back stripped."""
        synthesizer = AnswerSynthesizer(answer_model)
        context = ResolvedContext("Refunds within 30 days.", Provenance.VECTOR_DB)

        answer = await synthesizer.synthesize(context, "What is the refund policy?")

        assert answer == "You can get a refund within 30 days."

    @pytest.mark.asyncio
    async def test_completion_settings_passed(self, answer_model):
        """Configured max tokens and temperature reach the provider."""
        synthesizer = AnswerSynthesizer(answer_model, max_tokens=256, temperature=0.1)
        context = ResolvedContext("4", Provenance.LLM)

        await synthesizer.synthesize(context, "What is 2+2?")

        call = answer_model.generate_response.await_args
        assert call.kwargs == {"max_tokens": 256, "temperature": 0.1}
        assert "Context source:\nllm" in call.args[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", ["-1", " -1\n", "\n-1"])
    async def test_sentinel_means_no_answer(self, answer_model, reply):
        """A sentinel reply raises NotFoundError."""
        answer_model.generate_response.return_value = make_response(reply)
        synthesizer = AnswerSynthesizer(answer_model)

        with pytest.raises(NotFoundError) as exc_info:
            await synthesizer.synthesize(ResolvedContext("ctx", Provenance.INTERNET_SEARCH), "question")

        assert exc_info.value.message == NO_ANSWER_MESSAGE

    @pytest.mark.asyncio
    async def test_sentinel_inside_text_is_an_answer(self, answer_model):
        """Only a bare sentinel counts."""
        answer_model.generate_response.return_value = make_response("The result is -1")
        synthesizer = AnswerSynthesizer(answer_model)

        answer = await synthesizer.synthesize(ResolvedContext("ctx", Provenance.LLM), "What is 1-2?")

        assert answer == "The result is -1"

    @pytest.mark.asyncio
    async def test_no_provenance_skips_model(self, answer_model):
        """Missing context raises without calling the model."""
        synthesizer = AnswerSynthesizer(answer_model)

        with pytest.raises(NotFoundError):
            await synthesizer.synthesize(ResolvedContext("", Provenance.NONE), "question")

        with pytest.raises(NotFoundError):
            await synthesizer.synthesize(ResolvedContext("", Provenance.VECTOR_DB), "question")

        answer_model.generate_response.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, answer_model):
        """Failures of the final completion are not masked."""
        answer_model.generate_response.side_effect = RuntimeError("model unavailable")
        synthesizer = AnswerSynthesizer(answer_model)

        with pytest.raises(RuntimeError, match="model unavailable"):
            await synthesizer.synthesize(ResolvedContext("ctx", Provenance.VECTOR_DB), "question")
