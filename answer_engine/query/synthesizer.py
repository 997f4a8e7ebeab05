"""Final answer generation from resolved context."""

import logging

from answer_engine.errors import NotFoundError
from answer_engine.llm.base import LLMProvider

from .models import Provenance, ResolvedContext

logger = logging.getLogger(__name__)

NO_ANSWER_SENTINEL = "-1"

ANSWER_PREAMBLE = (
    "You are a helpful and enthusiastic support bot who can answer a given question "
    "based on the context provided. Go through the context sections and find the "
    "answer in the context. If you are unable to figure out the answer through the "
    f"provided context sections, return {NO_ANSWER_SENTINEL}. Never respond with "
    f"anything except {NO_ANSWER_SENTINEL} if you don't know the answer. Do not try "
    "to make up an answer if its not in the context given below. Always speak as if "
    "you were chatting with a friend."
)


def build_answer_prompt(context_text: str, query: str, context_source: Provenance) -> str:
    """Assemble preamble, context, provenance and question in that order."""
    return (
        f"{ANSWER_PREAMBLE}\n"
        f"Context sections:\n"
        f"{context_text}\n"
        f"Context source:\n"
        f"{context_source.value}\n"
        f'Question: """\n'
        f"{query}\n"
        f'"""\n'
        f"Answer as simple text:"
    )


class AnswerSynthesizer:
    """Turns resolved context into the user-facing answer."""

    def __init__(self, completer: LLMProvider, max_tokens: int = 512, temperature: float = 0.2):
        """Initialize the synthesizer.

        Args:
            completer: Provider for the final completion call
            max_tokens: Output token cap
            temperature: Kept low so answers stay grounded in the context
        """
        self.completer = completer
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def synthesize(self, resolved_context: ResolvedContext, query: str) -> str:
        """Generate the answer for ``query`` from ``resolved_context``.

        Raises:
            NotFoundError: If there is no context or the model answers with the sentinel
        """
        if resolved_context.context_source == Provenance.NONE or not resolved_context.context_text:
            raise NotFoundError()

        prompt = build_answer_prompt(
            resolved_context.context_text,
            query,
            resolved_context.context_source,
        )
        logger.debug(f"Generating response based on context from {resolved_context.context_source.value}")

        response = await self.completer.generate_response(
            prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        answer = response.content.strip()

        if answer == NO_ANSWER_SENTINEL:
            logger.info(f"Model could not derive an answer from {resolved_context.context_source.value} context")
            raise NotFoundError()

        return answer
