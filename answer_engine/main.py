"""Main entry point for the question answering service."""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from answer_engine.config import Settings, get_settings
from answer_engine.llm import create_embedding_provider, create_llm_provider
from answer_engine.logs import QueryLogger, SQLQueryLogSink
from answer_engine.query import AnswerSynthesizer, QueryOptions, QueryOrchestrator, QueryProcessor
from answer_engine.search import create_search_provider
from answer_engine.vector import ChromaVectorIndex
from answer_engine.web_server import WebServer, create_app

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send application logs to the console and, when configured, a file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_query_processor(settings: Settings) -> tuple[QueryProcessor, QueryLogger]:
    """Wire providers, index, log store and pipeline from settings."""
    completer = create_llm_provider()
    embedder = create_embedding_provider()
    vector_index = ChromaVectorIndex(
        host=settings.chroma_host,
        port=settings.chroma_port,
        collection_name=settings.chroma_collection,
    )
    search_provider = create_search_provider() if settings.brave_search_api_key else None
    query_logger = QueryLogger(SQLQueryLogSink(settings.query_log_database_url))

    orchestrator = QueryOrchestrator(
        embedder=embedder,
        vector_index=vector_index,
        completer=completer,
        search_provider=search_provider,
        query_logger=query_logger,
        default_options=QueryOptions(
            use_vector_store=settings.query_use_vector_store,
            use_llm=settings.query_use_llm,
            use_internet=settings.query_use_internet,
            min_score=settings.query_min_score,
            top_k=settings.query_top_k,
        ),
        completion_max_tokens=settings.completion_max_tokens,
        completion_temperature=settings.completion_temperature,
        call_timeout=settings.provider_timeout,
    )
    synthesizer = AnswerSynthesizer(
        completer,
        max_tokens=settings.completion_max_tokens,
        temperature=settings.completion_temperature,
    )
    return QueryProcessor(orchestrator, synthesizer), query_logger


async def main() -> None:
    """Main application entry point."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings)

    logger.info(f"Starting answer engine in {settings.environment.value} mode")
    logger.info(f"Using LLM provider: {settings.llm_provider.value}")

    # Validate configuration
    try:
        settings.validate_provider_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    processor, query_logger = build_query_processor(settings)
    web_server = WebServer(
        create_app(processor, query_logger),
        host=settings.server_host,
        port=settings.server_port,
    )
    await web_server.start()

    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await web_server.stop()
        await processor.aclose()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
