"""Brief generation using the OpenAI API."""
from daily_brief.core.constants import BRIEF_FALLBACK
from daily_brief.core.errors import SummarizationError
from daily_brief.llm.utils import create_client, strip_code_fences
from daily_brief.logging_cfg.logger import setup_logger

# Set up logger
logger = setup_logger()


def summarize_brief(prompt: str, settings, client=None) -> str:
    """Generate the brief document for an assembled prompt.

    Empty content from a successful call yields the fallback text; a failed
    call raises, so no email goes out without a document.

    Args:
        prompt: The assembled brief prompt
        settings: Runtime settings (model, temperature, token limit, key)
        client: Optional OpenAI client, built from settings when omitted

    Returns:
        str: Generated HTML document

    Raises:
        SummarizationError: The API call failed (auth, quota, network)
        ConfigurationError: No API key is configured
    """
    if client is None:
        client = create_client(settings)

    logger.info(f"Requesting brief from {settings.openai_model}")
    try:
        response = client.chat.completions.create(
            model=settings.openai_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=settings.temperature,
            max_tokens=settings.max_tokens
        )
    except Exception as e:
        logger.error(f"OpenAI API error: {e}")
        raise SummarizationError(f"Brief generation failed: {e}") from e

    content = None
    if getattr(response, 'choices', None):
        content = response.choices[0].message.content

    if not content or not content.strip():
        logger.warning("OpenAI returned no content; using fallback brief")
        return BRIEF_FALLBACK

    return strip_code_fences(content)
