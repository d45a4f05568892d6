# =============================================================================
# lib/embeddings.py - Text Embeddings for Vendor Search
# =============================================================================
# Turns vendor descriptions into vectors stored in vendors.search_embedding
# (a pgvector column). PostgREST accepts pgvector values as the text
# literal "[0.1,0.2,...]", so vectors are formatted that way before writing.
# =============================================================================

import logging

from app.config import settings

logger = logging.getLogger(__name__)

# Lazy-loaded OpenAI client
_client = None


def get_openai_client():
    """Get or create OpenAI client (lazy initialization)."""
    global _client
    if _client is None:
        from openai import OpenAI
        _client = OpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def embed_text(text: str, model: str | None = None) -> list[float]:
    """
    Embed one piece of text.

    Args:
        text: Input text (vendor description markdown)
        model: Embedding model (default: settings.OPENAI_EMBEDDING_MODEL)

    Returns:
        The embedding vector
    """
    model = model or settings.OPENAI_EMBEDDING_MODEL
    response = get_openai_client().embeddings.create(model=model, input=text)
    vector = response.data[0].embedding
    logger.debug(f"Embedded {len(text)} chars with {model} -> {len(vector)} dims")
    return vector


def to_pgvector(vector: list[float]) -> str:
    """
    Format a vector as a pgvector literal.

    Example:
        to_pgvector([0.1, -0.2])  # "[0.1,-0.2]"
    """
    return "[" + ",".join(repr(float(value)) for value in vector) + "]"


def vendor_embedding_text(vendor: dict, category_names: list[str] | None = None) -> str:
    """
    Text embedded for a vendor in bulk refreshes.

    Joins name, description, category names and address, skipping blanks.
    """
    parts = [
        vendor.get("name") or "",
        vendor.get("description_md") or "",
        ", ".join(name for name in (category_names or []) if name),
        vendor.get("address") or "",
    ]
    return " ".join(part for part in parts if part)
