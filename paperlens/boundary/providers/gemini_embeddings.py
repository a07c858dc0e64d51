"""
Gemini embedding provider.

Wraps GoogleGenerativeAIEmbeddings behind the EmbeddingProvider contract,
optionally pinning the output dimensionality so every vector of an index
has the same length.

Dependencies: langchain_google_genai
System role: Embedding generation adapter
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from paperlens.boundary.providers.base import EmbeddingProvider
from paperlens.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Google Gemini embeddings, one text per call."""

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        output_dimensionality: int | None = None,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize Gemini embeddings client.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed vector size, model default when None
            google_api_key: API key, SDK environment lookup when None
        """
        kwargs = {"model": model}
        if google_api_key:
            kwargs["google_api_key"] = google_api_key
        self._embeddings = GoogleGenerativeAIEmbeddings(**kwargs)
        self._model = model
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    async def embed_one(self, text: str) -> list[float]:
        """
        Embed one text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: When the API call fails or returns nothing
        """
        try:
            if self._output_dimensionality:
                vector = await self._embeddings.aembed_query(
                    text, output_dimensionality=self._output_dimensionality
                )
            else:
                vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embedding: {type(e).__name__}: {e}",
                model=self._model,
            ) from e

        if not vector:
            raise EmbeddingError("Embedding response contained no values", model=self._model)
        return [float(v) for v in vector]
