"""Embedding inference — one vector per input text, order preserved."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from langchain_huggingface import HuggingFaceEmbeddings

from igdb_indexer.config import settings

logger = logging.getLogger(__name__)


class EmbedderBase(ABC):
    """Inference capability used by the dispatcher."""

    def __init__(self, model_name: str) -> None:
        self.model_name = model_name

    @abstractmethod
    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        """Return one embedding per entry of *texts*, in the same order."""
        ...


class HuggingFaceEmbedder(EmbedderBase):
    """Sentence-transformer embeddings through ``langchain_huggingface``.

    The underlying model is loaded on first use so that importing the
    worker does not download weights.
    """

    def __init__(self, model_name: str = settings.embedding_model, *, normalize_embeddings: bool = True) -> None:
        super().__init__(model_name)
        self.normalize_embeddings = normalize_embeddings
        self._embeddings: HuggingFaceEmbeddings | None = None

    def _model(self) -> HuggingFaceEmbeddings:
        if self._embeddings is None:
            logger.info("Loading embedding model %s", self.model_name)
            self._embeddings = HuggingFaceEmbeddings(
                model_name=self.model_name,
                encode_kwargs={"normalize_embeddings": self.normalize_embeddings},
            )
        return self._embeddings

    def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        return self._model().embed_documents(list(texts))
