"""Unit tests for the HuggingFace embedder wrapper."""

from unittest.mock import patch

from igdb_indexer.ingestion.embedder import HuggingFaceEmbedder


def test_model_is_loaded_lazily_once() -> None:
    with patch("igdb_indexer.ingestion.embedder.HuggingFaceEmbeddings") as hf:
        hf.return_value.embed_documents.return_value = [[0.1], [0.2]]
        embedder = HuggingFaceEmbedder("some/model")
        hf.assert_not_called()

        assert embedder.embed(["a.", "b."]) == [[0.1], [0.2]]
        embedder.embed(["c."])

    hf.assert_called_once_with(
        model_name="some/model",
        encode_kwargs={"normalize_embeddings": True},
    )
    hf.return_value.embed_documents.assert_any_call(["a.", "b."])


def test_empty_input_skips_model() -> None:
    with patch("igdb_indexer.ingestion.embedder.HuggingFaceEmbeddings") as hf:
        assert HuggingFaceEmbedder("some/model").embed([]) == []
    hf.assert_not_called()
