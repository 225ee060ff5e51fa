"""
Project Retriever - Lexical retrieval over a project's original documents

Pipeline:
1. Chonkie RecursiveChunker splits each document on paragraph, line,
   sentence and word boundaries, keeping character offsets
2. Offsets are mapped back to 1-based inclusive line ranges
3. Chunks are ranked by TF-IDF cosine similarity over character n-grams,
   so inflected forms ("invoices", "invoiced") still match

Results carry the metadata shape the chat layer stores as provenance:

    {"source": <path>, "loc": {"lines": {"from": <int>, "to": <int>}}}
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from chonkie import RecursiveChunker, RecursiveLevel, RecursiveRules
from langchain_core.callbacks import CallbackManagerForRetrieverRun
from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from docgpt.config import settings
from docgpt.models.original_document import OriginalDocument

logger = logging.getLogger(__name__)


# Structural boundaries first, so chunks stay aligned on whole lines when possible
DOCUMENT_RULES = RecursiveRules(
    levels=[
        RecursiveLevel(delimiters=["\n\n\n", "\n\n"], whitespace=False, include_delim="prev"),
        RecursiveLevel(delimiters=["\n"], whitespace=False, include_delim="prev"),
        RecursiveLevel(delimiters=[". ", "! ", "? "], whitespace=False, include_delim="prev"),
        RecursiveLevel(delimiters=None, whitespace=True, include_delim="prev"),
        RecursiveLevel(delimiters=None, whitespace=False, include_delim="prev"),
    ]
)


@dataclass
class LineChunk:
    """A chunk of a document with its inclusive line span"""
    source: str
    line_from: int
    line_to: int
    content: str


def chunk_document(
    source: str,
    text: str,
    chunk_size: int,
    min_characters_per_chunk: int = 24,
) -> List[LineChunk]:
    """
    Split a document into chunks located by line

    Args:
        source: Document path
        text: Document content
        chunk_size: Maximum characters per chunk
        min_characters_per_chunk: Smaller pieces are merged with neighbours

    Returns:
        Non-blank chunks in document order
    """
    if not text or not text.strip():
        return []

    chunker = RecursiveChunker(
        tokenizer="character",
        chunk_size=chunk_size,
        rules=DOCUMENT_RULES,
        min_characters_per_chunk=min_characters_per_chunk,
    )

    chunks = []
    for chunk in chunker.chunk(text):
        content = chunk.text.strip()
        if not content:
            continue
        start = chunk.start_index + len(chunk.text) - len(chunk.text.lstrip())
        line_from = text.count("\n", 0, start) + 1
        chunks.append(LineChunk(source, line_from, line_from + content.count("\n"), content))
    return chunks


class ProjectRetriever(BaseRetriever):
    """Retriever over the documents of one project"""

    documents: List[Document]
    k: int = 4
    chunk_size: int = 600
    min_characters_per_chunk: int = 24
    min_score: float = 0.1

    @classmethod
    def from_original_documents(
        cls,
        documents: Sequence[OriginalDocument],
        k: Optional[int] = None,
        chunk_size: Optional[int] = None,
        min_score: Optional[float] = None,
    ) -> "ProjectRetriever":
        return cls(
            documents=[
                Document(page_content=d.content or "", metadata={"source": d.path})
                for d in documents
            ],
            k=k if k is not None else settings.RETRIEVAL_TOP_K,
            chunk_size=chunk_size if chunk_size is not None else settings.RETRIEVAL_CHUNK_SIZE,
            min_characters_per_chunk=settings.RETRIEVAL_MIN_CHUNK_CHARS,
            min_score=min_score if min_score is not None else settings.RETRIEVAL_MIN_SCORE,
        )

    def _chunks(self) -> List[LineChunk]:
        chunks = []
        for document in self.documents:
            chunks.extend(chunk_document(
                document.metadata["source"],
                document.page_content,
                self.chunk_size,
                self.min_characters_per_chunk,
            ))
        return chunks

    def _get_relevant_documents(
        self,
        query: str,
        *,
        run_manager: CallbackManagerForRetrieverRun,
    ) -> List[Document]:
        chunks = self._chunks()
        if not chunks or not query.strip():
            return []

        vectorizer = TfidfVectorizer(analyzer="char_wb", ngram_range=(3, 5), sublinear_tf=True)
        matrix = vectorizer.fit_transform([c.content for c in chunks])
        scores = cosine_similarity(vectorizer.transform([query]), matrix)[0]

        ranked = sorted(
            (
                (float(score), chunk)
                for score, chunk in zip(scores, chunks)
                if score >= self.min_score and score > 0
            ),
            key=lambda item: (-item[0], item[1].source, item[1].line_from),
        )

        results = [
            Document(
                page_content=chunk.content,
                metadata={
                    "source": chunk.source,
                    "loc": {"lines": {"from": chunk.line_from, "to": chunk.line_to}},
                },
            )
            for _, chunk in ranked[:self.k]
        ]
        logger.debug(f"Retrieved {len(results)} of {len(chunks)} chunks from {len(self.documents)} documents")
        return results
