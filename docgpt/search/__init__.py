"""
Search over project documents

Retrievers:
    - ProjectRetriever: chunked TF-IDF retrieval with line ranges (LangChain BaseRetriever)
"""

from docgpt.search.project_retriever import ProjectRetriever

__all__ = ["ProjectRetriever"]
