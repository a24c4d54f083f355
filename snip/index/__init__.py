from .context import Context, extract_context, match_positions
from .search import Hit, SearchResult, score_documents, search
from .terms import count_terms, index_document, rebuild_index, terms_for

__all__ = [
    "Context", "extract_context", "match_positions",
    "Hit", "SearchResult", "score_documents", "search",
    "count_terms", "index_document", "rebuild_index", "terms_for",
]
