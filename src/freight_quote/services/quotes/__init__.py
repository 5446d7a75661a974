"""Quote pipeline exports."""

from .service import QuoteService, build_quote_record, create_quote, get_quote, list_quotes

__all__ = ["QuoteService", "build_quote_record", "create_quote", "get_quote", "list_quotes"]
