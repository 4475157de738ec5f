"""AI text suggestions for quote wording."""

__all__ = [
    "Suggestion",
    "SuggestionStatus",
    "TextSuggester",
]

from quotebook.suggestions.text_suggestions import Suggestion, SuggestionStatus, TextSuggester
