from typeahead.ui.controller import TypeaheadWidget
from typeahead.ui.views import HistoryList, ResultsList, TermInput

__all__ = [
    "HistoryList",
    "ResultsList",
    "TermInput",
    "TypeaheadWidget",
]
