from copybin.utils.debounce import Debouncer
from copybin.utils.filters import filter_entries, format_timestamp, preview
from copybin.utils.thumbnail import make_thumbnail

__all__ = [
    'Debouncer',
    'filter_entries',
    'format_timestamp',
    'make_thumbnail',
    'preview',
]
