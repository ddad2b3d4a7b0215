__all__ = ["main", "Config", "Entry", "WorkLog", "parse_duration", "format_duration", "is_weekend"]
from .models import Config, Entry, WorkLog
from .duration import parse_duration, format_duration
from .dates import is_weekend
from .cli import main
__version__ = "0.3.0"
