from classprefix.source.languages import SUPPORTED_EXTENSIONS, language_for, parse_source
from classprefix.source.matcher import ScopeMatcher

__all__ = ["SUPPORTED_EXTENSIONS", "ScopeMatcher", "language_for", "parse_source"]
