from classprefix.stylesheet.collector import collect_class_names, load_class_set, parse_class_set
from classprefix.stylesheet.model import ClassSet
from classprefix.stylesheet.selectors import class_names_in_selector, unescape

__all__ = [
    "ClassSet",
    "class_names_in_selector",
    "collect_class_names",
    "load_class_set",
    "parse_class_set",
    "unescape",
]
