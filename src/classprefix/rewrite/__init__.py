from classprefix.rewrite.tokens import (
    prefix_token,
    rewrite_class_string,
    rewrite_source,
    split_modifier,
    tokenize,
)
from classprefix.rewrite.transaction import FileTransaction, apply_replacements

__all__ = [
    "FileTransaction",
    "apply_replacements",
    "prefix_token",
    "rewrite_class_string",
    "rewrite_source",
    "split_modifier",
    "tokenize",
]
