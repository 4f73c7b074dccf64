from classprefix.scope.parser import parse_scope, parse_scopes, split_descriptors

__all__ = ["parse_scope", "parse_scopes", "split_descriptors"]
