from classprefix.model.outcome import FileOutcome, FileStatus, RunSummary
from classprefix.model.scope import Domain, MatchKind, NamePattern, ScopeConfig, ScopeRule
from classprefix.model.source import ClassSource, Replacement, Token

__all__ = [
    "ClassSource",
    "Domain",
    "FileOutcome",
    "FileStatus",
    "MatchKind",
    "NamePattern",
    "Replacement",
    "RunSummary",
    "ScopeConfig",
    "ScopeRule",
    "Token",
]
