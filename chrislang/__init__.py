"""Type model, lexical scopes, diagnostics and a static type checker for the Chris programming language."""

__version__ = "0.1.0"