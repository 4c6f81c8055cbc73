"""Exceptions raised by the punch ledger and reference lookups."""


class DataAccessError(Exception):
    """
    Any fault reported by the underlying store.

    Covers connectivity problems, malformed queries, constraint violations
    and rows that cannot be decoded. The original driver exception is kept
    as ``__cause__``.
    """
