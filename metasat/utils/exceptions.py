# coding: utf-8
"""
Public subclasses of different Exceptions
"""


class MetaSATException(Exception):
    """Base class for metasat exceptions"""

    pass


class ContradictionError(MetaSATException):
    """A clause or cardinality constraint made the clause set trivially unsatisfiable.

    Only raised inside the oracle adapter, which turns it into the latched
    ``clearly_unsat`` flag of the session.
    """

    pass


class OracleTimeout(MetaSATException):
    """A solve call ended without a verdict (timeout or interrupt)."""

    pass


class UnsupportedOperation(MetaSATException):
    """The session was not opened in a mode that supports this operation."""

    pass
