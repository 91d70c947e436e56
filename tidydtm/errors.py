"""
Exceptions raised when converting between tidy tables and document-term matrices.

All of them are also ``ValueError`` subclasses, since they signal invalid input data.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""


class TidyDTMError(ValueError):
    """Base class for all tidydtm errors."""
    pass


class MalformedMatrix(TidyDTMError):
    """A matrix is not 2D or its row/column labels are missing or don't match its shape."""
    pass


class InvalidWeighting(TidyDTMError):
    """An unsupported weighting mode was requested."""
    pass


class NegativeCount(TidyDTMError):
    """A count is negative."""
    pass
