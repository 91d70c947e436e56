"""
Module with default settings that are used by the conversion functions in :mod:`tidydtm.bridge` whenever the
respective argument is not given, and which can be changed during runtime, e.g.::

    import tidydtm

    tidydtm.defaults.value_col = 'n'
    # -> tidy tables now have a column "n" instead of "count":
    tidydtm.tidy_dtm(dtm, doc_labels, vocab)

A :class:`~tidydtm.bridge.TidyMatrixBridge` copies these settings when it is created.
"""

doc_col = 'document'
term_col = 'term'
value_col = 'count'
matrix_format = 'csr'
