"""
Ranking of terms in tidy tables.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

from typing import Union, Optional, Iterable

import numpy as np
import pandas as pd

from .bridge import _colnames, _records_to_frame, _first_seen_index


def top_terms(records: Union[pd.DataFrame, Iterable], top_n: int, by_doc: bool = True, doc_col: Optional[str] = None,
              term_col: Optional[str] = None, value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Select the `top_n` terms with the largest values from the tidy table `records`, either for each document
    (`by_doc` is True) or for the whole table, in which case the values of each term are summed across documents.

    Terms with equal values are ranked by their first appearance in `records`. With `by_doc`, the documents keep the
    order of their first appearance as well.

    :param records: tidy table; see :func:`~tidydtm.bridge.cast_dtm`
    :param top_n: number of terms to select per document or overall; must be at least 1
    :param by_doc: if True, select terms per document, else select terms across all documents
    :param doc_col: name of the document column; if None, use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None, use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None, use :data:`tidydtm.defaults.value_col`
    :return: pandas DataFrame with document, term and value columns if `by_doc` is True, else with term and value
             columns
    """
    if top_n < 1:
        raise ValueError('`top_n` must be at least 1')

    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)
    table = _records_to_frame(records, doc_col, term_col, value_col)

    if by_doc:
        table = table[[doc_col, term_col, value_col]].copy()
        group_col = '_doc_order'
        table[group_col] = _first_seen_index(table[doc_col])[0]
    else:
        term_ind, terms = _first_seen_index(table[term_col])
        sums = table[value_col].groupby(term_ind, sort=True).sum()   # term positions are in order of first appearance
        table = pd.DataFrame({term_col: terms, value_col: sums.to_numpy()})
        group_col = None

    table['_pos'] = np.arange(len(table))
    sort_by = [value_col, '_pos']
    ascending = [False, True]
    if group_col:
        sort_by.insert(0, group_col)
        ascending.insert(0, True)

    ranked = table.sort_values(sort_by, ascending=ascending)

    if group_col:
        ranked = ranked.groupby(group_col, sort=False).head(top_n)
        ranked = ranked.drop(columns=[group_col])
    else:
        ranked = ranked.head(top_n)

    return ranked.drop(columns=['_pos']).reset_index(drop=True)
