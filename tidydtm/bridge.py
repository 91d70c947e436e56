"""
Functions for converting a (sparse) document-term matrix (DTM) to a tidy, long-format table with one
(document, term, count) observation per row and for casting such a table back to a DTM.

A DTM is always accompanied by its row labels (document labels) and column labels (vocabulary). The functions here
either take them as separate arguments or bundled as :class:`~tidydtm.types.DTM` tuple. Zero entries of a DTM are
never part of a tidy table and absent (document, term) pairs of a tidy table are zero entries of the DTM.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

import logging
from collections.abc import Mapping
from typing import Union, Optional, Sequence, Iterable, Iterator, Tuple, Any

import numpy as np
import pandas as pd
from scipy.sparse import coo_matrix, issparse

from . import defaults
from .errors import InvalidWeighting, NegativeCount
from .types import DTM, TidyRecord, MatrixFormat, Weighting, Matrix
from .utils import LOGGER_NAME, check_dtm_labels, as_label_array, empty_labels


logger = logging.getLogger(LOGGER_NAME)


#%% helpers


def _as_weighting(weighting: Union[str, Weighting]) -> Weighting:
    if isinstance(weighting, Weighting):
        return weighting

    try:
        return Weighting(weighting)
    except (ValueError, TypeError):
        raise InvalidWeighting(f'unsupported weighting {weighting!r}; must be one of '
                               + ', '.join(repr(w.value) for w in Weighting)) from None


def _as_matrix_format(matrix_format: Union[str, MatrixFormat, None]) -> MatrixFormat:
    if matrix_format is None:
        matrix_format = defaults.matrix_format

    if isinstance(matrix_format, MatrixFormat):
        return matrix_format

    try:
        return MatrixFormat(matrix_format)
    except (ValueError, TypeError):
        raise ValueError(f'unsupported matrix format {matrix_format!r}; must be one of '
                         + ', '.join(repr(f.value) for f in MatrixFormat)) from None


def _colnames(doc_col: Optional[str], term_col: Optional[str], value_col: Optional[str]) -> Tuple[str, str, str]:
    colnames = (doc_col or defaults.doc_col, term_col or defaults.term_col, value_col or defaults.value_col)

    if len(set(colnames)) != 3:
        raise ValueError('document, term and value column names must differ')

    return colnames


def _first_seen_index(values: pd.Series) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map each value in `values` to the position of its first appearance. Return these positions and the unique values as
    label array.
    """
    # pd.factorize compares object strings only up to the first NUL character
    index = {}
    codes = np.fromiter((index.setdefault(v, len(index)) for v in values.tolist()), dtype=np.intp, count=len(values))
    return codes, as_label_array(list(index.keys()))


def _dtm_triplets(dtm: Union[Matrix, DTM, pd.DataFrame], doc_labels: Optional[Sequence], vocab: Optional[Sequence]) \
        -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Return row indices, column indices and values of all non-zero entries in `dtm` in row-major order, along with
    `doc_labels` and `vocab` as label arrays.
    """
    if isinstance(dtm, DTM):
        if doc_labels is None:
            doc_labels = dtm.doc_labels
        if vocab is None:
            vocab = dtm.vocab
        dtm = dtm.mat
    elif isinstance(dtm, pd.DataFrame):
        # dense DTM with labels as index and columns, e.g. from `dtm_to_dataframe`
        if doc_labels is None:
            doc_labels = dtm.index.tolist()
        if vocab is None:
            vocab = dtm.columns.tolist()
        dtm = dtm.to_numpy()

    check_dtm_labels(dtm, doc_labels, vocab)

    if issparse(dtm):
        # work on a copy so that the input is never altered by canonicalization
        mat = coo_matrix(dtm, copy=True)
        mat.sum_duplicates()
        mat.eliminate_zeros()
        order = np.lexsort((mat.col, mat.row))
        rows = mat.row[order]
        cols = mat.col[order]
        vals = mat.data[order]
    else:
        mat = np.asarray(dtm)
        rows, cols = np.nonzero(mat)   # row-major order
        vals = mat[rows, cols]

    if np.issubdtype(vals.dtype, np.floating) and np.any(np.isnan(vals)):
        raise ValueError('`dtm` must not contain missing values')

    if len(vals) > 0 and np.any(vals < 0):
        raise NegativeCount('`dtm` must not contain negative values')

    return rows, cols, vals, as_label_array(doc_labels), as_label_array(vocab)


def _records_to_frame(records: Union[pd.DataFrame, Iterable], doc_col: str, term_col: str, value_col: str) \
        -> pd.DataFrame:
    colnames = [doc_col, term_col, value_col]

    if isinstance(records, pd.DataFrame):
        table = records
    else:
        records = list(records)
        if not records:
            return pd.DataFrame(columns=colnames)

        if isinstance(records[0], Mapping):
            table = pd.DataFrame.from_records(records)
        else:
            table = pd.DataFrame.from_records(records, columns=colnames)

    missing = [c for c in colnames if c not in table.columns]
    if missing:
        raise ValueError('tidy table is missing the column(s) ' + ', '.join(map(repr, missing)))

    return table


#%% DTM -> tidy table


def tidy_dtm(dtm: Union[Matrix, DTM, pd.DataFrame], doc_labels: Optional[Sequence] = None,
             vocab: Optional[Sequence] = None, doc_col: Optional[str] = None, term_col: Optional[str] = None,
             value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Convert a (sparse) document-term matrix `dtm` with row labels `doc_labels` and column labels `vocab` to a tidy
    table with one row per non-zero entry of `dtm`.

    The rows of the result follow the row-major order of the entries in `dtm`, i.e. they are ordered by document and
    then by term as given by `doc_labels` and `vocab`. Entries that are explicitly stored as zero in a sparse matrix
    are dropped and duplicate entries of an uncanonical COO matrix are summed.

    :param dtm: NumPy 2D array, SciPy sparse matrix, labelled :class:`~tidydtm.types.DTM` or dense pandas DataFrame of
                size NxM (N docs, M is vocab size)
    :param doc_labels: document labels of size N; may be omitted if `dtm` is a ``DTM`` or DataFrame
    :param vocab: vocabulary of size M; may be omitted if `dtm` is a ``DTM`` or DataFrame
    :param doc_col: name of the document column; if None, use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None, use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None, use :data:`tidydtm.defaults.value_col`
    :return: pandas DataFrame with document, term and value columns
    """
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)
    rows, cols, vals, doc_labels, vocab = _dtm_triplets(dtm, doc_labels, vocab)

    if logger.isEnabledFor(logging.INFO):
        logger.info(f'tidying DTM of shape {(len(doc_labels), len(vocab))} with {len(vals)} non-zero entries')

    return pd.DataFrame({
        doc_col: doc_labels[rows],
        term_col: vocab[cols],
        value_col: vals
    })


def iter_tidy_records(dtm: Union[Matrix, DTM, pd.DataFrame], doc_labels: Optional[Sequence] = None,
                      vocab: Optional[Sequence] = None) -> Iterator[TidyRecord]:
    """
    Lazy variant of :func:`tidy_dtm`: return an iterator over :class:`~tidydtm.types.TidyRecord` tuples, one for each
    non-zero entry in `dtm`, in the same order as :func:`tidy_dtm`. The input is validated immediately.

    :param dtm: NumPy 2D array, SciPy sparse matrix, labelled :class:`~tidydtm.types.DTM` or dense pandas DataFrame
    :param doc_labels: document labels; may be omitted if `dtm` is a ``DTM`` or DataFrame
    :param vocab: vocabulary; may be omitted if `dtm` is a ``DTM`` or DataFrame
    :return: iterator over tidy records
    """
    rows, cols, vals, doc_labels, vocab = _dtm_triplets(dtm, doc_labels, vocab)

    def _records():
        for d, t, v in zip(doc_labels[rows].tolist(), vocab[cols].tolist(), vals.tolist()):
            yield TidyRecord(d, t, v)

    return _records()


#%% tidy table -> DTM


def cast_dtm(records: Union[pd.DataFrame, Iterable[Union[TidyRecord, Tuple, Mapping]]],
             weighting: Union[str, Weighting] = 'raw', as_format: Union[str, MatrixFormat, None] = None,
             doc_col: Optional[str] = None, term_col: Optional[str] = None, value_col: Optional[str] = None,
             dtype: Optional[Union[str, np.dtype]] = None) -> DTM:
    """
    Cast a tidy table `records` of (document, term, count) observations to a document-term matrix.

    The matrix rows correspond to the unique documents and the matrix columns to the unique terms, both in order of
    first appearance in `records`. The values of all records with the same (document, term) pair are combined
    according to `weighting`:

    - ``"raw"``: sum the counts
    - ``"binary"``: 1 if the summed count is non-zero
    - ``"tfidf"``: values are pre-computed weights (e.g. from :mod:`tmtoolkit.bow.bow_stats`) and are summed like raw
      counts; the result is always a float matrix

    Cells whose combined value is zero are not stored.

    :param records: pandas DataFrame with document, term and value columns or an iterable of
                    :class:`~tidydtm.types.TidyRecord` objects, 3-tuples or dicts
    :param weighting: how to combine values of duplicate (document, term) pairs; see above
    :param as_format: matrix format of the result (``"csr"``, ``"coo"`` or ``"dense"``); if None, use
                      :data:`tidydtm.defaults.matrix_format`
    :param doc_col: name of the document column; if None, use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None, use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None, use :data:`tidydtm.defaults.value_col`
    :param dtype: optionally specify the dtype of the resulting matrix
    :return: labelled :class:`~tidydtm.types.DTM` tuple with matrix, document labels and vocabulary
    """
    weighting = _as_weighting(weighting)
    as_format = _as_matrix_format(as_format)
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)

    table = _records_to_frame(records, doc_col, term_col, value_col)
    n_records = len(table)

    if n_records == 0:
        logger.debug('empty tidy table')
        mat = coo_matrix((0, 0), dtype=dtype or (float if weighting is Weighting.TFIDF else 'int32'))
        return DTM(_convert_format(mat, as_format), empty_labels(), empty_labels())

    values = pd.to_numeric(table[value_col]).to_numpy()

    if np.issubdtype(values.dtype, np.floating) and np.isnan(values).any():
        raise ValueError(f'column {value_col!r} must not contain missing values')

    neg = np.flatnonzero(values < 0)
    if len(neg) > 0:
        first = table.iloc[neg[0]]
        raise NegativeCount(f'{len(neg)} record(s) with negative {value_col!r}; first one is '
                            f'({first[doc_col]!r}, {first[term_col]!r}, {first[value_col]!r})')

    if weighting is Weighting.TFIDF:
        values = values.astype(float)

    if table[doc_col].isna().any() or table[term_col].isna().any():
        raise ValueError(f'columns {doc_col!r} and {term_col!r} must not contain missing values')

    logger.debug('indexing documents and terms')
    row_ind, doc_labels = _first_seen_index(table[doc_col])
    col_ind, vocab = _first_seen_index(table[term_col])

    if logger.isEnabledFor(logging.INFO):
        logger.info(f'casting tidy table with {n_records} records to {as_format.value} DTM with '
                    f'{len(doc_labels)} documents and vocab size {len(vocab)} using {weighting.value} weighting')

    mat = coo_matrix((values, (row_ind, col_ind)), shape=(len(doc_labels), len(vocab)))
    mat.sum_duplicates()   # combine values of duplicate (document, term) pairs by summing

    if weighting is Weighting.BINARY:
        mat.data = (mat.data > 0).astype(np.intc)

    mat.eliminate_zeros()

    if dtype is not None:
        mat = mat.astype(dtype)

    return DTM(_convert_format(mat, as_format), doc_labels, vocab)


def _convert_format(mat: coo_matrix, as_format: MatrixFormat) -> Matrix:
    if as_format is MatrixFormat.COO:
        return mat
    elif as_format is MatrixFormat.CSR:
        return mat.tocsr()
    else:
        return mat.toarray()


#%% dense fallback


def dtm_to_dataframe(dtm: Union[Matrix, DTM], doc_labels: Optional[Sequence] = None,
                     vocab: Optional[Sequence] = None) -> pd.DataFrame:
    """
    Convert a (sparse) DTM to a pandas DataFrame using document labels `doc_labels` as row index and `vocab` as column
    names.

    .. warning:: The result is *dense* data, which means that it may require a lot of memory.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) or labelled
                :class:`~tidydtm.types.DTM`
    :param doc_labels: document labels used as row index (row names); size must equal number of rows in `dtm`
    :param vocab: list or array of vocabulary used as column names; size must equal number of columns in `dtm`
    :return: pandas DataFrame
    """
    if isinstance(dtm, DTM):
        if doc_labels is None:
            doc_labels = dtm.doc_labels
        if vocab is None:
            vocab = dtm.vocab
        dtm = dtm.mat

    check_dtm_labels(dtm, doc_labels, vocab)

    if issparse(dtm):
        dtm = dtm.toarray()

    return pd.DataFrame(np.asarray(dtm), index=doc_labels, columns=vocab)


#%% class interface


class TidyMatrixBridge:
    """
    Bidirectional converter between tidy tables and document-term matrices with fixed settings.

    All settings that are not passed to the constructor are copied from :mod:`tidydtm.defaults` at construction
    time, so that later changes to the defaults don't affect an existing bridge.
    """

    def __init__(self, doc_col: Optional[str] = None, term_col: Optional[str] = None, value_col: Optional[str] = None,
                 matrix_format: Union[str, MatrixFormat, None] = None, dtype: Optional[Union[str, np.dtype]] = None):
        """
        Create a converter.

        :param doc_col: name of the document column in tidy tables
        :param term_col: name of the term column in tidy tables
        :param value_col: name of the value column in tidy tables
        :param matrix_format: format of the matrices created by :meth:`to_matrix`
        :param dtype: optional dtype of the matrices created by :meth:`to_matrix`
        """
        self.doc_col, self.term_col, self.value_col = _colnames(doc_col, term_col, value_col)
        self.matrix_format = _as_matrix_format(matrix_format)
        self.dtype = dtype

    def __repr__(self):
        return f'<TidyMatrixBridge [columns {self.doc_col!r}, {self.term_col!r}, {self.value_col!r}; ' \
               f'format {self.matrix_format.value!r}]>'

    def to_tidy(self, dtm: Union[Matrix, DTM, pd.DataFrame], doc_labels: Optional[Sequence] = None,
                vocab: Optional[Sequence] = None) -> pd.DataFrame:
        """
        Convert `dtm` to a tidy table. See :func:`tidy_dtm`.
        """
        return tidy_dtm(dtm, doc_labels, vocab, doc_col=self.doc_col, term_col=self.term_col,
                        value_col=self.value_col)

    def iter_records(self, dtm: Union[Matrix, DTM, pd.DataFrame], doc_labels: Optional[Sequence] = None,
                     vocab: Optional[Sequence] = None) -> Iterator[TidyRecord]:
        """
        Iterate over the tidy records of `dtm`. See :func:`iter_tidy_records`.
        """
        return iter_tidy_records(dtm, doc_labels, vocab)

    def to_matrix(self, records: Union[pd.DataFrame, Iterable[Any]], weighting: Union[str, Weighting] = 'raw') -> DTM:
        """
        Cast tidy table `records` to a document-term matrix. See :func:`cast_dtm`.
        """
        return cast_dtm(records, weighting=weighting, as_format=self.matrix_format, doc_col=self.doc_col,
                        term_col=self.term_col, value_col=self.value_col, dtype=self.dtype)
