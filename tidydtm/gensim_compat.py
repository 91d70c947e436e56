"""
Conversion between tidy tables or document-term matrices and `Gensim <https://radimrehurek.com/gensim/>`_
bag-of-words corpora. Requires the optional dependency ``gensim``.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

import logging
from typing import Union, Optional, Sequence, Iterable, Mapping, Tuple, Any

import numpy as np
import pandas as pd
from scipy.sparse import coo_matrix, csc_matrix, issparse

from .bridge import tidy_dtm, cast_dtm
from .errors import MalformedMatrix
from .types import DTM, Weighting, Matrix
from .utils import LOGGER_NAME, as_label_array


logger = logging.getLogger(LOGGER_NAME)


#%% low-level conversion


def dtm_to_gensim_corpus(dtm: Union[Matrix, DTM]):
    """
    Convert a (sparse) DTM to a Gensim Corpus object.

    .. seealso:: :func:`~tidydtm.gensim_compat.gensim_corpus_to_dtm` for the reverse function or
                 :func:`~tidydtm.gensim_compat.cast_gensim_corpus` which directly converts a tidy table.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw terms counts or labelled
                :class:`~tidydtm.types.DTM`
    :return: a Gensim :class:`gensim.matutils.Sparse2Corpus` object
    """
    import gensim

    if isinstance(dtm, DTM):
        dtm = dtm.mat

    # DTM with documents to words sparse matrix has to be converted to transposed sparse matrix in CSC format
    dtm_t = dtm.transpose()

    if issparse(dtm_t):
        dtm_sparse = dtm_t.tocsc()
    else:
        dtm_sparse = csc_matrix(dtm_t)

    return gensim.matutils.Sparse2Corpus(dtm_sparse)


def gensim_corpus_to_dtm(corpus: Iterable, num_terms: Optional[int] = None, num_docs: Optional[int] = None,
                         dtype: Any = np.float64) -> coo_matrix:
    """
    Convert a Gensim corpus object to a sparse DTM in COO format.

    .. seealso:: :func:`~tidydtm.gensim_compat.dtm_to_gensim_corpus` for the reverse function.

    :param corpus: Gensim corpus object, i.e. an iterable of bag-of-words lists with ``(term ID, count)`` pairs
    :param num_terms: number of terms (matrix columns); if None, determined from `corpus`
    :param num_docs: number of documents (matrix rows); if None, determined from `corpus`
    :param dtype: data type of the resulting matrix
    :return: sparse DTM in COO format
    """
    import gensim

    dtm_t = gensim.matutils.corpus2csc(corpus, num_terms=num_terms, dtype=dtype, num_docs=num_docs)
    return coo_matrix(dtm_t.transpose())


#%% tidy tables


def tidy_gensim_corpus(corpus: Iterable[Sequence[Tuple[int, Any]]], id2word: Mapping,
                       doc_labels: Optional[Sequence] = None, doc_col: Optional[str] = None,
                       term_col: Optional[str] = None, value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Convert a Gensim bag-of-words corpus to a tidy table.

    :param corpus: Gensim corpus object, i.e. an iterable of bag-of-words lists with ``(term ID, count)`` pairs
    :param id2word: Gensim :class:`~gensim.corpora.dictionary.Dictionary` or dict mapping term IDs ``0 ... M-1`` to
                    terms
    :param doc_labels: optional document labels, one for each document in `corpus`; if None, documents are labelled
                       by their index ``0 ... N-1``
    :param doc_col: name of the document column; if None, use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None, use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None, use :data:`tidydtm.defaults.value_col`
    :return: pandas DataFrame with document, term and value columns
    """
    docs = list(corpus)
    id2word = dict(id2word.items())
    n_terms = len(id2word)

    if set(id2word.keys()) != set(range(n_terms)):
        raise MalformedMatrix('term IDs in `id2word` must be consecutive integers starting at 0')

    for bow in docs:
        for term_id, _ in bow:
            if not 0 <= term_id < n_terms:
                raise MalformedMatrix(f'term ID {term_id} in `corpus` is not part of `id2word`')

    if doc_labels is None:
        doc_labels = list(range(len(docs)))

    # keep integer counts as integers
    int_counts = all(isinstance(c, (int, np.integer)) and not isinstance(c, bool) for bow in docs for _, c in bow)

    logger.debug(f'converting Gensim corpus with {len(docs)} documents and {n_terms} terms')
    dtm = gensim_corpus_to_dtm(docs, num_terms=n_terms, num_docs=len(docs),
                               dtype=np.intc if int_counts else np.float64)
    vocab = as_label_array([id2word[i] for i in range(n_terms)])

    return tidy_dtm(dtm, doc_labels, vocab, doc_col=doc_col, term_col=term_col, value_col=value_col)


def cast_gensim_corpus(records: Union[pd.DataFrame, Iterable], weighting: Union[str, Weighting] = 'raw',
                       as_gensim_dictionary: bool = True, doc_col: Optional[str] = None,
                       term_col: Optional[str] = None, value_col: Optional[str] = None) -> Tuple[Any, Any, np.ndarray]:
    """
    Cast a tidy table `records` to a Gensim Corpus object, a Gensim
    :class:`~gensim.corpora.dictionary.Dictionary` object (or a Python :func:`dict`) and the document labels in
    corpus order.

    :param records: tidy table; see :func:`~tidydtm.bridge.cast_dtm`
    :param weighting: how to combine values of duplicate (document, term) pairs; see :func:`~tidydtm.bridge.cast_dtm`
    :param as_gensim_dictionary: if True create Gensim :class:`~gensim.corpora.dictionary.Dictionary` from the
                                 vocabulary, else create Python :func:`dict`
    :param doc_col: name of the document column; if None, use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None, use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None, use :data:`tidydtm.defaults.value_col`
    :return: a 3-tuple with (Corpus object, Gensim :class:`~gensim.corpora.dictionary.Dictionary` or
             Python :func:`dict`, document labels array)
    """
    dtm = cast_dtm(records, weighting=weighting, as_format='csr', doc_col=doc_col, term_col=term_col,
                   value_col=value_col)
    corpus = dtm_to_gensim_corpus(dtm.mat)

    # vocabulary array has to be converted to dict with index -> word mapping
    id2word = dict(zip(range(len(dtm.vocab)), dtm.vocab.tolist()))

    if as_gensim_dictionary:
        import gensim
        id2word = gensim.corpora.dictionary.Dictionary.from_corpus(corpus, id2word)

    return corpus, id2word, dtm.doc_labels
