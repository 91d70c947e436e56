"""
Module with common types used in type annotations throughout this project.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

from enum import Enum
from typing import Union, NamedTuple, Any

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix


StrOrInt = Union[str, int]


class MatrixFormat(Enum):
    """Closed set of matrix variants a DTM can be cast to."""
    DENSE = 'dense'   # NumPy 2D array
    COO = 'coo'       # SciPy sparse matrix in triplet format
    CSR = 'csr'       # SciPy sparse matrix in compressed sparse row format


class Weighting(Enum):
    """How values of duplicate (document, term) pairs are combined when casting a tidy table to a matrix."""
    RAW = 'raw'         # sum counts
    BINARY = 'binary'   # clamp to 1
    TFIDF = 'tfidf'     # pre-computed weights, summed like raw counts


Matrix = Union[np.ndarray, coo_matrix, csr_matrix]


class TidyRecord(NamedTuple):
    """A single observation of a tidy document-term table."""
    document: StrOrInt
    term: str
    count: Any


class DTM(NamedTuple):
    """
    A labelled document-term matrix: matrix `mat` of shape ``(len(doc_labels), len(vocab))`` together with its row
    labels `doc_labels` and column labels `vocab`.
    """
    mat: Matrix
    doc_labels: np.ndarray
    vocab: np.ndarray

    @property
    def shape(self):
        return self.mat.shape
