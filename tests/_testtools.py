import numpy as np
from hypothesis import strategies as st
from hypothesis.extra.numpy import arrays, array_shapes
from scipy.sparse import coo_matrix, csr_matrix


def _strategy_2d_array(dtype, minval=0, maxval=None, **kwargs):
    min_side = kwargs.pop('min_side', 1)
    max_side = kwargs.pop('max_side', None)

    if dtype is np.int64:
        elems = st.integers(minval, maxval, **kwargs)
    elif dtype is np.float64:
        elems = st.floats(minval, maxval, **kwargs)
    else:
        raise ValueError('no elements strategy for dtype', dtype)

    return arrays(dtype, array_shapes(min_dims=2, max_dims=2, min_side=min_side, max_side=max_side), elements=elems)


def strategy_dtm_small(min_side=0):
    return _strategy_2d_array(np.int64, 0, 10, min_side=min_side, max_side=10)


def strategy_doc_labels():
    return st.one_of(st.integers(0, 5), st.sampled_from(['doc1', 'doc2', 'doc3']))


def strategy_terms():
    return st.text(min_size=1, max_size=3)


def strategy_tidy_records(min_count=1, max_count=20, unique=True):
    """Lists of (document, term, count) triples; with `unique`, each (document, term) pair occurs only once."""
    records = st.tuples(strategy_doc_labels(), strategy_terms(), st.integers(min_count, max_count))

    if unique:
        return st.lists(records, max_size=30, unique_by=lambda r: (r[0], r[1]))
    else:
        return st.lists(records, max_size=30)


def as_matrix_type(mat, matrix_type):
    if matrix_type == 'coo':
        return coo_matrix(mat)
    elif matrix_type == 'csr':
        return csr_matrix(mat)
    else:
        return mat


def nonzero_entries(mat, doc_labels, vocab):
    """Dict mapping (document, term) to value for all non-zero entries of a (sparse) matrix."""
    if not isinstance(mat, np.ndarray):
        mat = mat.toarray()

    return {(doc_labels[i], vocab[j]): mat[i, j] for i, j in zip(*np.nonzero(mat))}


def table_rows(table):
    return set(table.itertuples(index=False, name=None))
