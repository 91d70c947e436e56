"""
Misc. utility functions: logging setup, label arrays and pickle persistence of labelled document-term matrices.

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

import logging
import pickle
from typing import Union, Any, Optional, Sequence

import numpy as np
from scipy.sparse import issparse

from .errors import MalformedMatrix
from .types import DTM


#%% logging

LOGGER_NAME = 'tidydtm'

_default_logging_hndlr: Optional[logging.Handler] = None  # default logging handler


def enable_logging(level: int = logging.INFO, fmt: str = '%(asctime)s:%(levelname)s:%(name)s:%(message)s',
                   logging_handler: Optional[logging.Handler] = None, add_logging_handler: bool = True,
                   **stream_hndlr_opts) -> None:
    """
    Enable logging for tidydtm package with minimum log level `level` and log message format `fmt`. By default, logs
    to stderr via ``logging.StreamHandler``. You may also pass your own log handler.

    .. seealso:: Only the logging levels INFO and DEBUG are used in tidydtm.

    :param level: minimum log level; default is INFO level
    :param fmt: log message format
    :param logging_handler: pass custom logging handler to be used instead of the default stream handler
    :param add_logging_handler: if True, add the logging handler to the logger
    :param stream_hndlr_opts: optional additional parameters passed to ``logging.StreamHandler``
    """

    global _default_logging_hndlr

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logging_handler:
        _default_logging_hndlr = logging_handler
    else:
        _default_logging_hndlr = logging.StreamHandler(**stream_hndlr_opts)

    _default_logging_hndlr.setLevel(level)

    if fmt:
        _default_logging_hndlr.setFormatter(logging.Formatter(fmt))

    if add_logging_handler:
        logger.addHandler(_default_logging_hndlr)


def set_logging_level(level: int) -> None:
    """
    Set logging level for tidydtm package default logging handler.

    :param level: minimum log level
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if _default_logging_hndlr:
        _default_logging_hndlr.setLevel(level)


def disable_logging() -> None:
    """
    Disable logging for tidydtm package.
    """
    set_logging_level(logging.WARNING)  # reset to default level

    if _default_logging_hndlr:
        logger = logging.getLogger(LOGGER_NAME)
        logger.removeHandler(_default_logging_hndlr)


#%% label arrays


def empty_labels() -> np.ndarray:
    """
    Create empty NumPy label array.

    :return: empty NumPy object array
    """
    return np.array([], dtype=object)


def as_label_array(x: Union[np.ndarray, Sequence]) -> np.ndarray:
    """
    Convert a NumPy array or sequence of document labels or vocabulary terms `x` to a 1D NumPy array.
    Integers keep an integer dtype; strings and mixed labels result in an object array, since NumPy string dtypes drop
    trailing NUL characters. Always returns a copy.

    :param x: NumPy array or sequence
    :return: 1D NumPy array
    """
    if isinstance(x, np.ndarray):
        return x.copy()

    if not isinstance(x, (list, tuple)):
        x = list(x)

    if len(x) == 0:
        return empty_labels()

    if all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in x):
        return np.array(x)
    else:
        arr = np.empty(len(x), dtype=object)
        arr[:] = x
        return arr


def check_dtm_labels(dtm: Any, doc_labels: Optional[Sequence], vocab: Optional[Sequence]) -> None:
    """
    Check that (sparse) matrix `dtm` is two-dimensional and that its row labels `doc_labels` and column labels
    `vocab` are given and match its shape. Raises :class:`~tidydtm.errors.MalformedMatrix` otherwise.

    :param dtm: (sparse) document-term-matrix
    :param doc_labels: document labels used as row labels
    :param vocab: vocabulary used as column labels
    """
    if getattr(dtm, 'ndim', None) != 2:
        raise MalformedMatrix('`dtm` must be a 2D array/matrix')

    if doc_labels is None:
        raise MalformedMatrix('`doc_labels` must be given')

    if vocab is None:
        raise MalformedMatrix('`vocab` must be given')

    if dtm.shape[0] != len(doc_labels):
        raise MalformedMatrix(f'number of rows in `dtm` ({dtm.shape[0]}) must be equal to '
                              f'`len(doc_labels)` ({len(doc_labels)})')

    if dtm.shape[1] != len(vocab):
        raise MalformedMatrix(f'number of columns in `dtm` ({dtm.shape[1]}) must be equal to '
                              f'`len(vocab)` ({len(vocab)})')

    if len(set(doc_labels)) != len(doc_labels):
        raise MalformedMatrix('`doc_labels` must be unique')

    if len(set(vocab)) != len(vocab):
        raise MalformedMatrix('`vocab` must be unique')


#%% pickle / unpickle


def save_dtm_to_pickle(dtm: DTM, picklefile: str, **kwargs) -> None:
    """
    Save a labelled DTM `dtm` in `picklefile` with Python's :mod:`pickle` module.

    :param dtm: labelled document-term matrix
    :param picklefile: either target file path as string or file handle
    :param kwargs: further parameters passed to :func:`pickle.dump`
    """
    check_dtm_labels(dtm.mat, dtm.doc_labels, dtm.vocab)
    data = {'dtm': dtm.mat, 'doc_labels': dtm.doc_labels, 'vocab': dtm.vocab}

    if isinstance(picklefile, str):
        with open(picklefile, 'wb') as f:
            pickle.dump(data, f, **kwargs)
    else:
        pickle.dump(data, picklefile, **kwargs)


def load_dtm_from_pickle(picklefile: str, **kwargs) -> DTM:
    """
    Load a labelled DTM from `picklefile` that was stored with :func:`save_dtm_to_pickle`.

    .. warning:: Python pickle files may contain malicious code. You should only load pickle files from trusted sources.

    :param picklefile: either target file path as string or file handle
    :param kwargs: further parameters passed to :func:`pickle.load`
    :return: labelled document-term matrix
    """
    if isinstance(picklefile, str):
        with open(picklefile, 'rb') as f:
            data = pickle.load(f, **kwargs)
    else:
        data = pickle.load(picklefile, **kwargs)

    if not isinstance(data, dict) or not {'dtm', 'doc_labels', 'vocab'} <= set(data.keys()):
        raise MalformedMatrix('pickle file does not contain a labelled document-term matrix')

    mat = data['dtm']
    if not (issparse(mat) or isinstance(mat, np.ndarray)):
        raise MalformedMatrix('pickle file does not contain a NumPy array or SciPy sparse matrix')

    check_dtm_labels(mat, data['doc_labels'], data['vocab'])

    return DTM(mat, data['doc_labels'], data['vocab'])
