"""
tidydtm – conversion between tidy (long-format) text tables and sparse document-term matrices

Markus Konrad <markus.konrad@wzb.eu>
"""

from importlib.util import find_spec
import logging

__title__ = 'tidydtm'
__version__ = '0.1.0'
__author__ = 'Markus Konrad'
__license__ = 'Apache License 2.0'

logger = logging.getLogger(__title__)
logger.addHandler(logging.NullHandler())
logger.setLevel(logging.WARNING)   # set default level


from . import defaults, errors, types, utils, bridge, ranking
from .bridge import TidyMatrixBridge, tidy_dtm, iter_tidy_records, cast_dtm, dtm_to_dataframe

if find_spec('gensim'):
    from . import gensim_compat
