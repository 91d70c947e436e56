"""
A minimal example to showcase converting a sparse document-term matrix (DTM) to a tidy table and back.

Markus Konrad <markus.konrad@wzb.eu>
"""

import numpy as np
from scipy.sparse import csr_matrix

from tidydtm import tidy_dtm, cast_dtm
from tidydtm.ranking import top_terms
from tidydtm.utils import enable_logging

enable_logging()

# a small sparse DTM
# document labels identify rows, vocabulary terms identify columns
doc_labels = ['emma', 'persuasion', 'sense']
vocab = ['anne', 'captain', 'elinor', 'emma', 'harriet', 'marianne']
mat = csr_matrix(np.array([
    [0, 0, 0, 786, 415, 0],
    [447, 303, 0, 0, 0, 0],
    [0, 0, 623, 0, 0, 492],
]))

# tidy the DTM: one row per non-zero entry
tbl = tidy_dtm(mat, doc_labels, vocab)
print(tbl)

# show top term per document
print(top_terms(tbl, 1))

# cast the table back to a sparse DTM, this time only recording whether a term occurs in a document
bin_mat, bin_doc_labels, bin_vocab = cast_dtm(tbl, weighting='binary')
print(bin_doc_labels, bin_vocab)
print(bin_mat.toarray())
