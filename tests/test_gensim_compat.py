import numpy as np
import pytest
from hypothesis import given, strategies as st
from scipy.sparse import coo_matrix

gensim = pytest.importorskip('gensim')

from tidydtm.errors import MalformedMatrix
from tidydtm.types import DTM
from tidydtm.gensim_compat import (dtm_to_gensim_corpus, gensim_corpus_to_dtm, tidy_gensim_corpus,
                                   cast_gensim_corpus)

from ._testtools import strategy_dtm_small, strategy_tidy_records, as_matrix_type, table_rows


@given(mat=strategy_dtm_small(min_side=1), matrix_type=st.sampled_from(['dense', 'coo', 'csr']))
def test_dtm_to_gensim_corpus_and_gensim_corpus_to_dtm(mat, matrix_type):
    dtm = as_matrix_type(mat, matrix_type)

    gensim_corpus = dtm_to_gensim_corpus(dtm)
    assert isinstance(gensim_corpus, gensim.matutils.Sparse2Corpus)
    assert len(gensim_corpus) == mat.shape[0]

    # convert back
    dtm_ = gensim_corpus_to_dtm(gensim_corpus, num_terms=mat.shape[1], num_docs=mat.shape[0])
    assert isinstance(dtm_, coo_matrix)
    assert np.array_equal(dtm_.toarray(), mat)
    assert dtm_.dtype == np.float64
    dtm_ = gensim_corpus_to_dtm(gensim_corpus, num_terms=mat.shape[1], num_docs=mat.shape[0], dtype=np.intc)
    assert dtm_.dtype == np.intc
    assert np.array_equal(dtm_.toarray(), mat)

    labelled = DTM(dtm, ['d%d' % i for i in range(mat.shape[0])], ['t%d' % i for i in range(mat.shape[1])])
    assert len(dtm_to_gensim_corpus(labelled)) == mat.shape[0]


def test_tidy_gensim_corpus_with_dict():
    corpus = [[(0, 2), (1, 1)], [(1, 3)], []]

    table = tidy_gensim_corpus(corpus, {0: 'cat', 1: 'dog'})

    assert table.columns.tolist() == ['document', 'term', 'count']
    assert table_rows(table) == {(0, 'cat', 2), (0, 'dog', 1), (1, 'dog', 3)}
    assert np.issubdtype(table['count'].dtype, np.integer)

    # non-integer weights stay floats
    table = tidy_gensim_corpus([[(0, 0.5)], [(0, 1), (1, 2.0)]], {0: 'cat', 1: 'dog'})
    assert np.issubdtype(table['count'].dtype, np.floating)
    assert table_rows(table) == {(0, 'cat', 0.5), (1, 'cat', 1.0), (1, 'dog', 2.0)}


def test_tidy_gensim_corpus_with_dictionary():
    docs = [['cat', 'dog', 'dog'], ['dog']]
    dictionary = gensim.corpora.Dictionary(docs)
    corpus = [dictionary.doc2bow(d) for d in docs]

    table = tidy_gensim_corpus(corpus, dictionary, doc_labels=['a', 'b'], value_col='n')

    assert table.columns.tolist() == ['document', 'term', 'n']
    assert table_rows(table) == {('a', 'cat', 1), ('a', 'dog', 2), ('b', 'dog', 1)}
    assert np.issubdtype(table['n'].dtype, np.integer)


def test_tidy_gensim_corpus_malformed():
    with pytest.raises(MalformedMatrix):
        tidy_gensim_corpus([[(2, 1)]], {0: 'cat', 1: 'dog'})
    with pytest.raises(MalformedMatrix):
        tidy_gensim_corpus([[(0, 1)]], {0: 'cat', 2: 'dog'})
    with pytest.raises(MalformedMatrix):
        tidy_gensim_corpus([[(0, 1)], [(1, 1)]], {0: 'cat', 1: 'dog'}, doc_labels=['a'])


@given(records=strategy_tidy_records(), as_gensim_dictionary=st.booleans())
def test_cast_gensim_corpus(records, as_gensim_dictionary):
    corpus, id2word, doc_labels = cast_gensim_corpus(records, as_gensim_dictionary=as_gensim_dictionary)

    assert isinstance(corpus, gensim.matutils.Sparse2Corpus)
    assert len(corpus) == len(doc_labels) == len(set(r[0] for r in records))

    if as_gensim_dictionary:
        assert isinstance(id2word, gensim.corpora.Dictionary)
    else:
        assert isinstance(id2word, dict)
    assert len(id2word) == len(set(r[1] for r in records))

    # tidying the result again gives the original records
    assert table_rows(tidy_gensim_corpus(corpus, id2word, doc_labels)) == set(records)


def test_cast_gensim_corpus_binary():
    corpus, id2word, doc_labels = cast_gensim_corpus([('d1', 'a', 2), ('d1', 'a', 3), ('d2', 'b', 4)],
                                                     weighting='binary', as_gensim_dictionary=False)

    assert doc_labels.tolist() == ['d1', 'd2']
    assert id2word == {0: 'a', 1: 'b'}
    assert [[(i, int(n)) for i, n in bow] for bow in corpus] == [[(0, 1)], [(1, 1)]]
