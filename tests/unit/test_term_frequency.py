"""
Unit tests for hashed term frequency counting.
"""

from sparse_bm25.term_frequency import hash_token, term_frequencies
from sparse_bm25.tokenizer import BM25Tokenizer


class TestHashToken:
    """Test MurmurHash3 term ids"""

    def test_known_value(self):
        """Test 32-bit MurmurHash3 (seed 0) as unsigned"""
        assert hash_token("foo") == 4138058784

    def test_deterministic(self):
        assert hash_token("brown") == hash_token("brown")

    def test_unsigned_32bit_range(self):
        for token in ["fox", "dog", "brown", "lazi", "jump", "café"]:
            assert 0 <= hash_token(token) < 2**32


class TestTermFrequencies:
    """Test counting of hashed terms"""

    def test_counts_and_first_occurrence_order(self):
        indices, counts = term_frequencies("dog fox dog dog", BM25Tokenizer())
        assert indices == [hash_token("dog"), hash_token("fox")]
        assert counts == [3, 1]

    def test_stemmed_variants_merge(self):
        """Test that 'jump' and 'jumps' count as one term"""
        indices, counts = term_frequencies("jump jumps", BM25Tokenizer())
        assert indices == [hash_token("jump")]
        assert counts == [2]

    def test_empty_text(self):
        assert term_frequencies("", BM25Tokenizer()) == ([], [])

    def test_stopwords_only(self):
        assert term_frequencies("the and of", BM25Tokenizer()) == ([], [])
