"""
Unit tests for BM25 tokenizer with Snowball stemming.
"""

import pytest

from sparse_bm25.exceptions import ConfigError
from sparse_bm25.stemmer import get_stemmer, stem
from sparse_bm25.tokenizer import ENGLISH_STOPWORDS, BM25Tokenizer, get_stopwords


class TestTokenizer:
    """Test tokenization pipeline with default options"""

    def test_basic_tokenization(self):
        """Test stopword removal and Snowball stemming on a full sentence"""
        tokens = BM25Tokenizer().tokenize("The quick brown fox jumps over the lazy dog")
        # "the" and "over" are stopwords, "jumps" → "jump", "lazy" → "lazi"
        assert tokens == ["quick", "brown", "fox", "jump", "lazi", "dog"]

    def test_duplicates_and_order_preserved(self):
        """Test that repeated tokens are kept in source order"""
        tokens = BM25Tokenizer().tokenize("dog fox dog")
        assert tokens == ["dog", "fox", "dog"]

    def test_lowercase_conversion(self):
        """Test that all tokens are lowercased"""
        tokens = BM25Tokenizer(stem=False).tokenize("PostgreSQL Cloud SQL")
        assert tokens == ["postgresql", "cloud", "sql"]

    def test_punctuation_removal(self):
        """Test that punctuation never reaches the output by default"""
        tokens = BM25Tokenizer().tokenize("fox, dog! brown?")
        assert tokens == ["fox", "dog", "brown"]

    def test_punctuation_kept_when_disabled(self):
        """Test punctuation runs become tokens when removal is disabled"""
        tokens = BM25Tokenizer(remove_punctuation=False).tokenize("fox, dog!")
        assert tokens == ["fox", ",", "dog", "!"]

    def test_stopwords_kept_when_disabled(self):
        """Test that stopword removal can be turned off"""
        tokens = BM25Tokenizer(remove_stopwords=False, stem=False).tokenize("which fox is brown")
        assert tokens == ["which", "fox", "is", "brown"]

    def test_stopwords_removed_case_insensitively(self):
        """Test that capitalized stopwords are removed without lowercasing"""
        tokens = BM25Tokenizer(lower_case=False, stem=False).tokenize("The Fox")
        assert tokens == ["Fox"]

    def test_only_stopwords(self):
        """Test that a stopword-only text produces no tokens"""
        assert BM25Tokenizer().tokenize("the is and of which") == []

    def test_empty_string(self):
        """Test empty and whitespace strings return empty list"""
        tokenizer = BM25Tokenizer()
        assert tokenizer.tokenize("") == []
        assert tokenizer.tokenize("   ") == []
        assert tokenizer.tokenize("\n\t") == []

    def test_unicode_words(self):
        """Test that non-ASCII letters stay inside words"""
        tokens = BM25Tokenizer(stem=False).tokenize("Café naïve")
        assert tokens == ["café", "naïve"]

    def test_stem_requires_lower_case(self):
        """Test stemming without lowercase is rejected"""
        with pytest.raises(ConfigError):
            BM25Tokenizer(lower_case=False, stem=True)

    def test_options_exposed(self):
        """Test that options are readable for parameter export"""
        tokenizer = BM25Tokenizer(remove_stopwords=False, language="english")
        assert tokenizer.lower_case is True
        assert tokenizer.remove_punctuation is True
        assert tokenizer.remove_stopwords is False
        assert tokenizer.stem is True
        assert tokenizer.language == "english"


class TestLanguages:
    """Test language-dependent stemmers and stopwords"""

    def test_english_stopwords_inline(self):
        assert get_stopwords("english") is ENGLISH_STOPWORDS
        assert "which" in ENGLISH_STOPWORDS

    def test_unknown_stemmer_language_falls_back(self):
        """Test that unsupported languages stem as English"""
        assert get_stemmer("klingon") is get_stemmer("english")
        tokens = BM25Tokenizer(language="klingon", remove_stopwords=False).tokenize("jumps")
        assert tokens == ["jump"]

    def test_stem_helper(self):
        assert stem("jumps") == "jump"
        assert stem("lazy") == "lazi"
