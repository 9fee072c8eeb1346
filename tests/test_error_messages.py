"""
Tests for word store error message enhancement
"""

from utils.error_messages import enhance_error_message, get_constraint_attribute


class TestEnhanceErrorMessage:
    """Test error message enhancement for various store failures."""

    def test_missing_hash_function(self):
        error = Exception("function fnv64(text) does not exist")
        result = enhance_error_message(error)

        assert "fnv64" in result
        assert "sampling" in result
        assert "WORDS_HASH_FUNCTION" in result

    def test_missing_words_table(self):
        error = Exception('relation "words" does not exist')
        result = enhance_error_message(error)

        assert "init_db.py init" in result

    def test_missing_schema_qualified_table(self):
        error = Exception('relation "public.words" does not exist')
        assert "init_db.py init" in enhance_error_message(error)

    def test_other_missing_relation_returns_original(self):
        error = Exception('relation "wordsmith" does not exist')
        assert enhance_error_message(error) == 'relation "wordsmith" does not exist'

    def test_connection_refused(self):
        error = ConnectionRefusedError("[Errno 111] Connect call failed ('127.0.0.1', 5432)")
        result = enhance_error_message(error)

        assert "DB_HOST" in result
        assert "5432" in result

    def test_auth_failure(self):
        error = Exception('password authentication failed for user "postgres"')
        assert "DB_PASSWORD" in enhance_error_message(error)

    def test_check_constraint(self):
        error = Exception('new row for relation "words" violates check constraint "words_sentiment_range"')
        result = enhance_error_message(error)

        assert "words_sentiment_range" in result
        assert "'sentiment'" in result

    def test_unknown_check_constraint(self):
        error = Exception('violates check constraint "some_unknown_constraint"')
        result = enhance_error_message(error)

        assert "Constraint violation" in result
        assert "some_unknown_constraint" in result

    def test_duplicate_word(self):
        error = Exception('duplicate key value violates unique constraint "words_pkey"')
        result = enhance_error_message(error)

        assert "Duplicate entry" in result
        assert "words_pkey" in result

    def test_generic_error_unchanged(self):
        error = Exception("Something went wrong")
        assert enhance_error_message(error) == "Something went wrong"


class TestGetConstraintAttribute:

    def test_range_constraint(self):
        assert get_constraint_attribute("words_culturalsensitivity_range") == "culturalsensitivity"

    def test_other_constraint(self):
        assert get_constraint_attribute("words_text_check") is None
