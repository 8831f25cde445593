"""
Input validation for the query tool boundary.
"""

from .exceptions import ValidationError


class InputValidator:
    """
    Validates user queries before classification.

    Empty queries are allowed (they classify as unknown); only malformed
    or oversized input is rejected.
    """

    MAX_QUERY_LENGTH = 500

    @staticmethod
    def validate_query(query) -> str:
        """
        Validate a user query.

        :param query: User's query
        :return: The query with surrounding whitespace removed
        :raises ValidationError: If query is not a string, too long, or contains NUL bytes
        """
        if not isinstance(query, str):
            raise ValidationError("Query must be a string")

        if len(query) > InputValidator.MAX_QUERY_LENGTH:
            raise ValidationError(
                f"Query exceeds maximum length of {InputValidator.MAX_QUERY_LENGTH} characters"
            )

        if "\x00" in query:
            raise ValidationError("Query contains invalid characters")

        return query.strip()
