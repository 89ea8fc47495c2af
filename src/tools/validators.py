"""Input validators for security and data integrity."""

import re
from typing import Tuple

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1 bytes
MAX_IDENTIFIER_LENGTH = 63


class SQLValidator:
    """Read-only guard for statements sent through postgres_query."""

    # Allowed SQL statement types
    ALLOWED_STATEMENTS = {'SELECT', 'WITH'}  # WITH for CTEs

    # Keywords that modify data, schema, privileges or server state
    DANGEROUS_KEYWORDS = {
        'DROP', 'DELETE', 'TRUNCATE', 'ALTER', 'CREATE',
        'INSERT', 'UPDATE', 'GRANT', 'REVOKE', 'MERGE',
        'COPY', 'VACUUM', 'REINDEX', 'CLUSTER', 'CALL'
    }

    @classmethod
    def validate_query(cls, query: str) -> Tuple[bool, str]:
        """
        Validate that a SQL statement is read-only.

        Args:
            query: SQL statement to validate

        Returns:
            Tuple of (is_valid, error_message)
            - is_valid: True if the statement passes all checks
            - error_message: Empty string if valid, error description if invalid
        """
        if not query or not query.strip():
            return False, "Empty query"

        query_stripped = query.strip()
        query_upper = query_stripped.upper()

        first_keyword = query_upper.split()[0]
        if first_keyword not in cls.ALLOWED_STATEMENTS:
            allowed = ', '.join(sorted(cls.ALLOWED_STATEMENTS))
            return False, f"Only {allowed} statements are allowed in read-only mode"

        # Whole words only, so "created_at" or "updated_by" columns pass
        for keyword in sorted(cls.DANGEROUS_KEYWORDS):
            if re.search(rf'\b{keyword}\b', query_upper):
                return False, f"Keyword '{keyword}' not allowed in read-only mode"

        # Allow a trailing semicolon but not a second statement
        if ';' in query_stripped.rstrip(';'):
            return False, "Multiple statements not allowed"

        if '--' in query_stripped or '/*' in query_stripped:
            return False, "SQL comments not allowed in read-only mode"

        return True, ""

    @staticmethod
    def validate_length(query: str, max_length: int) -> Tuple[bool, str]:
        """Reject statements longer than max_length characters."""
        if len(query) > max_length:
            return False, f"Query too long (max {max_length} characters)"
        return True, ""


class InputValidator:
    """General input validation utilities."""

    @staticmethod
    def validate_identifier(name: str, kind: str = "Identifier") -> Tuple[bool, str]:
        """
        Validate a table or schema name before it is quoted into SQL.

        Args:
            name: Identifier to validate
            kind: Label used in the error message (e.g. "Table name")

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name or not name.strip():
            return False, f"{kind} cannot be empty"

        if len(name) > MAX_IDENTIFIER_LENGTH:
            return False, f"{kind} too long (max {MAX_IDENTIFIER_LENGTH} characters)"

        if '\x00' in name:
            return False, f"{kind} contains a NUL character"

        return True, ""
