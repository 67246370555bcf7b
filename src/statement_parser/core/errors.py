"""Error codes and user-friendly messages.

This module defines the error catalog for statement parsing.
Each error has:
- error_code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for statement parsing
ERROR_CATALOG: dict[str, dict] = {
    "PARSE_001": {
        "code": "PARSE_001",
        "message": "No issuer strategy matched the statement text",
        "user_message": "We couldn't recognize this statement format.",
        "suggestion": "Please upload a statement from HDFC, ICICI, SBI Card, Axis Bank or American Express.",
        "retry_allowed": False,
    },
    "PARSE_002": {
        "code": "PARSE_002",
        "message": "PDF extraction failed: corrupted or invalid file",
        "user_message": "This PDF appears to be corrupted or damaged.",
        "suggestion": "Try downloading the statement again from your bank's website.",
        "retry_allowed": True,
    },
    "PARSE_003": {
        "code": "PARSE_003",
        "message": "PDF is password-protected",
        "user_message": "This statement requires a password.",
        "suggestion": "Please provide the PDF password and try again.",
        "retry_allowed": True,
    },
    "PARSE_004": {
        "code": "PARSE_004",
        "message": "Incorrect password provided for encrypted PDF",
        "user_message": "The password you provided is incorrect.",
        "suggestion": "Check your password and try again.",
        "retry_allowed": True,
    },
    "PARSE_006": {
        "code": "PARSE_006",
        "message": "PDF has no pages",
        "user_message": "This PDF doesn't contain any pages.",
        "suggestion": "Please upload the complete statement PDF.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Parsed statement is missing card number, total due or due date",
        "user_message": "The statement data appears to be incomplete.",
        "suggestion": "Please ensure you're uploading a complete credit card statement PDF.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Look up an error definition, falling back to a generic entry.

    Args:
        error_code: Error code from the catalog

    Returns:
        Error definition dict
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def get_user_message(error_code: str) -> str:
    """Get user-friendly message for an error code."""
    return get_error(error_code)["user_message"]


def get_suggestion(error_code: str) -> str:
    """Get actionable suggestion for an error code."""
    return get_error(error_code)["suggestion"]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable.

    Args:
        error_code: Error code from the catalog

    Returns:
        True if the operation can be retried, False otherwise
    """
    return get_error(error_code)["retry_allowed"]
