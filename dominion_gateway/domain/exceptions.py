"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidMonthKeyError(DomainException):
    """Month key is not in YYYY-MM form"""

    pass


class NonAmortizingPaymentError(DomainException):
    """Monthly payment never pays the balance down"""

    def __init__(self, balance, monthly_payment, annual_rate_percent):
        self.balance = balance
        self.monthly_payment = monthly_payment
        self.annual_rate_percent = annual_rate_percent
        super().__init__(
            f"Payment of {monthly_payment} does not amortize a balance of {balance} "
            f"at {annual_rate_percent}% annual interest"
        )


class InsightServiceError(DomainException):
    """External insight service failed; callers fall back to the local summary"""

    reason = "error"


class InsightNotConfiguredError(InsightServiceError):
    """No API key configured for the insight service"""

    reason = "not_configured"


class InsightAuthorizationError(InsightServiceError):
    """Insight service rejected our credentials"""

    reason = "authorization"


class InsightRateLimitError(InsightServiceError):
    """Insight service is rate limiting us"""

    reason = "rate_limited"


class InsightUnavailableError(InsightServiceError):
    """Insight service timed out or is down"""

    reason = "unavailable"


class InsightResponseError(InsightServiceError):
    """Insight service reply could not be parsed"""

    reason = "malformed_response"
