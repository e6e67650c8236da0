"""Application errors and their wire codes.

Every error the API can return is an AppError subclass; main.py renders it
into the ApiResponse envelope with ``code``/``message`` and ``http_status``.

    1xxx  identity (register / login / tokens)
    2xxx  input validation
    3xxx  bankrolls
    4xxx  wagers
    9xxx  infrastructure
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str, http_status: int = 500) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: identity ---

class IdentityError(AppError):
    code: int
    message: str
    http_status: int

    def __init__(self) -> None:
        super().__init__(type(self).code, type(self).message, type(self).http_status)


class UsernameExistsError(IdentityError):
    code, message, http_status = 1001, "Username already exists", 409


class EmailExistsError(IdentityError):
    code, message, http_status = 1002, "Email already exists", 409


class InvalidCredentialsError(IdentityError):
    code, message, http_status = 1003, "Invalid username or password", 401


class AccountDisabledError(IdentityError):
    code, message, http_status = 1004, "Account is disabled", 403


class InvalidRefreshTokenError(IdentityError):
    code, message, http_status = 1005, "Refresh token is invalid or expired", 401


# --- 2xxx: validation ---

class ValidationError(AppError):
    """A write was rejected before touching the store.

    ``field`` names the violated constraint so callers can point at the input.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        super().__init__(2001, f"Invalid {field}: {detail}", 422)


# --- 3xxx / 4xxx: not found ---

class NotFoundError(AppError):
    """Entity missing, deleted, or owned by someone else. Never disclosed which."""


class BankrollNotFoundError(NotFoundError):
    def __init__(self, bankroll_id: str) -> None:
        super().__init__(3001, f"Bankroll not found: {bankroll_id}", 404)


class WagerNotFoundError(NotFoundError):
    def __init__(self, wager_id: str) -> None:
        super().__init__(4001, f"Wager not found: {wager_id}", 404)


# --- 9xxx: infrastructure ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class TransactionError(AppError):
    """Store unavailable or transaction aborted. Nothing was committed; safe to retry."""

    retryable = True

    def __init__(self, detail: str = "Transaction aborted") -> None:
        super().__init__(9003, f"Transaction failed, retry: {detail}", 503)
