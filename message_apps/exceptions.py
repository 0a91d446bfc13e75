class MessageAppsError(Exception):
    """Base class for application errors."""

    message = "Application error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class AuthError(MessageAppsError):
    message = "Authentication failed"


class InvalidCredentials(AuthError):
    # Unknown username and wrong password share one message
    message = "Invalid username or password"


class AuthenticationError(AuthError):
    message = "An error occurred during login"


class InvalidToken(AuthError):
    message = "Invalid or expired token"


class InvalidRefreshToken(AuthError):
    message = "Invalid refresh token"


class RegistrationError(MessageAppsError):
    message = "Registration failed"


class UsernameTaken(RegistrationError):
    message = "Username already exists"


class EmailTaken(RegistrationError):
    message = "Email already exists"


class StoreError(MessageAppsError):
    message = "Storage error"
