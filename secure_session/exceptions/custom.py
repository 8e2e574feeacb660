"""
Custom Exception Classes
Session-layer exceptions with stable error codes
"""
from typing import Optional


class SessionException(Exception):
    """Base exception for all session exceptions"""
    code = "session_error"
    message = "A session error occurred"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        super().__init__(self.message)


class InsecureConfigurationException(SessionException):
    """
    Insecure session configuration

    Raised when opening a session while a required security posture flag
    is violated and insecure settings are not suppressed. Each violated
    flag has its own subclass; ``flag`` names the offending setting.

    Example:
        raise UseStrictModeDisabledException()
    """
    code = "insecure_configuration"
    message = "Insecure session configuration"
    flag = None


class UseStrictModeDisabledException(InsecureConfigurationException):
    """Strict session id validation is disabled"""
    code = "use_strict_mode_disabled"
    flag = "use_strict_mode"
    message = (
        "Strict session id validation is disabled. "
        "Set session.USE_STRICT_MODE = True to reject uninitialized session ids."
    )


class UseCookiesDisabledException(InsecureConfigurationException):
    """Cookie-based session transport is disabled"""
    code = "use_cookies_disabled"
    flag = "use_cookies"
    message = (
        "Cookie-based session transport is disabled. "
        "Set session.USE_COOKIES = True."
    )


class UseOnlyCookiesDisabledException(InsecureConfigurationException):
    """Session ids may be accepted from sources other than cookies"""
    code = "use_only_cookies_disabled"
    flag = "use_only_cookies"
    message = (
        "Session ids may be accepted from outside cookies. "
        "Set session.USE_ONLY_COOKIES = True."
    )


class UseTransSidEnabledException(InsecureConfigurationException):
    """Session ids may be propagated through URL rewriting"""
    code = "use_trans_sid_enabled"
    flag = "use_trans_sid"
    message = (
        "Transparent session id propagation (URL rewriting) is enabled. "
        "Set session.USE_TRANS_SID = False."
    )


class SessionStateException(SessionException):
    """
    Session handler used in the wrong state

    Example:
        raise SessionStateException("Session is not open")
    """
    code = "invalid_session_state"
    message = "Session handler is in the wrong state for this operation"


class SessionConfigurationException(SessionException):
    """
    Missing or invalid session configuration

    Example:
        raise SessionConfigurationException("Unknown session driver: mongo")
    """
    code = "session_configuration"
    message = "Invalid session configuration"


class InvalidSessionIdException(SessionException):
    """
    Session id contains characters a store cannot persist safely

    Example:
        raise InvalidSessionIdException("Invalid session id: '../etc'")
    """
    code = "invalid_session_id"
    message = "Invalid session id"
