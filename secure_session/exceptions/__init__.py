"""
Exceptions Package
"""
from secure_session.exceptions.custom import (
    SessionException,
    InsecureConfigurationException,
    UseStrictModeDisabledException,
    UseCookiesDisabledException,
    UseOnlyCookiesDisabledException,
    UseTransSidEnabledException,
    SessionStateException,
    SessionConfigurationException,
    InvalidSessionIdException,
)

__all__ = [
    'SessionException',
    'InsecureConfigurationException',
    'UseStrictModeDisabledException',
    'UseCookiesDisabledException',
    'UseOnlyCookiesDisabledException',
    'UseTransSidEnabledException',
    'SessionStateException',
    'SessionConfigurationException',
    'InvalidSessionIdException',
]
