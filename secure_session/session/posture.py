"""
Security Posture
Transport and validation settings of the calling environment
"""
from dataclasses import dataclass
from typing import List, Type

from secure_session.exceptions import (
    InsecureConfigurationException,
    UseStrictModeDisabledException,
    UseCookiesDisabledException,
    UseOnlyCookiesDisabledException,
    UseTransSidEnabledException,
)


@dataclass(frozen=True)
class SecurityPosture:
    """
    Four flags describing how session ids reach the application

    Read once per session open and never persisted. The defaults are the
    secure values.
    """
    use_strict_mode: bool = True
    use_cookies: bool = True
    use_only_cookies: bool = True
    use_trans_sid: bool = False

    @classmethod
    def from_config(cls) -> 'SecurityPosture':
        """
        Build the posture from session.USE_* settings

        Example:
            Config.set('session.USE_TRANS_SID', True)
            SecurityPosture.from_config().validate()  # raises UseTransSidEnabledException
        """
        from secure_session.defaults import (
            DEFAULT_USE_STRICT_MODE,
            DEFAULT_USE_COOKIES,
            DEFAULT_USE_ONLY_COOKIES,
            DEFAULT_USE_TRANS_SID,
        )
        from secure_session.support import Config

        return cls(
            use_strict_mode=bool(Config.get('session.USE_STRICT_MODE', DEFAULT_USE_STRICT_MODE)),
            use_cookies=bool(Config.get('session.USE_COOKIES', DEFAULT_USE_COOKIES)),
            use_only_cookies=bool(Config.get('session.USE_ONLY_COOKIES', DEFAULT_USE_ONLY_COOKIES)),
            use_trans_sid=bool(Config.get('session.USE_TRANS_SID', DEFAULT_USE_TRANS_SID)),
        )

    def violations(self) -> List[Type[InsecureConfigurationException]]:
        """Exception classes for every violated flag, in check order"""
        violated = []
        if not self.use_strict_mode:
            violated.append(UseStrictModeDisabledException)
        if not self.use_cookies:
            violated.append(UseCookiesDisabledException)
        if not self.use_only_cookies:
            violated.append(UseOnlyCookiesDisabledException)
        if self.use_trans_sid:
            violated.append(UseTransSidEnabledException)
        return violated

    @property
    def is_secure(self) -> bool:
        return not self.violations()

    def validate(self) -> None:
        """
        Raise for the first violated flag

        Raises:
            InsecureConfigurationException: One subclass per flag
        """
        violated = self.violations()
        if violated:
            raise violated[0]()
