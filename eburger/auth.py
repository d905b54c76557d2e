import hmac

from eburger.config import get_config
from eburger.logging import get_logger

class OperatorAuthentication:
    """Gates the operator area with the fixed credential pair from AppConfig.

    This is a placeholder login: no hashing, no sessions, no expiry.
    """
    def __init__(self) -> None:
        """Initializes the authentication handler using the singleton AppConfig."""
        self.config = get_config()
        self.logger = get_logger(__name__)

    def check_credentials(self, username: str, password: str) -> bool:
        """Compares the given pair against the configured operator credentials.

        Returns:
            bool: True when both username and password match.
        """
        user_ok = hmac.compare_digest((username or "").encode(), self.config.admin_username.encode())
        pass_ok = hmac.compare_digest((password or "").encode(), self.config.admin_password.encode())
        if user_ok and pass_ok:
            self.logger.info(f"Operator login accepted for: {username}")
            return True
        self.logger.warning(f"Operator login rejected for: {username}")
        return False

def get_operator_auth() -> OperatorAuthentication:
    """Returns a new OperatorAuthentication instance using the latest config."""
    return OperatorAuthentication()
