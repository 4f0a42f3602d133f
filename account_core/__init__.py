"""Account lifecycle core: signup, verification, password recovery,
email change and bearer-token authentication.

Usage:
    from account_core.core.container import get_account_service
"""

__version__ = "0.1.0"
