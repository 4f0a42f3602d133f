"""Domain protocols (ports).

Infrastructure adapters satisfy these structurally; nothing inherits from
them.
"""

from account_core.domain.protocols.account_store import (
    AccountStore,
    AccountStoreFactory,
)
from account_core.domain.protocols.email_delivery_protocol import (
    EmailDeliveryProtocol,
)
from account_core.domain.protocols.event_bus_protocol import (
    EventBusProtocol,
    EventHandler,
)
from account_core.domain.protocols.logger_protocol import LoggerProtocol
from account_core.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from account_core.domain.protocols.token_repository import TokenRepository
from account_core.domain.protocols.user_capabilities import (
    ClientProjectable,
    Identifiable,
)
from account_core.domain.protocols.user_repository import UserRepository
from account_core.domain.protocols.verification_code_repository import (
    VerificationCodeRepository,
)

__all__ = [
    "AccountStore",
    "AccountStoreFactory",
    "ClientProjectable",
    "EmailDeliveryProtocol",
    "EventBusProtocol",
    "EventHandler",
    "Identifiable",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "TokenRepository",
    "UserRepository",
    "VerificationCodeRepository",
]
