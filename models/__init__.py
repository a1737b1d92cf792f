from models.application import ApplicationDocument, CreditApplication
from models.user import CustomerProfile, User

__all__ = [
    "ApplicationDocument",
    "CreditApplication",
    "CustomerProfile",
    "User",
]
