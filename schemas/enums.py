from enum import Enum


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    IN_REVIEW = "in-review"
    COMPLETED = "completed"
    REJECTED = "rejected"


class RiskAssessment(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    # Placeholder for records that have not been scored yet.
    UNKNOWN = "unknown"


class UserRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
