from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    TECHNICAL_ADMIN = "technical_admin"
    MANAGER_OWNER = "manager_owner"
    TECHNICIAN = "technician"


class CompanyPlan(str, Enum):
    PYME = "pyme"
    PROFESSIONAL = "professional"


class AssetType(str, Enum):
    PHYSICAL = "physical"
    APPLICATION = "application"


class ApplicationType(str, Enum):
    SAAS = "saas"
    CUSTOM_DEVELOPMENT = "custom_development"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"
    DEPRECATED = "deprecated"
    DISPOSED = "disposed"


class ContractStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING_RENEWAL = "pending_renewal"
    CANCELLED = "cancelled"


class ContractDisplayStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    PENDING_RENEWAL = "pending_renewal"
    CANCELLED = "cancelled"


class MaintenanceType(str, Enum):
    PREVENTIVE = "preventive"
    CORRECTIVE = "corrective"
    EMERGENCY = "emergency"
    UPGRADE = "upgrade"


class MaintenanceStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenancePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ExpiryUrgency(str, Enum):
    EXPIRED = "expired"
    CRITICAL = "critical"
    UPCOMING = "upcoming"


class InfrastructureService(str, Enum):
    DOMAIN = "domain"
    SSL = "ssl"
    HOSTING = "hosting"
    SERVER = "server"


class ActivityAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    ACCESSED = "accessed"
    EXITED = "exited"
