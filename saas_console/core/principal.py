"""
Who is calling: the resolved role and, for company users, the tenant
"""
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class UserType(str, Enum):
    SUPERADMIN = "superadmin"
    COMPANY = "company"


@dataclass(frozen=True)
class TenantInfo:
    """Company descriptor carried by a company session"""

    id: uuid.UUID
    name: str
    slug: str
    schema_name: str

    @classmethod
    def from_company(cls, company) -> "TenantInfo":
        return cls(
            id=company.id,
            name=company.name,
            slug=company.slug,
            schema_name=company.schema_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "schema_name": self.schema_name,
        }


@dataclass(frozen=True)
class Unauthenticated:
    user_type = None
    tenant = None


@dataclass(frozen=True)
class SuperAdminPrincipal:
    email: str
    account_id: Optional[uuid.UUID] = None
    session_id: Optional[uuid.UUID] = None

    user_type = UserType.SUPERADMIN
    tenant = None


@dataclass(frozen=True)
class CompanyPrincipal:
    email: str
    tenant: TenantInfo
    account_id: Optional[uuid.UUID] = None
    session_id: Optional[uuid.UUID] = None

    user_type = UserType.COMPANY


Principal = Union[Unauthenticated, SuperAdminPrincipal, CompanyPrincipal]
AuthenticatedPrincipal = Union[SuperAdminPrincipal, CompanyPrincipal]
