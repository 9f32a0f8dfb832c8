"""Package management endpoints (super-admin)"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from saas_console.core.database import get_db
from saas_console.core.principal import SuperAdminPrincipal
from saas_console.core.security import require_superadmin
from saas_console.models.package import DEFAULT_PACKAGE_OPTIONS, Package, Subscription
from saas_console.schemas.package import (
    PackageCreate,
    PackageUpdate,
    PackageResponse,
    PackageListResponse,
    PackageOptions,
)
from saas_console.utils.date import isoformat_or_none
from saas_console.api.v1.endpoints.helpers import commit_or_conflict

router = APIRouter(prefix="/superadmin/packages", tags=["Packages"])


def _to_package_response(package: Package) -> PackageResponse:
    return PackageResponse(
        id=str(package.id),
        name=package.name,
        duration=package.duration,
        options_json=PackageOptions(**{**DEFAULT_PACKAGE_OPTIONS, **(package.options_json or {})}),
        createdAt=isoformat_or_none(package.created_at),
        updatedAt=isoformat_or_none(package.updated_at),
    )


def _get_package_or_404(db: Session, package_id: UUID) -> Package:
    package = db.query(Package).filter(Package.id == package_id).first()
    if not package:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package not found")
    return package


def _ensure_name_free(db: Session, name: str, exclude_id: UUID = None) -> None:
    query = db.query(Package).filter(Package.name == name)
    if exclude_id is not None:
        query = query.filter(Package.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Package name already exists",
        )


@router.get("", response_model=PackageListResponse)
def list_packages(
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    packages = db.query(Package).order_by(Package.created_at.desc()).all()
    return PackageListResponse(data=[_to_package_response(p) for p in packages])


@router.get("/{package_id}", response_model=PackageResponse)
def get_package(
    package_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    return _to_package_response(_get_package_or_404(db, package_id))


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
def create_package(
    payload: PackageCreate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    _ensure_name_free(db, payload.name)

    package = Package(
        name=payload.name,
        duration=payload.duration,
        options_json=payload.options_json.model_dump(),
    )

    db.add(package)
    commit_or_conflict(db, "Package name already exists")
    db.refresh(package)

    return _to_package_response(package)


@router.put("/{package_id}", response_model=PackageResponse)
def update_package(
    package_id: UUID,
    payload: PackageUpdate,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    package = _get_package_or_404(db, package_id)

    if payload.name is not None and payload.name != package.name:
        _ensure_name_free(db, payload.name, exclude_id=package.id)
        package.name = payload.name
    if payload.duration is not None:
        package.duration = payload.duration
    if payload.options_json is not None:
        package.options_json = payload.options_json.model_dump()

    commit_or_conflict(db, "Package name already exists")
    db.refresh(package)

    return _to_package_response(package)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_package(
    package_id: UUID,
    db: Session = Depends(get_db),
    admin: SuperAdminPrincipal = Depends(require_superadmin),
):
    package = _get_package_or_404(db, package_id)

    in_use = db.query(Subscription).filter(Subscription.package_id == package.id).first()
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Package is used by a subscription",
        )

    db.delete(package)
    db.commit()

    return None
