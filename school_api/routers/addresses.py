"""Address endpoints."""
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.address_schemas import Address, AddressAssociate, AddressCreate, AddressUpdate, OwnedAddress
from ..services.address_service import AddressService

router = APIRouter(prefix="/api/v1/addresses", tags=["Addresses"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Address, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_address(dto: AddressCreate, db: AsyncSession = Depends(get_db)):
    return await AddressService(db).create(dto)


@router.get("/{address_id}", response_model=Address)
async def get_address(address_id: UUID, db: AsyncSession = Depends(get_db)):
    return await AddressService(db).get_one_or_throw(id=address_id)


@router.patch("/{address_id}", response_model=Address, dependencies=[Depends(require_admin)])
async def update_address(address_id: UUID, dto: AddressUpdate, db: AsyncSession = Depends(get_db)):
    return await AddressService(db).update(address_id, dto)


@router.post("/{address_id}/associate", response_model=OwnedAddress, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def associate_address(address_id: UUID, dto: AddressAssociate, db: AsyncSession = Depends(get_db)):
    """Attach the address to one student, parent or teacher"""
    service = AddressService(db)
    link = await service.associate(address_id, dto)
    await db.refresh(link, ["address"])
    return link


@router.delete("/{address_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_address(address_id: UUID, db: AsyncSession = Depends(get_db)):
    await AddressService(db).delete(address_id)
