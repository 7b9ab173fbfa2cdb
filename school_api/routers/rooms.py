"""Room endpoints."""
from typing import Annotated, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.deps import get_current_user, require_admin
from ..schemas.class_schemas import ClassRoom
from ..schemas.pagination import PaginatedResponse
from ..schemas.room_schemas import Room, RoomAvailabilityQuery, RoomCreate, RoomQuery, RoomUpdate
from ..services.room_service import RoomService

router = APIRouter(prefix="/api/v1/rooms", tags=["Rooms"], dependencies=[Depends(get_current_user)])


@router.post("/", response_model=Room, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_room(dto: RoomCreate, db: AsyncSession = Depends(get_db)):
    return await RoomService(db).create(dto)


@router.get("/", response_model=PaginatedResponse[Room])
async def get_rooms(query: Annotated[RoomQuery, Query()], db: AsyncSession = Depends(get_db)):
    return await RoomService(db).get_rooms(query)


@router.get("/{room_id}", response_model=Room)
async def get_room(room_id: UUID, db: AsyncSession = Depends(get_db)):
    return await RoomService(db).get_one_or_throw(id=room_id)


@router.get("/{room_id}/schedule", response_model=List[ClassRoom])
async def get_room_schedule(room_id: UUID, db: AsyncSession = Depends(get_db)):
    return await RoomService(db).get_schedule(room_id)


@router.get("/{room_id}/availability")
async def check_room_availability(
    room_id: UUID,
    query: Annotated[RoomAvailabilityQuery, Query()],
    db: AsyncSession = Depends(get_db)
):
    """Whether the room is free on a weekday between two times"""
    available = await RoomService(db).is_room_available(
        room_id, query.day_of_week, query.start_time, query.end_time, query.exclude_class_id
    )
    return {"room_id": str(room_id), "available": available}


@router.patch("/{room_id}", response_model=Room, dependencies=[Depends(require_admin)])
async def update_room(room_id: UUID, dto: RoomUpdate, db: AsyncSession = Depends(get_db)):
    return await RoomService(db).update(room_id, dto)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_room(room_id: UUID, db: AsyncSession = Depends(get_db)):
    await RoomService(db).delete(room_id)
