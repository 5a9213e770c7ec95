from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.colony import Colony, ColonyCreate, ColonyUpdate
from app.services import colony as colony_service

router = APIRouter(prefix="/colonies", tags=["colonies"])


@router.post("", response_model=Colony, status_code=status.HTTP_201_CREATED)
def create_new_colony(
    colony_data: ColonyCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    colony = colony_service.create_colony(
        db, user_id=user_id, name=colony_data.name, address=colony_data.address
    )
    return Colony.model_validate(colony)


@router.get("", response_model=list[Colony])
def get_my_colonies(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get the colonies owned by the current user, newest first.
    """
    colonies = colony_service.list_colonies(db, user_id)
    return [Colony.model_validate(colony) for colony in colonies]


@router.get("/{colony_id}", response_model=Colony)
def get_colony_by_id(
    colony_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    colony = colony_service.get_colony(db, colony_id, user_id)
    return Colony.model_validate(colony)


@router.put("/{colony_id}", response_model=Colony)
def update_colony_by_id(
    colony_id: str,
    colony_data: ColonyUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Update a colony. Only fields present in the body are changed.
    """
    colony = colony_service.update_colony(
        db, colony_id, user_id, **colony_data.model_dump(exclude_unset=True)
    )
    return Colony.model_validate(colony)


@router.delete("/{colony_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_colony_by_id(
    colony_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Delete a colony with all its rooms, rentals and rental history.
    """
    colony_service.delete_colony(db, colony_id, user_id)
