from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import OrganizationOut, OrganizationDonation, OperationResult
from ..auth import get_current_user
from ..services import volunteer_service

router = APIRouter(tags=["organization"])


@router.get("/", response_model=OrganizationOut)
def get_organization(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """The organization that receives unrestricted donations"""
    return volunteer_service.get_or_create_organization(db)

@router.post("/donate", response_model=OperationResult)
def donate_to_organization(
    donation: OrganizationDonation,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return volunteer_service.donate_to_org(
        db, donation.organization_id, donation.amount, user_id=current_user.id
    )
