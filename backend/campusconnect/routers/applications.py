from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from campusconnect.database import get_db
from campusconnect.dependencies import get_current_profile
from campusconnect.models.profile import Profile
from campusconnect.routers.jobs import _application_to_response
from campusconnect.schemas.application import ApplicationResponse, ApplicationStatusUpdate
from campusconnect.services import application_service
from campusconnect.services.errors import ServiceError

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("/mine", response_model=list[ApplicationResponse])
async def list_my_applications(profile: Profile = Depends(get_current_profile), db: Session = Depends(get_db)):
    applications = application_service.list_applicant_applications(db, profile)
    return [_application_to_response(a) for a in applications]


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def review_application(
    application_id: str,
    req: ApplicationStatusUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Session = Depends(get_db),
):
    try:
        application = application_service.review_application(db, application_id, profile, req.status)
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
    return _application_to_response(application)
