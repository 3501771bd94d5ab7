# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: physician CRUD and the specialty list."""
from fastapi import APIRouter, Depends, HTTPException, Path, Response

from databank.core.dependencies import get_physician_service
from databank.core.exceptions import ConflictError, NotFoundError
from databank.schemas import (
    MISSING_RECORD_MESSAGE, OUT_OF_DATE_MESSAGE,
    PhysicianCreate, PhysicianList, PhysicianOut, PhysicianUpdate, SpecialtyList,
)
from databank.services.physician_service import PhysicianService

router = APIRouter(prefix="/api/v1", tags=["Physicians"])


@router.post("/physicians", status_code=201, response_model=PhysicianOut)
def create_physician(body: PhysicianCreate,
                     service: PhysicianService = Depends(get_physician_service)):
    try:
        created = service.create_physician(**body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return PhysicianOut(**created.model_dump())


@router.get("/physicians", response_model=PhysicianList)
def list_physicians(service: PhysicianService = Depends(get_physician_service)):
    physicians = service.list_physicians()
    return PhysicianList(
        total=len(physicians),
        physicians=[PhysicianOut(**p.model_dump()) for p in physicians],
    )


@router.get("/physicians/{physician_id}", response_model=PhysicianOut)
def get_physician(physician_id: int = Path(..., ge=1),
                  service: PhysicianService = Depends(get_physician_service)):
    physician = service.get_physician(physician_id)
    if physician is None:
        raise HTTPException(status_code=404, detail=MISSING_RECORD_MESSAGE)
    return PhysicianOut(**physician.model_dump())


@router.put("/physicians/{physician_id}", response_model=PhysicianOut)
def update_physician(body: PhysicianUpdate,
                     physician_id: int = Path(..., ge=1),
                     service: PhysicianService = Depends(get_physician_service)):
    try:
        updated = service.update_physician(physician_id, **body.model_dump())
    except NotFoundError:
        raise HTTPException(status_code=404, detail=MISSING_RECORD_MESSAGE)
    except ConflictError:
        raise HTTPException(status_code=409, detail=OUT_OF_DATE_MESSAGE)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return PhysicianOut(**updated.model_dump())


@router.delete("/physicians/{physician_id}", status_code=204)
def delete_physician(physician_id: int = Path(..., ge=1),
                     service: PhysicianService = Depends(get_physician_service)):
    service.delete_physician(physician_id)
    return Response(status_code=204)


@router.get("/specialties", response_model=SpecialtyList, tags=["Specialties"])
def list_specialties(service: PhysicianService = Depends(get_physician_service)):
    specialties = service.list_specialties()
    return SpecialtyList(total=len(specialties), specialties=specialties)
