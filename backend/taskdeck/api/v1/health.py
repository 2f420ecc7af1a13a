from fastapi import APIRouter
from ...db.models import utcnow
from ...schemas.tasks import Health

router = APIRouter()

@router.get("/healthcheck", response_model=Health)
def healthcheck():
    return Health(status="ok", timestamp=utcnow())
