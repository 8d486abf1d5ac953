from fastapi import APIRouter

from ....models import HealthResponse, SupportedFormats
from ....services.engine import engine_manager
from ....services.extraction_service import SUPPORTED_MEDIA_TYPES

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", service="batch-ocr", engine_state=engine_manager.state.value)


@router.get("/supported-formats", response_model=SupportedFormats)
def supported_formats():
    return SupportedFormats(media_types=sorted(SUPPORTED_MEDIA_TYPES))
