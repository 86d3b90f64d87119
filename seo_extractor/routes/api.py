from fastapi import APIRouter

from seo_extractor import SERVICE_NAME, __version__
from seo_extractor.routes.health import get_git_sha
from seo_extractor.schemas.common import VersionResponse

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
async def get_version():
    """Return API version + git sha"""
    return {
        "name": SERVICE_NAME,
        "version": __version__,
        "git_sha": get_git_sha(),
    }
