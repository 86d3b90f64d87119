from fastapi import APIRouter
import subprocess

from seo_extractor import SERVICE_NAME, __version__
from seo_extractor.schemas.common import HealthResponse

router = APIRouter()


def get_git_sha() -> str:
    """Get git SHA, fallback to 'unknown' if not in git repo."""
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL
            )
            .decode()
            .strip()[:7]
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return {
        "status": "ok",
        "name": SERVICE_NAME,
        "version": __version__,
        "git_sha": get_git_sha(),
    }
