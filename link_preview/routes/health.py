from fastapi import APIRouter

from link_preview.version import resolve_package_version

router = APIRouter()


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "name": "link-preview",
        "version": resolve_package_version(),
    }
