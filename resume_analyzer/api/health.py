from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

BANNER = "AI Resume Analyzer Backend Running 🚀"


@router.get("/", response_class=PlainTextResponse, summary="Service banner")
async def home():
    return BANNER


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy"}
