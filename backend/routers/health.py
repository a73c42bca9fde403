from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


# required by Grafana datasources
@router.get("/", response_class=PlainTextResponse)
def health_check():
    return "OK"
