"""
APIRouter for the composite channel search.

Endpoint:
- POST /search  {keyWord, inviteLink} -> {channelInfo, matches, analysis}
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.api.dependencies import get_search_service
from src.api.schemas import SearchRequest
from src.errors import ChannelError

logger = logging.getLogger(__name__)

api = APIRouter()


@api.post("/search", tags=["Search"])
async def search_channel(payload: SearchRequest, service=Depends(get_search_service)):
    try:
        return await service.search(payload.keyWord, payload.inviteLink)
    except ChannelError as e:
        logger.info("Channel lookup failed for %s: %s", payload.inviteLink, e.details or e)
        return JSONResponse(status_code=e.status_code, content={"error": str(e), "details": e.details or str(e)})
    except Exception as e:
        logger.error("Search failed for %s: %s", payload.inviteLink, e, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Something went wrong", "details": str(e)})
