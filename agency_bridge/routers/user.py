from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from agency_bridge.dependencies import get_authentication_service
from agency_bridge.schemas.authentication import AuthenticationOut
from agency_bridge.services.authentication import AuthenticationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/aerwebservice/user", tags=["user"])

ERROR_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Error - Web Services</title>
    <style>
        body { background-color: #f8f9fa; font-family: Arial, sans-serif; display: flex;
               height: 100vh; justify-content: center; align-items: center; margin: 0; }
        .error-container { background: #fff; padding: 30px 40px; border-radius: 12px;
                           box-shadow: 0 4px 10px rgba(0,0,0,0.15); text-align: center; }
        .error-title { font-size: 22px; font-weight: bold; color: #dc3545; margin-bottom: 10px; }
        .error-message { font-size: 16px; color: #333; }
    </style>
</head>
<body>
    <div class="error-container">
        <div class="error-title">&#9888; Error in Web Services</div>
        <div class="error-message">Please try again later or contact support.</div>
    </div>
</body>
</html>
"""


@router.get("/authenticate")
def authenticate(
    jwt: str = Query(""),
    lang: str | None = Query(None),
    trip_type: str | None = Query(None, alias="type"),
    service: AuthenticationService = Depends(get_authentication_service),
) -> Response:
    # Generic error page; details stay in the logs.
    logger.info("Authentication request lang=%s type=%s", lang, trip_type)
    outcome = service.authenticate(jwt, lang, trip_type)
    if not outcome.success or not outcome.redirect_url:
        logger.warning("Authentication failed: %s", outcome.message)
        return HTMLResponse(ERROR_HTML, status_code=status.HTTP_400_BAD_REQUEST)

    logger.info("Authentication successful agent=%s %s", outcome.agent_first_name, outcome.agent_last_name)
    return RedirectResponse(outcome.redirect_url, status_code=status.HTTP_302_FOUND)


@router.get("/authenticatetest", response_model=AuthenticationOut)
def authenticate_test(
    jwt: str = Query(""),
    lang: str | None = Query(None),
    trip_type: str | None = Query(None, alias="type"),
    service: AuthenticationService = Depends(get_authentication_service),
) -> Response:
    """Same flow as ``/authenticate`` but returns the outcome as JSON instead of redirecting."""
    outcome = service.authenticate(jwt, lang, trip_type)
    body = AuthenticationOut.model_validate(outcome).model_dump()
    if not outcome.success:
        logger.warning("Authentication failed: %s", outcome.message)
        return JSONResponse(body, status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(body, status_code=status.HTTP_200_OK)
