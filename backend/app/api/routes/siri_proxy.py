"""SIRI Proxy — forwards StopMonitoring requests to the Ministry SIRI API via a static-IP proxy.

Invariants:
    - No bearer auth on this endpoint
    - Unconfigured proxy -> 500 PROXY_NOT_CONFIGURED, whatever the body contains
    - Missing stopCode -> 400
    - Upstream non-2xx -> 502 SIRI_API_ERROR; timeout -> 504 SIRI_TIMEOUT (localized message)
    - Success returns the raw SIRI XML in `data`
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.dependencies import json_body, require_siri_client
from app.config import Settings, get_settings
from app.core.siri_request import build_stop_monitoring_request
from app.infrastructure.siri_client import SiriClient
from app.schemas.siri import SiriProxyRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/siri-proxy", tags=["siri"])

DATA_SOURCE = "Ministry of Transportation SIRI API"


@router.post("")
async def siri_proxy(
    siri: SiriClient = Depends(require_siri_client),
    settings: Settings = Depends(get_settings),
    body: SiriProxyRequest = Depends(json_body(SiriProxyRequest)),
):
    requested_at = datetime.now(timezone.utc)
    xml = build_stop_monitoring_request(
        body.stop_code,
        line_ref=body.line_ref,
        operator_ref=body.operator_ref,
        requestor_ref=settings.siri_requestor_ref,
        now=requested_at,
    )
    siri_xml = await siri.post_xml(xml)
    return {
        "success": True,
        "data": siri_xml,
        "dataFormat": "xml",
        "timestamp": requested_at.isoformat(),
        "proxyUsed": True,
        "dataSource": DATA_SOURCE,
    }
