"""XRPC Fallback - any /xrpc/<nsid> not served above answers 501 MethodNotImplemented."""

from fastapi import APIRouter

from anchor_pds.core.errors import MethodNotImplementedError

router = APIRouter(prefix="/xrpc", tags=["xrpc"])


@router.api_route("/{nsid}", methods=["GET", "POST"], include_in_schema=False)
async def method_not_implemented(nsid: str):
    raise MethodNotImplementedError(nsid)
