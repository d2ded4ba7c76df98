"""Repository XRPC Methods - record creation and lookup by AT URI.

Invariants:
    - createRecord authenticates BEFORE looking at the body's contents
    - Only app.dropanchor.checkin records are accepted
    - uri is always create_at_uri(caller DID, collection, rkey); the caller can
      never write into another DID's repository
    - getRecord is public (no authentication)
    - getRecord answers 404 RecordNotFound for any URI with no stored record,
      malformed ones included; only a missing uri is a 400
"""

import logging

from fastapi import APIRouter, Depends, Query

from anchor_pds.api.deps import get_checkin_repository, get_current_identity
from anchor_pds.core.domain_types import CHECKIN_COLLECTION
from anchor_pds.core.errors import (
    ErrorContext, InvalidRequestError, RecordNotFoundError,
)
from anchor_pds.core.feed import checkin_view
from anchor_pds.core.record_identity import (
    create_at_uri, generate_cid, generate_rkey, parse_at_uri,
)
from anchor_pds.core.repository_protocols import CheckinRepository, Identity
from anchor_pds.core.validate_checkin import validate_checkin_record
from anchor_pds.schemas.records import CreateRecordRequest, CreateRecordResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/xrpc", tags=["repo"])


@router.post(
    "/com.atproto.repo.createRecord", response_model=CreateRecordResponse,
)
async def create_record(
    body: CreateRecordRequest,
    identity: Identity = Depends(get_current_identity),
    repo: CheckinRepository = Depends(get_checkin_repository),
):
    """Validate and store one check-in in the caller's repository."""
    context = ErrorContext(did=identity.did, collection=body.collection)
    if body.collection != CHECKIN_COLLECTION:
        raise InvalidRequestError(
            f"Only {CHECKIN_COLLECTION} records are supported", context,
        )
    record = validate_checkin_record(body.record)

    rkey = body.rkey or generate_rkey()
    uri = create_at_uri(identity.did, CHECKIN_COLLECTION, rkey)
    cid = generate_cid()
    await repo.create(rkey, identity.did, record, uri, cid)
    return CreateRecordResponse(uri=uri, cid=cid)


@router.get("/com.atproto.sync.getRecord")
async def get_record(
    uri: str | None = Query(None),
    repo: CheckinRepository = Depends(get_checkin_repository),
):
    """Fetch one check-in by AT URI."""
    if not uri:
        raise InvalidRequestError("uri parameter required")
    # a URI that cannot name a record is simply not found
    stored = await repo.get_by_uri(uri) if parse_at_uri(uri) else None
    if stored is None:
        raise RecordNotFoundError(uri)
    view = checkin_view(stored)
    del view["author"]
    return view
