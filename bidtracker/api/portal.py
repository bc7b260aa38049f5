"""Client portal: bids awaiting the client's go/no-go and decision capture."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.models import Client
from bidtracker.schemas import (
    DecisionRequest,
    DecisionResponse,
    PortalBid,
    PortalClient,
    PortalResponse,
)
from bidtracker.services.decision_service import decision_service
from bidtracker.services.exceptions import (
    BidNotFound,
    InvalidDecision,
    StaleDecision,
    TokenInvalid,
)

from .deps import Principal, get_current_principal

logger = logging.getLogger(__name__)

# Link-based access: the token in the URL identifies the client
token_router = APIRouter()

# Login-based access: the client is an authenticated principal
client_router = APIRouter()


async def _portal_data(db: AsyncSession, client: Client) -> PortalResponse:
    bids = await decision_service.list_client_bids(db, client)
    return PortalResponse(
        client=PortalClient.model_validate(client),
        bids=[PortalBid.model_validate(b) for b in bids],
    )


async def _decide(db: AsyncSession, client: Client, payload: DecisionRequest) -> DecisionResponse:
    try:
        bid = await decision_service.record_decision(db, client, payload.bid_id, payload.decision)
    except InvalidDecision as e:
        raise HTTPException(status_code=422, detail=str(e))
    except BidNotFound:
        raise HTTPException(status_code=404, detail="Bid not found")
    except StaleDecision:
        raise HTTPException(status_code=409, detail="This bid has already been decided")
    return DecisionResponse.from_bid(bid)


async def client_from_token(token: str, db: AsyncSession = Depends(get_db)) -> Client:
    try:
        return await decision_service.client_by_token(db, token)
    except TokenInvalid:
        logger.info("Portal access with an invalid token")
        raise HTTPException(status_code=404, detail="Invalid access")


async def client_from_principal(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db),
) -> Client:
    try:
        return await decision_service.client_by_principal(db, principal.user_id)
    except TokenInvalid:
        raise HTTPException(status_code=403, detail="No client is linked to this account")


@token_router.get("/{token}", response_model=PortalResponse)
async def get_portal_by_token(
    client: Client = Depends(client_from_token),
    db: AsyncSession = Depends(get_db),
):
    """Portal page reached from the e-mail link."""
    return await _portal_data(db, client)


@token_router.post("/{token}/decisions", response_model=DecisionResponse)
async def decide_by_token(
    payload: DecisionRequest,
    client: Client = Depends(client_from_token),
    db: AsyncSession = Depends(get_db),
):
    """Record Participate/Discard through the e-mail link."""
    return await _decide(db, client, payload)


@client_router.get("/bids", response_model=PortalResponse)
async def get_portal_for_user(
    client: Client = Depends(client_from_principal),
    db: AsyncSession = Depends(get_db),
):
    """Portal page of the logged-in client."""
    return await _portal_data(db, client)


@client_router.post("/decisions", response_model=DecisionResponse)
async def decide_as_user(
    payload: DecisionRequest,
    client: Client = Depends(client_from_principal),
    db: AsyncSession = Depends(get_db),
):
    """Record Participate/Discard as the logged-in client."""
    return await _decide(db, client, payload)
