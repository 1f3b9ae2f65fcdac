"""Asset delivery endpoints: upload, publish, token issue and the three download paths."""
from __future__ import annotations

from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Body, Depends, File, Form, Header, HTTPException, UploadFile, status
from fastapi.responses import Response, StreamingResponse

from assetcdn.core.container import ApplicationContainer
from assetcdn.domain.assets import AssetNotFoundError, MissingUploadError, PublishConflictError, UploadTooLargeError
from assetcdn.domain.assets.service import AssetRegistry
from assetcdn.domain.delivery.engine import CacheDecisionEngine, Disposition
from assetcdn.domain.tokens.service import AccessTokenIssuer
from assetcdn.domain.versions.service import VersionStore
from assetcdn.infrastructure.storage import ObjectStore
from assetcdn.interfaces.http.deps import (
    get_asset_registry,
    get_container,
    get_decision_engine,
    get_object_store,
    get_token_issuer,
    get_version_store,
)
from assetcdn.schemas import AssetResponse, ErrorResponse, PublishResponse, TokenRequest, TokenResponse

router = APIRouter()


def _parse_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


async def _respond(disposition: Disposition, object_store: ObjectStore) -> Response:
    if disposition.is_error:
        raise HTTPException(status_code=disposition.status, detail=disposition.detail)
    if not disposition.fetch_body:
        return Response(status_code=disposition.status, headers=disposition.headers)
    stream = await object_store.get(disposition.storage_key)
    return StreamingResponse(stream, status_code=disposition.status, headers=disposition.headers)


@router.post(
    "/upload",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}},
    summary="Upload an asset",
)
async def upload_asset(
    file: Optional[UploadFile] = File(None),
    is_private: Optional[str] = Form(None),
    registry: AssetRegistry = Depends(get_asset_registry),
) -> AssetResponse:
    try:
        asset = await registry.store_upload(file, is_private=_parse_flag(is_private))
    except MissingUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc)) from exc
    return AssetResponse.model_validate(asset)


@router.get(
    "/public/{version_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Download an immutable version",
)
async def download_version(
    version_id: str,
    engine: CacheDecisionEngine = Depends(get_decision_engine),
    object_store: ObjectStore = Depends(get_object_store),
):
    return await _respond(await engine.decide_version(version_id), object_store)


@router.get(
    "/private/{token}",
    responses={403: {"model": ErrorResponse}},
    summary="Download a private asset with an access token",
)
async def download_private(
    token: str,
    engine: CacheDecisionEngine = Depends(get_decision_engine),
    object_store: ObjectStore = Depends(get_object_store),
):
    return await _respond(await engine.decide_private(token), object_store)


@router.get(
    "/{asset_id}/download",
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Download the current bytes of a public asset",
)
async def download_asset(
    asset_id: str,
    if_none_match: Optional[str] = Header(None),
    engine: CacheDecisionEngine = Depends(get_decision_engine),
    object_store: ObjectStore = Depends(get_object_store),
):
    return await _respond(await engine.decide_mutable(asset_id, if_none_match), object_store)


@router.post(
    "/{asset_id}/publish",
    response_model=PublishResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Freeze the current bytes into an immutable version",
)
async def publish_asset(
    asset_id: str,
    versions: VersionStore = Depends(get_version_store),
) -> PublishResponse:
    try:
        result = await versions.publish(asset_id)
    except AssetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found") from exc
    except PublishConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Asset was published concurrently, retry the request",
        ) from exc
    return PublishResponse(
        new_version_id=result.version.id,
        asset=AssetResponse.model_validate(result.asset),
    )


@router.post(
    "/{asset_id}/token",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a short-lived access token",
)
async def issue_token(
    asset_id: str,
    payload: Optional[TokenRequest] = Body(None),
    issuer: AccessTokenIssuer = Depends(get_token_issuer),
    container: ApplicationContainer = Depends(get_container),
) -> TokenResponse:
    token_settings = container.settings.tokens
    ttl_seconds = token_settings.default_ttl_seconds
    if payload is not None and payload.ttl_seconds is not None:
        ttl_seconds = payload.ttl_seconds
    if ttl_seconds > token_settings.max_ttl_seconds:
        raise HTTPException(
            status_code=422,
            detail=f"ttl_seconds must not exceed {token_settings.max_ttl_seconds}",
        )
    issued = await issuer.issue_token(asset_id, timedelta(seconds=ttl_seconds))
    return TokenResponse(token=issued.token, asset_id=issued.asset_id, expires_at=issued.expires_at)
