"""
Danish address autocomplete (dataforsyningen / DAWA) and CVR company lookup.

Both upstream APIs are public and need no keys. Responses are cached in
Redis when it is available.
"""

import logging
import os
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..cache import address_cache, cvr_cache
from ..config import (
    ADDRESS_API_BASE_URL,
    ADDRESS_CACHE_SECONDS,
    CVR_API_BASE_URL,
    CVR_CACHE_SECONDS,
    CVR_USER_AGENT,
)
from ..rate_limiter import create_rate_limiter
from ..shared.address import parse_address

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lookups", tags=["Lookups"])

rate_limit_address = create_rate_limiter(
    limit=int(os.getenv("ADDRESS_AUTOCOMPLETE_RPM", "120")),
    window_seconds=60,
    key_prefix="address_autocomplete",
)
rate_limit_cvr = create_rate_limiter(
    limit=int(os.getenv("CVR_LOOKUP_RPM", "20")),
    window_seconds=60,
    key_prefix="cvr_lookup",
)

MAX_SUGGESTIONS = 8
HTTP_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


class AddressSuggestionsResponse(BaseModel):
    suggestions: list[str]


class ParsedAddress(BaseModel):
    street: str
    zipcode: str
    city: str
    text: Optional[str] = None


class CompanyInfo(BaseModel):
    cvr: str
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    startdate: Optional[str] = None
    employees: Optional[str] = None
    industry_description: Optional[str] = None


def suggestion_text(item: dict) -> Optional[str]:
    return item.get("tekst") or item.get("forslagstekst") or item.get("adressebetegnelse")


def reverse_fields(item: dict) -> dict:
    """Street, zip and city from either reverse geocoding payload shape"""
    access = item.get("adgangsadresse") or {}
    road = (
        item.get("vejnavn")
        or (item.get("vejstykke") or {}).get("navn")
        or (access.get("vejstykke") or {}).get("navn")
        or ""
    )
    house_number = item.get("husnr") or access.get("husnr") or ""
    zipcode = item.get("postnr") or (item.get("postnummer") or {}).get("nr") or access.get("postnr") or ""
    city = (
        item.get("postnrnavn")
        or (item.get("postnummer") or {}).get("navn")
        or access.get("postnummernavn")
        or ""
    )
    return {
        "street": " ".join(p for p in (road, house_number) if p).strip(),
        "zipcode": str(zipcode),
        "city": city,
    }


@router.get("/address/autocomplete", response_model=AddressSuggestionsResponse)
async def address_autocomplete(
    q: str = Query("", description="At least 3 characters"),
    _: None = Depends(rate_limit_address),
):
    q = (q or "").strip()
    if len(q) < 3:
        return AddressSuggestionsResponse(suggestions=[])

    cache_key = f"auto:{q.lower()}"
    cached = address_cache.get(cache_key)
    if cached is not None:
        return AddressSuggestionsResponse(suggestions=cached)

    params = {"q": q, "type": "adresse", "fuzzy": "true", "per_side": str(MAX_SUGGESTIONS)}
    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            resp = await client.get(f"{ADDRESS_API_BASE_URL}/autocomplete", params=params)
    except httpx.HTTPError as e:
        logger.warning(f"⚠️ Address autocomplete request failed: {e}")
        raise HTTPException(status_code=502, detail="Address lookup service temporarily unavailable") from e

    if resp.status_code >= 400:
        logger.warning(f"Address API error {resp.status_code}: {resp.text[:200]}")
        raise HTTPException(status_code=502, detail="Address lookup service temporarily unavailable")

    data = resp.json()
    items = data if isinstance(data, list) else []
    suggestions = [text for text in (suggestion_text(i) for i in items) if text][:MAX_SUGGESTIONS]

    address_cache.set(cache_key, suggestions, ttl=ADDRESS_CACHE_SECONDS)
    return AddressSuggestionsResponse(suggestions=suggestions)


@router.get("/address/parse", response_model=ParsedAddress)
async def address_parse(text: str = Query(...)):
    """Split "<street>, <zip> <city>" into parts"""
    parsed = parse_address(text)
    if not parsed:
        raise HTTPException(status_code=400, detail="Address must look like '<street>, <zip> <city>'")
    return ParsedAddress(**parsed, text=text.strip())


@router.get("/address/reverse", response_model=ParsedAddress)
async def address_reverse(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    _: None = Depends(rate_limit_address),
):
    """Nearest address to a coordinate, trying addresses before access addresses"""
    params = {"x": str(lng), "y": str(lat), "struktur": "mini"}
    endpoints = ("adresser/reverse", "adgangsadresser/reverse")
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
        for endpoint in endpoints:
            try:
                resp = await client.get(f"{ADDRESS_API_BASE_URL}/{endpoint}", params=params)
            except httpx.HTTPError as e:
                logger.warning(f"⚠️ Reverse lookup via {endpoint} failed: {e}")
                continue
            if resp.status_code >= 400:
                continue
            data = resp.json()
            item = data[0] if isinstance(data, list) and data else data
            if not isinstance(item, dict):
                continue
            fields = reverse_fields(item)
            if fields["street"] and fields["zipcode"] and fields["city"]:
                return ParsedAddress(
                    **fields, text=f"{fields['street']}, {fields['zipcode']} {fields['city']}"
                )

    raise HTTPException(status_code=404, detail="No address found for that position")


@router.get("/cvr/{cvr}", response_model=CompanyInfo)
async def cvr_lookup(cvr: str, _: None = Depends(rate_limit_cvr)):
    """Company details from the Danish CVR register"""
    cvr = cvr.strip()
    if len(cvr) != 8 or not cvr.isdigit():
        raise HTTPException(status_code=400, detail="CVR number must be 8 digits")

    cached = cvr_cache.get(cvr)
    if cached is not None:
        return CompanyInfo(**cached)

    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            resp = await client.get(
                CVR_API_BASE_URL,
                params={"vat": cvr, "country": "dk"},
                headers={"User-Agent": CVR_USER_AGENT},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ CVR lookup failed for {cvr}: {e}")
        raise HTTPException(status_code=502, detail="Could not verify CVR number") from e

    if resp.status_code >= 400:
        logger.warning(f"CVR API error {resp.status_code} for {cvr}")
        raise HTTPException(status_code=502, detail="Could not verify CVR number")

    data = resp.json()
    if data.get("error"):
        raise HTTPException(status_code=404, detail="CVR number not found")

    info = CompanyInfo(
        cvr=str(data.get("vat") or cvr),
        name=data.get("name"),
        address=data.get("address"),
        city=data.get("city"),
        zipcode=str(data["zipcode"]) if data.get("zipcode") else None,
        phone=str(data["phone"]) if data.get("phone") else None,
        email=data.get("email"),
        startdate=data.get("startdate"),
        employees=str(data["employees"]) if data.get("employees") else None,
        industry_description=data.get("industrydesc"),
    )
    cvr_cache.set(cvr, info.model_dump(), ttl=CVR_CACHE_SECONDS)
    return info
