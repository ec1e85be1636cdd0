"""
Master Catalogue Router

Create and update accept either a JSON body or multipart/form-data. With
multipart, images can be uploaded as files (primary_image, secondary_images)
and nested fields (variants, secondary_image_urls) are sent as JSON strings.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from kore.database import get_db
from kore.errors import ValidationError
from kore.schemas.catalog import CatalogResponse, Gender, Stage
from kore.services.catalog_service import catalog_service
from kore.services.storage_service import storage_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/master-catalog", tags=["master-catalog"])

MAX_SECONDARY_IMAGES = 10


async def _store_upload(upload: UploadFile, base_url: str) -> Dict[str, str]:
    if not storage_service.is_image(upload.filename):
        raise ValidationError(f"File type not supported for {upload.filename}. Upload an image file")
    content = await upload.read()
    key = storage_service.upload_file(content, upload.filename, prefix="catalog")
    return {"url": storage_service.get_file_url(key, base_url), "key": key}


async def read_catalog_payload(
    request: Request,
) -> Tuple[Dict[str, Any], Optional[Dict[str, str]], List[Dict[str, str]]]:
    """
    Read the request body into (fields, primary_upload, secondary_uploads).

    Uploaded files are stored straight away and returned as {url, key}.
    Blank form values are dropped so they count as "not supplied".
    """
    content_type = request.headers.get("content-type", "")
    base_url = str(request.base_url)

    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        fields = {
            key: value for key, value in form.items()
            if not isinstance(value, UploadFile) and value != ""
        }

        primary_upload = None
        primary_files = [f for f in form.getlist("primary_image") if isinstance(f, UploadFile) and f.filename]
        if primary_files:
            primary_upload = await _store_upload(primary_files[0], base_url)

        secondary_files = [f for f in form.getlist("secondary_images") if isinstance(f, UploadFile) and f.filename]
        if len(secondary_files) > MAX_SECONDARY_IMAGES:
            raise ValidationError(f"At most {MAX_SECONDARY_IMAGES} secondary images can be uploaded")
        secondary_uploads = [await _store_upload(f, base_url) for f in secondary_files]
        return fields, primary_upload, secondary_uploads

    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body, None, []


@router.post("", status_code=201)
async def create_master_catalog(request: Request, db: Session = Depends(get_db)):
    """Create a catalogue article with its variants"""
    fields, primary_upload, secondary_uploads = await read_catalog_payload(request)
    doc = catalog_service.create(db, fields, primary_upload, secondary_uploads)
    return {"message": "Master catalog created", "data": CatalogResponse.model_validate(doc)}


@router.get("")
def list_master_catalog(
    q: Optional[str] = Query(None, description="Search article name or sole color"),
    stage: Optional[Stage] = Query(None),
    category_id: Optional[str] = Query(None),
    brand_id: Optional[str] = Query(None),
    manufacturer_company_id: Optional[str] = Query(None),
    gender: Optional[Gender] = Query(None),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    """List live catalogue articles, newest first"""
    result = catalog_service.list(
        db,
        q=q,
        stage=stage.value if stage else None,
        category_id=category_id,
        brand_id=brand_id,
        manufacturer_company_id=manufacturer_company_id,
        gender=gender.value if gender else None,
        page=page,
        limit=limit,
    )
    return {
        "data": [CatalogResponse.model_validate(doc) for doc in result["items"]],
        "meta": {"total": result["total"], "page": result["page"], "limit": result["limit"]},
    }


@router.get("/{catalog_id}")
def get_master_catalog(catalog_id: int, db: Session = Depends(get_db)):
    doc = catalog_service.get_by_id(db, catalog_id)
    return {"data": CatalogResponse.model_validate(doc)}


@router.put("/{catalog_id}")
async def update_master_catalog(catalog_id: int, request: Request, db: Session = Depends(get_db)):
    """Merge an update into an article; see CatalogService.update for the rules"""
    # Look the article up before storing any uploads for it
    catalog_service.get_by_id(db, catalog_id)
    fields, primary_upload, secondary_uploads = await read_catalog_payload(request)
    doc = catalog_service.update(db, catalog_id, fields, primary_upload, secondary_uploads)
    return {"message": "Updated", "data": CatalogResponse.model_validate(doc)}


@router.delete("/{catalog_id}")
def delete_master_catalog(catalog_id: int, db: Session = Depends(get_db)):
    """Soft delete: the record is kept but hidden from reads"""
    catalog_service.soft_delete(db, catalog_id)
    return {"message": "Deleted"}
