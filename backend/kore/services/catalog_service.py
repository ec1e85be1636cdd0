"""
Master Catalogue Service - create, search, update and soft-delete articles.

Variants are stored in entry order and are only ever replaced as a whole.
Secondary images on the other hand accumulate across updates unless the
caller asks for them to be replaced.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.orm import Session

from kore.config import settings
from kore.errors import NotFoundError, ValidationError, validation_message
from kore.models.master_catalog import MasterCatalog, CatalogVariant
from kore.schemas.catalog import CatalogCreate, CatalogUpdate, Stage, VariantIn
from kore.utils.payload import like_pattern, parse_bool, parse_maybe_json, size_map_to_pairs

logger = logging.getLogger(__name__)

PRIMARY_IMAGE_REQUIRED = "primaryImage is required (upload file or send primaryImageUrl)"

# Columns that may be explicitly cleared by an update
NULLABLE_FIELDS = {"sole_color", "expected_available_date"}


def build_images_payload(
    fields: Dict[str, Any],
    primary_upload: Optional[Dict[str, str]] = None,
    secondary_uploads: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """
    Normalise uploaded files and direct URLs into {url, key?} image refs.

    The primary image comes from the upload if there is one, otherwise from
    primary_image_url. Secondary images are the uploads followed by any
    secondary_image_urls (a list or a JSON encoded list).
    """
    primary_image = None
    if primary_upload:
        primary_image = dict(primary_upload)
    elif fields.get("primary_image_url"):
        primary_image = {"url": fields["primary_image_url"]}

    secondary_images = [dict(upload) for upload in (secondary_uploads or [])]
    urls = parse_maybe_json(fields.get("secondary_image_urls"), [])
    if isinstance(urls, list):
        secondary_images.extend({"url": str(url)} for url in urls if url)

    return {"primary_image": primary_image, "secondary_images": secondary_images}


def _validate(schema, data: Dict[str, Any]):
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(validation_message(e.errors()))


def _build_variants(variants: List[VariantIn]) -> List[CatalogVariant]:
    return [
        CatalogVariant(
            position=position,
            item_name=variant.item_name,
            sku=variant.sku,
            cost_price=variant.cost_price,
            size_qty=size_map_to_pairs(variant.size_qty),
            selling_price=variant.selling_price,
            mrp=variant.mrp,
        )
        for position, variant in enumerate(variants)
    ]


class CatalogService:
    """Persistence and query logic for master catalogue articles"""

    def create(
        self,
        db: Session,
        fields: Dict[str, Any],
        primary_upload: Optional[Dict[str, str]] = None,
        secondary_uploads: Optional[List[Dict[str, str]]] = None,
    ) -> MasterCatalog:
        """
        Create an article with its variants.

        Args:
            db: Database session
            fields: Raw request fields (JSON body or multipart form values)
            primary_upload: Stored primary image {url, key}, if a file was uploaded
            secondary_uploads: Stored secondary images, in upload order

        Raises:
            ValidationError: missing primary image, bad field values, or a
                WISHLIST article without an expected availability date
        """
        images = build_images_payload(fields, primary_upload, secondary_uploads)
        if not images["primary_image"] or not images["primary_image"].get("url"):
            raise ValidationError(PRIMARY_IMAGE_REQUIRED)

        data = dict(fields)
        variants = parse_maybe_json(fields.get("variants"), [])
        data["variants"] = variants if isinstance(variants, list) else []
        payload = _validate(CatalogCreate, data)

        doc = MasterCatalog(
            article_name=payload.article_name,
            sole_color=payload.sole_color,
            gender=payload.gender.value,
            category_id=payload.category_id,
            brand_id=payload.brand_id,
            manufacturer_company_id=payload.manufacturer_company_id,
            unit_id=payload.unit_id,
            stage=payload.stage.value,
            expected_available_date=payload.expected_available_date,
            primary_image_url=images["primary_image"]["url"],
            primary_image_key=images["primary_image"].get("key"),
            secondary_images=images["secondary_images"],
            is_deleted=False,
        )
        doc.variants = _build_variants(payload.variants)

        db.add(doc)
        db.commit()
        db.refresh(doc)

        logger.info(f"Created master catalog {doc.id} ({doc.article_name}) with {len(doc.variants)} variants")
        return doc

    def list(
        self,
        db: Session,
        q: Optional[str] = None,
        stage: Optional[str] = None,
        category_id: Optional[str] = None,
        brand_id: Optional[str] = None,
        manufacturer_company_id: Optional[str] = None,
        gender: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Filtered, paginated listing of live articles, newest first"""
        limit = limit or settings.catalog_default_page_size
        query = db.query(MasterCatalog).filter(MasterCatalog.is_deleted.is_(False))

        if stage:
            query = query.filter(MasterCatalog.stage == stage)
        if category_id:
            query = query.filter(MasterCatalog.category_id == category_id)
        if brand_id:
            query = query.filter(MasterCatalog.brand_id == brand_id)
        if manufacturer_company_id:
            query = query.filter(MasterCatalog.manufacturer_company_id == manufacturer_company_id)
        if gender:
            query = query.filter(MasterCatalog.gender == gender)
        if q:
            pattern = like_pattern(q)
            query = query.filter(or_(
                MasterCatalog.article_name.ilike(pattern, escape="\\"),
                MasterCatalog.sole_color.ilike(pattern, escape="\\"),
            ))

        total = query.count()
        items = (
            query.order_by(MasterCatalog.created_at.desc(), MasterCatalog.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {"items": items, "total": total, "page": page, "limit": limit}

    def get_by_id(self, db: Session, catalog_id: int) -> MasterCatalog:
        doc = db.query(MasterCatalog).filter(
            MasterCatalog.id == catalog_id,
            MasterCatalog.is_deleted.is_(False)
        ).first()
        if not doc:
            raise NotFoundError("Not found")
        return doc

    def update(
        self,
        db: Session,
        catalog_id: int,
        fields: Dict[str, Any],
        primary_upload: Optional[Dict[str, str]] = None,
        secondary_uploads: Optional[List[Dict[str, str]]] = None,
    ) -> MasterCatalog:
        """
        Merge an update into an existing article.

        Only scalar fields present in the payload are written. A new primary
        image replaces the old one. Secondary images are appended unless
        replace_secondary is set. Variants are replaced wholesale when a list
        is supplied and left untouched otherwise.
        """
        doc = self.get_by_id(db, catalog_id)

        data = {k: v for k, v in fields.items() if k in CatalogUpdate.model_fields and k != "variants"}
        variants = parse_maybe_json(fields.get("variants"), None)
        if isinstance(variants, list):
            data["variants"] = variants
        payload = _validate(CatalogUpdate, data)

        for key in payload.model_fields_set - {"variants"}:
            value = getattr(payload, key)
            if value is None and key not in NULLABLE_FIELDS:
                continue
            if hasattr(value, "value"):
                value = value.value
            setattr(doc, key, value)

        if doc.stage == Stage.WISHLIST.value and not doc.expected_available_date:
            db.rollback()
            raise ValidationError("expected_available_date is required when stage is WISHLIST")

        images = build_images_payload(fields, primary_upload, secondary_uploads)
        secondary = [] if parse_bool(fields.get("replace_secondary")) else list(doc.secondary_images or [])
        secondary.extend(images["secondary_images"])
        doc.secondary_images = secondary
        if images["primary_image"] and images["primary_image"].get("url"):
            doc.primary_image_url = images["primary_image"]["url"]
            doc.primary_image_key = images["primary_image"].get("key")

        if payload.variants is not None:
            doc.variants = _build_variants(payload.variants)

        db.commit()
        db.refresh(doc)

        logger.info(f"Updated master catalog {doc.id}")
        return doc

    def soft_delete(self, db: Session, catalog_id: int) -> bool:
        doc = self.get_by_id(db, catalog_id)
        doc.is_deleted = True
        db.commit()
        logger.info(f"Soft-deleted master catalog {catalog_id}")
        return True


catalog_service = CatalogService()
