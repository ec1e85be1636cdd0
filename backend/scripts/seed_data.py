"""
Seed script to generate a superadmin, vendors, catalogue articles, purchase
orders and opening stock for demo purposes.

The superadmin is only ever created here; the API refuses to create one.
Credentials come from SEED_SUPERADMIN_EMAIL / SEED_SUPERADMIN_PASSWORD.
"""
import sys
import os
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / '.env')

from sqlalchemy.orm import Session
from kore.database import SessionLocal, engine, Base
from kore.models.user import User
from kore.models.vendor import Vendor
from kore.models.master_catalog import MasterCatalog
from kore.schemas.po import POCreate
from kore.services.catalog_service import catalog_service
from kore.services.order_service import order_service
from kore.services.purchase_order_service import purchase_order_service
from kore.services.security import get_password_hash
from faker import Faker
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

fake = Faker('en_IN')

GENDERS = ('MEN', 'WOMEN', 'KIDS', 'UNISEX')
COLORS = ('Black', 'Brown', 'Tan', 'White', 'Navy', 'Grey')
SIZE_RUNS = {
    'MEN': ['6', '7', '8', '9', '10'],
    'WOMEN': ['4', '5', '6', '7', '8'],
    'KIDS': ['10C', '11C', '12C', '13C', '1'],
    'UNISEX': ['5', '6', '7', '8', '9'],
}


def create_superadmin(db: Session) -> User:
    email = os.getenv('SEED_SUPERADMIN_EMAIL', 'superadmin@kore.local').strip().lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.info(f"Superadmin {email} already exists")
        return existing

    user = User(
        name='Super Admin',
        email=email,
        hashed_password=get_password_hash(os.getenv('SEED_SUPERADMIN_PASSWORD', 'changeme123')),
        role='superadmin',
    )
    db.add(user)
    db.commit()
    logger.info(f"Created superadmin {email}")
    return user


def create_distributors(db: Session, count: int = 3) -> list[User]:
    distributors = []
    for _ in range(count):
        user = User(
            name=fake.name(),
            email=fake.unique.email(),
            hashed_password=get_password_hash('distributor123'),
            role='distributor',
            company_name=f"{fake.last_name()} Footwear",
            location=fake.city(),
        )
        db.add(user)
        distributors.append(user)
    db.commit()
    return distributors


def create_vendors(db: Session, count: int = 5) -> list[Vendor]:
    """Create synthetic vendors"""
    vendors = []
    for _ in range(count):
        company = fake.company()
        vendor = Vendor(
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            company_name=company,
            display_name=company,
            email=fake.company_email(),
            mobile=fake.msisdn()[:10],
            currency='INR',
            payment_terms=fake.random_element(elements=('Net 15', 'Net 30', 'Due on Receipt')),
            billing_address={'city': fake.city(), 'state': fake.state(), 'pin_code': fake.postcode(), 'country': 'India'},
            contact_persons=[],
            bank_details=[],
        )
        db.add(vendor)
        vendors.append(vendor)
    db.commit()
    return vendors


def create_articles(db: Session, count: int = 10) -> list[MasterCatalog]:
    """Create catalogue articles with two or three colour variants each"""
    articles = []
    for _ in range(count):
        gender = fake.random_element(elements=GENDERS)
        name = f"{fake.word().title()} {fake.random_element(elements=('Runner', 'Loafer', 'Sandal', 'Boot', 'Slide'))}"
        sizes = SIZE_RUNS[gender]
        variants = []
        for color in fake.random_elements(elements=COLORS, length=fake.random_int(min=2, max=3), unique=True):
            cost = fake.random_int(min=250, max=1200)
            variants.append({
                'item_name': f"{name.replace(' ', '')}-{color}-{sizes[0]}-{sizes[-1]}",
                'cost_price': cost,
                'size_qty': {size: fake.random_int(min=1, max=8) for size in sizes},
                'selling_price': round(cost * 1.4),
                'mrp': round(cost * 2),
            })

        stage = fake.random_element(elements=('AVAILABLE', 'AVAILABLE', 'WISHLIST'))
        fields = {
            'article_name': name,
            'sole_color': fake.random_element(elements=COLORS),
            'gender': gender,
            'category_id': fake.random_element(elements=('casual', 'formal', 'sports')),
            'brand_id': fake.random_element(elements=('kore', 'stride', 'urbanfoot')),
            'manufacturer_company_id': fake.random_element(elements=('agra-works', 'kanpur-leather')),
            'unit_id': 'pair',
            'stage': stage,
            'primary_image_url': f"https://picsum.photos/seed/{fake.uuid4()}/600/600",
            'variants': variants,
        }
        if stage == 'WISHLIST':
            fields['expected_available_date'] = fake.date_between(start_date='+15d', end_date='+120d').isoformat()
        articles.append(catalog_service.create(db, fields))
    return articles


def create_purchase_orders(db: Session, vendors: list[Vendor], articles: list[MasterCatalog], count: int = 6):
    """Create purchase orders from catalogue variants; numbers and totals are computed by the service"""
    for _ in range(count):
        vendor = fake.random_element(elements=vendors)
        items = []
        for article in fake.random_elements(elements=articles, length=fake.random_int(min=1, max=3), unique=True):
            variant = article.variants[0]
            items.append({
                'article_id': article.id,
                'variant_id': variant.id,
                'item_name': variant.item_name,
                'image_url': article.primary_image_url,
                'sku': variant.sku,
                'item_tax_code': '6403',
                'quantity': fake.random_int(min=12, max=120),
                'tax_rate': fake.random_element(elements=(5, 12, 18)),
                'tax_type': fake.random_element(elements=('GST', 'IGST')),
                'base_price': float(variant.cost_price),
            })
        purchase_order_service.create(db, POCreate(
            vendor_id=vendor.id,
            discount_percent=fake.random_element(elements=(0, 0, 5, 10)),
            items=items,
        ))


def create_stock(db: Session, articles: list[MasterCatalog]):
    for article in articles:
        if article.stage != 'AVAILABLE':
            continue
        for variant in article.variants:
            order_service.add_inventory(db, variant.id, fake.random_int(min=5, max=40))


def main():
    """Main seed function"""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        logger.info("Seeding users...")
        create_superadmin(db)
        distributors = create_distributors(db)
        logger.info(f"Created {len(distributors)} distributors")

        logger.info("Seeding vendors...")
        vendors = create_vendors(db)
        logger.info(f"Created {len(vendors)} vendors")

        logger.info("Seeding master catalogue...")
        articles = create_articles(db)
        logger.info(f"Created {len(articles)} articles")

        logger.info("Seeding purchase orders...")
        create_purchase_orders(db, vendors, articles)

        logger.info("Seeding opening stock...")
        create_stock(db, articles)

        logger.info("Seed data created successfully!")
    except Exception as e:
        logger.error(f"Error seeding data: {e}", exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
