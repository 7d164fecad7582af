"""
Demo Data Seeder — Users, product catalogue and mock identity-source records.
Idempotent: rows that already exist (by natural key) are left untouched.
"""
import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from idv.models.product import Product
from idv.models.source_record import SourceRecord
from idv.models.user import User
from idv.utils.hashing import hash_password

logger = logging.getLogger(__name__)

DEMO_USERS = [
    # username, email, password, full name, role
    ("admin", "admin@ekwantu.com", "Admin@123", "System Administrator", "Admin"),
    ("agent", "agent@ekwantu.com", "Agent@123", "Insurance Agent", "Agent"),
    ("viewer", "viewer@ekwantu.com", "Viewer@123", "Report Viewer", "Viewer"),
]

DEMO_PRODUCTS = [
    # code, name, category, description, premium (ZMW)
    ("LIFE001", "Pru Flexi Farewell Plan", "Life Insurance", "Affordable funeral cover for you and your family", "325.00"),
    ("LIFE002", "Pru Term Life Assurance", "Life Insurance", "Pure life protection for a specified term", "850.00"),
    ("LIFE003", "Pru Whole Life Plan", "Life Insurance", "Lifetime protection with cash value accumulation", "1750.00"),
    ("LIFE004", "Pru Family Protection Plan", "Life Insurance", "Comprehensive cover for entire family", "1150.00"),
    ("LIFE005", "Pru Endowment Policy", "Life Insurance", "Savings plus life protection with maturity benefit", "1450.00"),
    ("SAV001", "Smart Saver Plan", "Savings & Investment", "Grow your wealth while enjoying life protection", "2625.00"),
    ("SAV002", "Smart Child Plan", "Savings & Investment", "Secure your child's education and future", "1600.00"),
    ("SAV003", "Pru Education Endowment", "Savings & Investment", "Education savings with guaranteed payouts", "2150.00"),
    ("SAV004", "Pru Investment Plus", "Savings & Investment", "Market-linked investment with life cover", "5250.00"),
    ("SAV005", "Pru Retirement Builder", "Savings & Investment", "Long-term retirement savings plan", "4200.00"),
    ("HEALTH001", "PruCare24 Telemedicine", "Health & Protection", "Round-the-clock doctor consultations", "200.00"),
    ("HEALTH002", "Medical Insurance - Bronze", "Health & Protection", "Essential outpatient and inpatient cover", "475.00"),
    ("HEALTH003", "Medical Insurance - Silver", "Health & Protection", "Extended hospital and specialist cover", "925.00"),
    ("HEALTH004", "Medical Insurance - Gold", "Health & Protection", "Comprehensive cover including dental and optical", "2000.00"),
    ("HEALTH005", "Medical Insurance - Platinum", "Health & Protection", "Premium cover with regional treatment", "4000.00"),
]

DEMO_SOURCE_RECORDS = [
    # id type, id number, name, dob, gender, mobile, province, district, postal code, source
    ("NationalID", "19850615/10/1", "John Mwanza", (1985, 6, 15), "Male", "+260977123456", "Lusaka", "Lusaka", "10101", "INRIS"),
    ("NationalID", "19750418/08/1", "Peter Phiri", (1975, 4, 18), "Male", "+260955654321", "Eastern", "Chipata", "30100", "ZRA"),
    ("NationalID", "19910725/07/1", "David Mulenga", (1991, 7, 25), "Male", "+260966234567", "Northern", "Kasama", "31100", "MNO_AIRTEL"),
    ("NationalID", "19930612/05/1", "Grace Tembo", (1993, 6, 12), "Female", "+260977567890", "Lusaka", "Chongwe", "10102", "BANK_ZANACO"),
    ("NationalID", "19900822/10/7", "Mary Phiri", (1990, 8, 22), "Female", "+260966987654", "Copperbelt", "Ndola", "20001", "ZRA"),
    ("NationalID", "19820304/11/1", "Chanda Mwale", (1982, 3, 4), "Male", "+260965112233", "Central", "Kabwe", "80101", "MNO_MTN"),
    ("NationalID", "19790917/09/1", "Bwalya Zulu", (1979, 9, 17), "Female", "+260955223344", "Luapula", "Mansa", "71101", "MNO_ZAMTEL"),
    ("NationalID", "19880130/04/1", "Mwila Banda", (1988, 1, 30), "Male", "+260977334455", "Southern", "Choma", "60200", "BANK_FNB"),
    ("NationalID", "19950711/06/1", "Natasha Sakala", (1995, 7, 11), "Female", "+260966445566", "Copperbelt", "Kitwe", "20200", "BANK_STANCHART"),
    ("NationalID", "19700521/03/1", "Joseph Lungu", (1970, 5, 21), "Male", "+260955556677", "Western", "Mongu", "90100", "GOVT_PAYROLL"),
    ("NationalID", "19680809/02/1", "Ruth Mumba", (1968, 8, 9), "Female", "+260977667788", "Muchinga", "Chinsali", "55101", "NAPSA"),
    ("Passport", "ZN1234567", "James Banda", (1988, 3, 15), "Male", "+260977345678", "Lusaka", "Lusaka", "10101", "PASSPORT_OFFICE"),
    ("Passport", "ZN9876543", "Jennifer Mulenga", (1992, 11, 8), "Female", "+260955876543", "Western", "Mongu", "90100", "PASSPORT_OFFICE"),
    ("DriversLicense", "ZM123456", "Michael Tembo", (1985, 7, 20), "Male", "+260966234789", "Copperbelt", "Kitwe", "20200", "RTSA"),
    ("DriversLicense", "ZM987654", "Susan Kabwe", (1990, 12, 5), "Female", "+260977654321", "Southern", "Livingstone", "60100", "RTSA"),
]


def seed_users(db: Session) -> int:
    existing = {u for (u,) in db.query(User.username).all()}
    added = 0
    for username, email, password, full_name, role in DEMO_USERS:
        if username in existing:
            continue
        db.add(User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
            role=role,
            is_active=True,
        ))
        added += 1
    return added


def seed_products(db: Session) -> int:
    existing = {c for (c,) in db.query(Product.product_code).all()}
    added = 0
    for code, name, category, description, premium in DEMO_PRODUCTS:
        if code in existing:
            continue
        db.add(Product(
            product_code=code,
            product_name=name,
            category=category,
            description=description,
            premium_amount=Decimal(premium),
            currency="ZMW",
            is_active=True,
        ))
        added += 1
    return added


def seed_source_records(db: Session) -> int:
    existing = {n for (n,) in db.query(SourceRecord.id_number).all()}
    added = 0
    for id_type, id_number, name, dob, gender, mobile, province, district, postal, source in DEMO_SOURCE_RECORDS:
        if id_number in existing:
            continue
        db.add(SourceRecord(
            id_type=id_type,
            id_number=id_number,
            full_name=name,
            date_of_birth=datetime(*dob),
            gender=gender,
            mobile_number=mobile,
            province=province,
            district=district,
            postal_code=postal,
            source=source,
            is_verified=True,
        ))
        added += 1
    return added


def seed_database(db: Session) -> dict:
    """Insert any missing demo rows and commit once."""
    counts = {
        "users": seed_users(db),
        "products": seed_products(db),
        "source_records": seed_source_records(db),
    }
    db.commit()
    logger.info("Seeded demo data: %s", counts)
    return counts
