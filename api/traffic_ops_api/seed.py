"""Seed an admin user and, outside production, a demo delivery service request."""
import os
import sys
from sqlalchemy.orm import Session
from traffic_ops_api.core.config import settings
from traffic_ops_api.core.database import SessionLocal
from traffic_ops_api.core.security import get_password_hash
from traffic_ops_api.models import TmUser, DeliveryServiceRequest

DEFAULT_ADMIN_PASSWORD = "twelve12"


def is_production_env() -> bool:
    return settings.is_production


def get_seed_admin_password() -> str | None:
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if password:
        password = password.strip()

    if is_production_env():
        if password == DEFAULT_ADMIN_PASSWORD:
            print("FATAL: SEED_ADMIN_PASSWORD cannot be the default in production.", file=sys.stderr)
            sys.exit(1)
        return password or None

    return password or DEFAULT_ADMIN_PASSWORD


def seed_admin(db: Session) -> TmUser:
    admin = db.query(TmUser).filter(TmUser.username == "admin").first()
    if admin:
        print("✓ Admin user already exists")
        return admin

    password = get_seed_admin_password()
    if password is None:
        print("FATAL: SEED_ADMIN_PASSWORD is required to create the admin user in production.", file=sys.stderr)
        sys.exit(1)
    admin = TmUser(
        username="admin",
        full_name="Admin User",
        email="admin@example.com",
        local_passwd=get_password_hash(password),
    )
    db.add(admin)
    db.flush()
    print("✓ Created admin user (admin)")
    return admin


def seed_demo_request(db: Session, author: TmUser) -> None:
    if db.query(DeliveryServiceRequest).count():
        return
    db.add(DeliveryServiceRequest(
        author_id=author.id,
        change_type="create",
        status="draft",
        deliveryservice={"xmlId": "demo-ds", "displayName": "Demo Delivery Service", "active": False},
    ))
    print("✓ Created demo delivery service request (demo-ds)")


def seed_database():
    """Seed essential data."""
    db = SessionLocal()
    try:
        print("Starting database seeding...")
        admin = seed_admin(db)
        if not is_production_env():
            seed_demo_request(db, admin)
        db.commit()
        print("Seeding complete.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
