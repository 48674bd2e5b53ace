#!/usr/bin/env python3
"""
Database seeder script to create the default roles, their permissions and
development users.

This script creates:
- The 'Admin' role with every non-root permission
- The 'Basic' role with the basic (catalog browsing) permissions
- An admin user with the 'Admin' role and a basic user with the 'Basic' role
- A few sample brands

It prints a development access token for each user, signed with the
configured JWT secret.

Usage:
    python scripts/seed_db.py
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from webapi.core.authorization import ADMIN_ROLE, BASIC_ROLE, CLAIM_PERMISSION, Permissions
from webapi.core.database import SessionLocal, init_db
from webapi.core.token import TokenManager
from webapi.models.brand import Brand
from webapi.models.role import Role, normalize_role_name
from webapi.models.role_claim import RoleClaim
from webapi.models.user import User
from webapi.models.user_role import UserRole


def create_roles(db: Session):
    """Create the default roles and grant their permissions."""
    roles_data = [
        {"name": ADMIN_ROLE, "description": "Administrator role with full access", "permissions": Permissions.admin()},
        {"name": BASIC_ROLE, "description": "Basic role with catalog access", "permissions": Permissions.basic()},
    ]

    created_roles = []
    for role_data in roles_data:
        role = db.query(Role).filter(Role.normalized_name == normalize_role_name(role_data["name"])).first()
        if role:
            print(f"⚠️  Role '{role_data['name']}' already exists, syncing permissions")
        else:
            role = Role(name=role_data["name"], description=role_data["description"])
            db.add(role)
            db.flush()
            print(f"✅ Created role '{role.name}'")

        existing = {
            claim.claim_value
            for claim in db.query(RoleClaim).filter(
                RoleClaim.role_id == role.id, RoleClaim.claim_type == CLAIM_PERMISSION
            )
        }
        for permission in role_data["permissions"]:
            if permission.name not in existing:
                db.add(RoleClaim(role_id=role.id, claim_type=CLAIM_PERMISSION, claim_value=permission.name))
                print(f"   + {permission.name}")

        created_roles.append(role)

    db.commit()
    return created_roles


def create_users(db: Session):
    """Create initial users with their roles."""
    users_data = [
        {"username": "admin", "email": "admin@example.com", "role_names": [ADMIN_ROLE]},
        {"username": "basic", "email": "basic@example.com", "role_names": [BASIC_ROLE]},
    ]

    created_users = []
    for user_data in users_data:
        existing_user = db.query(User).filter(
            (User.username == user_data["username"]) | (User.email == user_data["email"])
        ).first()

        if existing_user:
            print(f"⚠️  User '{user_data['username']}' already exists, skipping")
            created_users.append(existing_user)
            continue

        user = User(username=user_data["username"], email=user_data["email"], is_active=True)
        db.add(user)
        db.flush()  # Flush to get the user ID

        for role_name in user_data["role_names"]:
            role = db.query(Role).filter(Role.normalized_name == normalize_role_name(role_name)).first()
            if role:
                db.add(UserRole(user_id=user.id, role_id=role.id))
                print(f"✅ Assigned role '{role_name}' to user '{user.username}'")
            else:
                print(f"❌ Role '{role_name}' not found, skipping assignment")

        created_users.append(user)
        print(f"✅ Created user '{user.username}' with email '{user.email}'")

    db.commit()
    return created_users


def create_brands(db: Session):
    """Create a handful of sample brands."""
    brands_data = [
        {"name": "Acme", "description": "Anvils, rockets and assorted gadgets"},
        {"name": "Globex", "description": "Industrial supplies"},
        {"name": "Initech", "description": "Office equipment"},
    ]

    for brand_data in brands_data:
        if db.query(Brand).filter(Brand.name == brand_data["name"], Brand.is_deleted.is_(False)).first():
            print(f"⚠️  Brand '{brand_data['name']}' already exists, skipping")
            continue
        db.add(Brand(**brand_data))
        print(f"✅ Created brand '{brand_data['name']}'")

    db.commit()


def main():
    """Main function to run the database seeding."""
    print("🌱 Starting database seeding...")

    init_db()
    db = SessionLocal()
    try:
        print("\n📝 Creating roles...")
        roles = create_roles(db)

        print("\n👤 Creating users...")
        users = create_users(db)

        print("\n🏷️  Creating brands...")
        create_brands(db)

        print("\n🎉 Database seeding completed successfully!")
        print("\nRoles:")
        for role in roles:
            print(f"  - {role.name}: {role.description}")

        print("\n🔐 Development access tokens:")
        for user in users:
            token = TokenManager.create_access_token({"sub": user.id, "username": user.username})
            print(f"  {user.username}: {token}")

    except SQLAlchemyError as e:
        print(f"❌ Database error: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
