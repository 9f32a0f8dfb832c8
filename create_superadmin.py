"""
Seed a super-admin: registry row plus login account

Usage:
    python create_superadmin.py admin@example.com "Platform Admin" [password]
"""
import sys

from dotenv import load_dotenv

load_dotenv()

from saas_console.core.config import settings  # noqa: E402
from saas_console.core.database import SessionLocal, engine, init_db, schema_map  # noqa: E402
from saas_console.core.security import hash_password  # noqa: E402
from saas_console.models.user import AuthAccount, PlatformUser, SuperAdmin  # noqa: E402
from saas_console.services.session_resolver import normalize_email  # noqa: E402


def main(argv):
    if len(argv) < 2:
        print(__doc__)
        return 1

    email = normalize_email(argv[1])
    name = argv[2] if len(argv) > 2 else "Super Admin"
    password = argv[3] if len(argv) > 3 else settings.TEMPORARY_PASSWORD

    print("=" * 60)
    print("CREATING SUPER-ADMIN")
    print("=" * 60)

    init_db()
    db = SessionLocal(bind=engine.execution_options(schema_translate_map=schema_map()))
    try:
        if db.query(SuperAdmin).filter(SuperAdmin.email == email).first() is None:
            db.add(SuperAdmin(email=email, name=name, is_active=True))
            print(f"\nRegistered {email} as super-admin")
        else:
            print(f"\n{email} is already a super-admin")

        if db.query(PlatformUser).filter(PlatformUser.email == email).first() is None:
            db.add(PlatformUser(name=name, email=email, user_type="superadmin", is_active=True))

        account = db.query(AuthAccount).filter(AuthAccount.email == email).first()
        if account is None:
            db.add(AuthAccount(email=email, password_hash=hash_password(password), is_active=True))
            print(f"Login account created, password: {password}")
        else:
            print("Login account already exists, password unchanged")

        db.commit()
    except Exception as e:
        db.rollback()
        print(f"\nError: {e}")
        return 1
    finally:
        db.close()

    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
