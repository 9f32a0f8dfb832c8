"""
Reset the password of a login account

Usage:
    python reset_password.py user@example.com NewPassword123!
"""
import sys

from dotenv import load_dotenv

load_dotenv()

from saas_console.core.database import SessionLocal, engine, schema_map  # noqa: E402
from saas_console.core.security import hash_password  # noqa: E402
from saas_console.models.user import AuthAccount  # noqa: E402
from saas_console.services.session_resolver import normalize_email  # noqa: E402


def main(argv):
    if len(argv) < 3:
        print(__doc__)
        return 1

    email = normalize_email(argv[1])
    new_password = argv[2]
    if len(new_password) < 8:
        print("Password must be at least 8 characters")
        return 1

    print("=" * 60)
    print("RESETTING PASSWORD")
    print("=" * 60)

    db = SessionLocal(bind=engine.execution_options(schema_translate_map=schema_map()))
    try:
        account = db.query(AuthAccount).filter(AuthAccount.email == email).first()
        if account is None:
            print(f"\nAccount not found: {email}")
            return 1

        account.password_hash = hash_password(new_password)
        db.commit()
        print(f"\nPassword updated successfully for {email}")
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
