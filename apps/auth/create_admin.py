from getpass import getpass
from core.database import SessionLocal
from apps.auth.models import UserModel
from apps.auth.services import get_password_hash

def create_admin():
    db = SessionLocal()
    try:
        email = input("Admin email: ")
        if db.query(UserModel).filter(UserModel.email == email).first():
            print(f"A user with email {email} already exists.")
            return

        name = input("Admin name: ")
        password = getpass("Admin password: ")
        if password != getpass("Confirm password: "):
            print("Passwords do not match.")
            return

        admin = UserModel(name=name, email=email, hashed_password=get_password_hash(password), is_admin=True)
        db.add(admin)
        db.commit()
        print("Admin account created.")
    finally:
        db.close()

if __name__ == "__main__":
    create_admin()
