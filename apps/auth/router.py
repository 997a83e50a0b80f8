from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from apps.auth.schemas import UserBase, UserCreate, PasswordChange, Token
from apps.auth.models import UserModel
from apps.auth.services import (
    get_db, create_user, authenticate_user, get_current_admin,
    create_access_token, get_current_user, change_password
)
from core.config import Settings, get_settings
from fastapi.security import OAuth2PasswordRequestForm
from typing import List

router = APIRouter()

@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
):
    user = authenticate_user(db, email=form_data.username, password=form_data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")
    access_token = create_access_token(data={"sub": user.email}, settings=settings)
    return {"access_token": access_token, "token_type": "bearer"}

@router.post("/users", response_model=UserBase, status_code=status.HTTP_201_CREATED, summary="Create user (admin only)")
def create_new_user(user: UserCreate, db: Session = Depends(get_db), admin: UserModel = Depends(get_current_admin)):
    return create_user(db, user)

@router.get("/users", response_model=List[UserBase], summary="List users (admin only)")
def list_users(db: Session = Depends(get_db), admin: UserModel = Depends(get_current_admin)):
    return db.query(UserModel).order_by(UserModel.name).all()

@router.get("/users/me", response_model=UserBase)
def read_users_me(current_user: UserModel = Depends(get_current_user)):
    """
    Returns the current authenticated user's details.
    """
    return current_user

@router.post("/users/me/password", summary="Change own password")
def change_own_password(
    change: PasswordChange,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    change_password(db, current_user, change)
    return {"message": "Password updated successfully"}
