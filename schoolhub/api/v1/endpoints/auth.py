import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from schoolhub.core.security import create_access_token, get_current_user, verify_password
from schoolhub.db.session import get_db
from schoolhub.models.user import User
from schoolhub.schemas.auth import LoginIn, TokenOut, MeOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

@router.post("/auth/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    """
    Email + password login. Unknown, inactive and wrong-password attempts all
    get the same 401 so the response does not reveal which emails exist.
    """
    email = data.email.lower().strip()
    user = db.query(User).filter(User.email == email, User.status == "active").first()
    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Rejected login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "school_id": str(user.school_id),
        "role": user.role,
    })
    return TokenOut(access_token=token)

@router.get("/auth/me", response_model=MeOut)
def me(current_user: User = Depends(get_current_user)):
    return MeOut.model_validate(current_user)
