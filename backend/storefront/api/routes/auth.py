from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from storefront.api.deps import get_db, get_current_user
from storefront.models.user import User, UserRole
from storefront.schemas.auth import Token, LoginRequest, RegisterRequest
from storefront.schemas.user import UserResponse
from storefront.core.security import get_password_hash, verify_password, create_access_token

router = APIRouter()


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Register a new customer account.
    """
    # Check if user already exists
    existing_user = await db.users.find_one({"email": request.email})
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user_data = User(
        name=request.name,
        email=request.email,
        password_hash=get_password_hash(request.password),
        role=UserRole.CUSTOMER
    ).model_dump(exclude={"id"})

    try:
        result = await db.users.insert_one(user_data)
    except DuplicateKeyError:
        # another request registered the same email first
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user_id = str(result.inserted_id)

    access_token = create_access_token(data={"sub": user_id})

    return Token(access_token=access_token, token_type="bearer")


@router.post("/login", response_model=Token)
async def login(
    request: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Login with email and password.

    Returns a JWT access token on success.
    """
    user = await db.users.find_one({"email": request.email})

    if not user or not verify_password(request.password, user["password_hash"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    user_id = str(user["_id"])
    access_token = create_access_token(data={"sub": user_id})

    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: dict = Depends(get_current_user)):
    """
    Get the current authenticated user's information.
    """
    return UserResponse(
        id=str(current_user["_id"]),
        name=current_user.get("name", ""),
        email=current_user["email"],
        role=current_user.get("role", "customer"),
        created_at=current_user["created_at"]
    )
