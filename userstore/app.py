from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, BeforeValidator, ConfigDict
from typing import Annotated, List
import logging
import re
import uvicorn

from .config import get_settings
from .logconfig import configure_logging
from .store import User, UserStore

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def parse_id(value) -> int:
    """Accept only a plain signed decimal that fits in 64 bits."""
    if not isinstance(value, str) or not _ID_PATTERN.fullmatch(value):
        raise ValueError("id must be an integer")
    user_id = int(value)
    if not _ID_MIN <= user_id <= _ID_MAX:
        raise ValueError("id out of range")
    return user_id


UserId = Annotated[int, BeforeValidator(parse_id)]


class UserCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    email: str


class UserOut(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(id=user.id, name=user.name, email=user.email)


def get_store(request: Request) -> UserStore:
    return request.app.state.store


async def validation_error(request: Request, exc: RequestValidationError):
    # FastAPI answers 422 by default; this surface uses 400 for all bad input
    in_path = any(err.get("loc", ("",))[0] == "path" for err in exc.errors())
    detail = "invalid id" if in_path else "invalid request body"
    logger.info("rejected %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


def create_app(store: UserStore) -> FastAPI:
    app = FastAPI(title="userstore")
    app.state.store = store
    app.add_exception_handler(RequestValidationError, validation_error)

    @app.get("/users", response_model=List[UserOut])
    def list_users(store: UserStore = Depends(get_store)):
        return [UserOut.from_user(u) for u in store.list()]

    @app.get("/users/{user_id}", response_model=UserOut)
    def get_user(user_id: UserId, store: UserStore = Depends(get_store)):
        user = store.get(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="user not found")
        return UserOut.from_user(user)

    @app.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
    def create_user(payload: UserCreate, store: UserStore = Depends(get_store)):
        return UserOut.from_user(store.create(payload.name, payload.email))

    @app.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_user(user_id: UserId, store: UserStore = Depends(get_store)):
        if not store.delete(user_id):
            raise HTTPException(status_code=404, detail="user not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return "OK"

    return app


def main():
    settings = get_settings()
    configure_logging(settings)

    app = create_app(UserStore())
    logger.info("Starting server on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
