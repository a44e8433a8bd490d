"""Signed-cookie state: the logged-in user, the search filters and one-shot notices."""

from itsdangerous import BadSignature, URLSafeSerializer
from pydantic import ValidationError

from . import config
from .models import AuthSession, SearchFilters, SessionUser

serializer = URLSafeSerializer(config.SECRET_KEY, salt="session")
filters_serializer = URLSafeSerializer(config.SECRET_KEY, salt="filters")
flash_serializer = URLSafeSerializer(config.SECRET_KEY, salt="flash")


def create_session_token(user: SessionUser) -> str:
    return serializer.dumps(user.model_dump())


def get_session_from_token(token: str | None) -> AuthSession:
    if not token:
        return AuthSession()
    try:
        user = SessionUser.model_validate(serializer.loads(token))
    except (BadSignature, ValidationError):
        return AuthSession()
    return AuthSession(is_authenticated=True, user=user)


def dump_filters(filters: SearchFilters) -> str:
    return filters_serializer.dumps(filters.model_dump())


def load_filters(token: str | None) -> SearchFilters:
    if not token:
        return SearchFilters()
    try:
        return SearchFilters.model_validate(filters_serializer.loads(token))
    except (BadSignature, ValidationError):
        return SearchFilters()


def dump_flash(messages: list[str]) -> str:
    return flash_serializer.dumps(messages)


def load_flash(token: str | None) -> list[str]:
    if not token:
        return []
    try:
        messages = flash_serializer.loads(token)
    except BadSignature:
        return []
    return [m for m in messages if isinstance(m, str)] if isinstance(messages, list) else []
