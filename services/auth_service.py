import os
from typing import Mapping, Optional, Protocol

import firebase_admin
from fastapi import Depends, Request
from firebase_admin import auth, credentials

from config import Settings
from utils.errors import UnauthorizedError
from utils.logger import get_logger

logger = get_logger("auth")


class SessionResolver(Protocol):
    """Maps inbound request headers to an authenticated user id, or None."""

    def resolve(self, headers: Mapping[str, str]) -> Optional[str]:
        ...


def bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    value = headers.get("authorization") or headers.get("Authorization")
    if not value:
        return None
    scheme, _, token = value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class FirebaseSessionResolver:
    """Verifies Firebase ID tokens sent as ``Authorization: Bearer <token>``."""

    APP_NAME = "paddock"

    def __init__(self, settings: Settings):
        self._settings = settings
        self._app = None

    def _get_app(self):
        # Initialised once, on the first request that carries a token
        if self._app is not None:
            return self._app
        try:
            self._app = firebase_admin.get_app(self.APP_NAME)
            return self._app
        except ValueError:
            pass

        options = None
        if self._settings.firebase_project_id:
            options = {"projectId": self._settings.firebase_project_id}

        cred_path = self._settings.firebase_credentials_path
        if os.path.exists(cred_path):
            cred = credentials.Certificate(cred_path)
            logger.info("Firebase Admin initialised from %s", cred_path)
        else:
            logger.warning("Credentials file %s not found, using application default credentials", cred_path)
            cred = credentials.ApplicationDefault()

        self._app = firebase_admin.initialize_app(cred, options, name=self.APP_NAME)
        return self._app

    def resolve(self, headers: Mapping[str, str]) -> Optional[str]:
        token = bearer_token(headers)
        if not token:
            return None
        try:
            decoded = auth.verify_id_token(token, app=self._get_app())
        except (auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
                auth.RevokedIdTokenError, auth.UserDisabledError) as e:
            logger.info("Rejected session token: %s", e)
            return None
        return decoded.get("uid")


def get_session_resolver(request: Request) -> SessionResolver:
    return request.app.state.session_resolver


def get_optional_user_id(
    request: Request,
    resolver: SessionResolver = Depends(get_session_resolver),
) -> Optional[str]:
    return resolver.resolve(request.headers)


def get_current_user_id(user_id: Optional[str] = Depends(get_optional_user_id)) -> str:
    if not user_id:
        raise UnauthorizedError()
    return user_id
