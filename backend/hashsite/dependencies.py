"""FastAPI dependencies for state built during startup (see main.lifespan)."""

from typing import Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hashsite.assets.registry import AssetRegistry
from hashsite.config import Settings
from hashsite.mail.models import MailUser


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> AssetRegistry:
    return request.app.state.registry


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


def get_mailboxes(request: Request) -> Dict[str, MailUser]:
    return request.app.state.mailboxes
