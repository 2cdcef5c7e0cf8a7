"""Mapping from an OAuth provider profile to a local ``User`` row."""
from dataclasses import dataclass
from typing import Optional

from flask import current_app

from golf_tracker import db
from golf_tracker.errors import ValidationError
from golf_tracker.models import User
from golf_tracker.services.upsert import get_or_create


@dataclass(frozen=True)
class ProviderProfile:
    external_id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


def profile_from_userinfo(userinfo) -> ProviderProfile:
    """Build a profile from OpenID Connect userinfo claims."""
    userinfo = userinfo or {}
    external_id = userinfo.get('sub')
    email = userinfo.get('email')
    if not external_id or not email:
        raise ValidationError('Provider profile is missing an id or email')
    return ProviderProfile(
        external_id=str(external_id),
        email=email,
        name=userinfo.get('name'),
        picture=userinfo.get('picture'),
    )


def upsert_user(profile: ProviderProfile) -> User:
    """Return the user for ``profile``, creating it on first login.

    Existing rows are returned unchanged.
    """
    try:
        user, created = get_or_create(
            User,
            {'google_id': profile.external_id},
            {'email': profile.email, 'name': profile.name, 'picture': profile.picture},
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    if created:
        current_app.logger.info(f"[auth] new user id={user.id} email={user.email}")
    return user
