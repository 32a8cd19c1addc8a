"""User profile and settings stored as single values in the record store."""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from equipcare.models.preferences import (
    DEFAULT_AVATAR_PLACEHOLDER,
    DEFAULT_USER_NAME,
    LANGUAGE_KEY,
    LANGUAGE_NAMES,
    NOTIFICATIONS_KEY,
    PROFILE_KEY,
    ROLE_KEY,
    THEME_KEY,
    ProfileForm,
    Theme,
    UserProfile,
    UserRole,
)
from equipcare.services.collections import Notice
from equipcare.services.record_store import RecordStore
from equipcare.services.viewers import CollectionViewer
from equipcare.utils.errors import FormValidationError
from equipcare.utils.logging import get_structured_logger
from equipcare.utils.media import encode_data_uri
from equipcare.utils.validation import parse_form

logger = get_structured_logger(__name__)

DEFAULT_LANGUAGE = "en"


class Preferences:
    """
    Settings page and profile page operations.

    Scalar settings are stored as raw text (``theme`` is ``dark`` or
    ``light``); the profile is a JSON object.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    # ---- theme ----

    def theme(self) -> Theme:
        return Theme.DARK if self.store.get_text(THEME_KEY) == Theme.DARK.value else Theme.LIGHT

    def set_theme(self, theme: Union[Theme, str]) -> Notice:
        try:
            theme = Theme(theme)
        except ValueError as e:
            raise FormValidationError({"theme": [f"Unsupported theme: {theme}"]}) from e
        self.store.set_text(THEME_KEY, theme.value)
        mode = "Dark" if theme is Theme.DARK else "Light"
        return Notice(title="Theme Changed", description=f"{mode} mode enabled.")

    def reset(self) -> Notice:
        """Back to the default (light) theme."""
        self.store.remove(THEME_KEY)
        return Notice(
            title="Settings Reset",
            description="Theme has been reset to default (Light).",
            variant="destructive"
        )

    # ---- notifications / language / role ----

    def notifications_enabled(self) -> bool:
        return self.store.get_text(NOTIFICATIONS_KEY) != "false"

    def set_notifications_enabled(self, enabled: bool) -> None:
        self.store.set_text(NOTIFICATIONS_KEY, "true" if enabled else "false")

    def language(self) -> str:
        raw = self.store.get_text(LANGUAGE_KEY)
        return raw if raw in LANGUAGE_NAMES else DEFAULT_LANGUAGE

    def set_language(self, code: str) -> None:
        if code not in LANGUAGE_NAMES:
            raise FormValidationError({"userLanguage": [f"Unsupported language: {code}"]})
        self.store.set_text(LANGUAGE_KEY, code)

    def role(self) -> Optional[UserRole]:
        raw = self.store.get_text(ROLE_KEY)
        try:
            return UserRole(raw) if raw else None
        except ValueError:
            logger.warning("Ignoring unknown stored role", stored_role=raw)
            return None

    def set_role(self, role: Union[UserRole, str]) -> UserRole:
        role = UserRole(role)
        self.store.set_text(ROLE_KEY, role.value)
        return role

    def clear_role(self) -> Notice:
        """Forget the selected role (log out)."""
        self.store.remove(ROLE_KEY)
        return Notice(title="Logged Out", description="You have been successfully logged out.")

    # ---- profile ----

    def profile(self) -> UserProfile:
        """Stored profile; missing or unreadable data falls back to the defaults."""
        data = self.store.read_json(PROFILE_KEY)
        if not isinstance(data, dict):
            return UserProfile()
        return UserProfile(
            name=data.get("name") or DEFAULT_USER_NAME,
            avatar_url=data.get("avatarUrl") or DEFAULT_AVATAR_PLACEHOLDER,
        )

    def save_profile(
        self,
        form_data: Mapping[str, Any],
        avatar_upload: Optional[Union[bytes, str, Path]] = None,
        avatar_mime_type: Optional[str] = None,
    ) -> Notice:
        """
        Validate and store the profile.

        An uploaded avatar is stored inline as a data URI; with neither an
        upload nor an avatar URL the current avatar is kept.
        """
        form = parse_form(ProfileForm, form_data)
        avatar_url = form.avatar_url
        if avatar_upload is not None:
            avatar_url = encode_data_uri(avatar_upload, avatar_mime_type)

        profile = UserProfile(name=form.name, avatar_url=avatar_url or self.profile().avatar_url)
        self.store.write_json(PROFILE_KEY, profile.model_dump(by_alias=True))

        logger.info(
            "Profile saved",
            profile_name=profile.name,
            inline_avatar=avatar_upload is not None,
            context_id=self.store.context_id
        )
        return Notice(title="Profile Updated", description="Your profile information has been saved.")


class ProfileView(CollectionViewer):
    """Sidebar profile block; follows profile and role changes from other contexts."""

    watched_keys = (PROFILE_KEY, ROLE_KEY)

    def __init__(self, store: RecordStore):
        super().__init__(store)
        self.preferences = Preferences(store)

    def load(self) -> list[UserProfile]:
        return [self.preferences.profile()]

    @property
    def profile(self) -> UserProfile:
        return self.items[0] if self.items else UserProfile()

    @property
    def role(self) -> Optional[UserRole]:
        return self.preferences.role()
