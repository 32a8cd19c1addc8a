"""User profile and preference models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

PROFILE_KEY = "userProfile"
THEME_KEY = "theme"
NOTIFICATIONS_KEY = "notificationsEnabled"
LANGUAGE_KEY = "userLanguage"
ROLE_KEY = "userRole"

DEFAULT_AVATAR_PLACEHOLDER = "https://placehold.co/128x128.png"
DEFAULT_USER_NAME = "User Name"

LANGUAGE_NAMES = {
    "en": "English",
    "id": "Bahasa Indonesia",
}


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class UserRole(str, Enum):
    """Role picked on the role-selection screen."""
    OPERATOR = "operator"
    MAINTENANCE_PLANNER = "maintenance-planner"
    WAREHOUSE = "warehouse"

    @property
    def display_name(self) -> str:
        return {
            "operator": "Operator",
            "maintenance-planner": "Maintenance Planner",
            "warehouse": "Warehouse Staff",
        }[self.value]


class UserProfile(BaseModel):
    """Stored profile shown in the sidebar."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default=DEFAULT_USER_NAME)
    avatar_url: str = Field(default=DEFAULT_AVATAR_PLACEHOLDER, alias="avatarUrl")


class ProfileForm(BaseModel):
    """Profile edit form; an empty avatar keeps the current one."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        if len(value.strip()) < 2:
            raise ValueError("Name must be at least 2 characters.")
        return value

    @field_validator("avatar_url")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
