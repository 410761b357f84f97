"""Setting model for system configuration key-value store."""

from sqlalchemy import Column, Integer, String, DateTime, Text

from api.config.database import Base

# Key holding the one-click onboarding settings blob (JSON)
ONBOARDING_SETTINGS_KEY = "onboarding_settings"


class Setting(Base):
    """
    System configuration key-value store.

    Stores application settings that can be modified at runtime.
    """

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), nullable=False, unique=True, index=True)
    value = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Setting(key={self.key})>"
