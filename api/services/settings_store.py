"""Onboarding settings persisted in the settings key-value table."""

import json
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from api.config.database import SessionLocal
from api.models import Setting, ONBOARDING_SETTINGS_KEY
from onboarding.repository import SettingsStore


class SqlSettingsStore(SettingsStore):
    """Stores the onboarding settings blob as JSON under one key."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        key: str = ONBOARDING_SETTINGS_KEY,
    ):
        self.session_factory = session_factory
        self.key = key

    async def load(self) -> Optional[dict]:
        db = self.session_factory()
        try:
            setting = db.query(Setting).filter(Setting.key == self.key).first()
            return json.loads(setting.value) if setting else None
        finally:
            db.close()

    async def save(self, data: dict) -> None:
        db = self.session_factory()
        try:
            now = datetime.now(timezone.utc)
            setting = db.query(Setting).filter(Setting.key == self.key).first()
            if setting:
                setting.value = json.dumps(data)
                setting.updated_at = now
            else:
                db.add(
                    Setting(
                        key=self.key,
                        value=json.dumps(data),
                        description="One-click onboarding defaults",
                        created_at=now,
                    )
                )
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
