"""Persistence layer for system settings."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import SettingType, SystemSetting
from expense_tracker.infrastructure.models import SystemSettingModel
from expense_tracker.utils import ensure_app_timezone


class SystemSettingRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, public_only: bool = False) -> Sequence[SystemSetting]:
        query = self.session.query(SystemSettingModel)
        if public_only:
            query = query.filter(SystemSettingModel.is_public.is_(True))
        query = query.order_by(SystemSettingModel.category, SystemSettingModel.setting_key)
        return [self._to_entity(model) for model in query.all()]

    def get_by_key(self, key: str) -> SystemSetting | None:
        model = (
            self.session.query(SystemSettingModel)
            .filter(SystemSettingModel.setting_key == key)
            .first()
        )
        return self._to_entity(model) if model else None

    def save_values(self, values: dict[str, str | None]) -> Sequence[SystemSetting]:
        """Write the raw values of existing settings in one commit."""

        models = (
            self.session.query(SystemSettingModel)
            .filter(SystemSettingModel.setting_key.in_(list(values)))
            .all()
        )
        for model in models:
            model.setting_value = values[model.setting_key]
            self.session.add(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: SystemSettingModel) -> SystemSetting:
        return SystemSetting(
            id=model.id,
            key=model.setting_key,
            value=model.setting_value,
            setting_type=SettingType(model.setting_type),
            category=model.category,
            description=model.description,
            is_public=bool(model.is_public),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["SystemSettingRepository"]
