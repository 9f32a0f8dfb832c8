"""
Read and update the single system settings row
"""
import logging

from sqlalchemy.orm import Session

from saas_console.models.settings import SETTINGS_ROW_ID, SystemSettings

logger = logging.getLogger(__name__)


def get_system_settings(db: Session) -> SystemSettings:
    """Return the settings row, creating it with defaults on first use"""
    row = db.query(SystemSettings).filter(SystemSettings.id == SETTINGS_ROW_ID).first()
    if row is None:
        row = SystemSettings(id=SETTINGS_ROW_ID)
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Initialized default system settings")
    return row
