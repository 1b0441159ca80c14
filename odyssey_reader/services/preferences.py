import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from odyssey_reader.core.config import STORAGE_KEYS
from odyssey_reader.db.models import Preference

logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    Stockage persistant clé/valeur (toutes les valeurs sont des chaînes).
    Les noms logiques ("THEME", "FONT_SIZE", ...) sont traduits via STORAGE_KEYS.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @staticmethod
    def storage_key(name: str) -> str:
        try:
            return STORAGE_KEYS[name]
        except KeyError:
            raise KeyError(f"Unknown setting: {name}") from None

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        key = self.storage_key(name)
        with self._session_factory() as db:
            row = db.execute(select(Preference).where(Preference.key == key)).scalar_one_or_none()
            return row.value if row is not None else default

    def set(self, name: str, value) -> None:
        key = self.storage_key(name)
        with self._session_factory() as db:
            row = db.get(Preference, key)
            if row is None:
                db.add(Preference(key=key, value=str(value)))
            else:
                row.value = str(value)
            db.commit()
        logger.debug("preference saved: %s", key)

    def delete(self, name: str) -> bool:
        key = self.storage_key(name)
        with self._session_factory() as db:
            row = db.get(Preference, key)
            if row is None:
                return False
            db.delete(row)
            db.commit()
        logger.debug("preference removed: %s", key)
        return True

    def get_int(self, name: str, default: int) -> int:
        """Comme parseInt(...) || default : valeur absente, illisible ou nulle -> défaut."""
        raw = self.get(name)
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError):
            return default
        return value or default


# Accesseurs nommés comme dans la config d'origine
def get_config_value(store: PreferenceStore, name: str, default: Optional[str] = None) -> Optional[str]:
    return store.get(name, default)


def save_config_value(store: PreferenceStore, name: str, value) -> None:
    store.set(name, value)
