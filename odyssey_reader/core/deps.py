from fastapi import Request

from odyssey_reader.core.config import Settings
from odyssey_reader.services.session import ReaderSession


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_reader(request: Request) -> ReaderSession:
    """
    Fournit la session de lecture du processus (DI).
    """
    return request.app.state.reader
