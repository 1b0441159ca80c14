from pydantic import BaseModel

from odyssey_reader.core.errors import ReaderError


class ErrorDetail(BaseModel):
    kind: str
    message: str
    retryable: bool = False


class ErrorResponse(BaseModel):
    error: ErrorDetail

    @classmethod
    def from_exc(cls, exc: ReaderError) -> "ErrorResponse":
        return cls(error=ErrorDetail(**exc.to_dict()))


# Documentation OpenAPI des erreurs affichées en ligne
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Action invalide (page, sélection, clé)"},
    401: {"model": ErrorResponse, "description": "Clé API absente"},
    429: {"model": ErrorResponse, "description": "Quota d'appels de la session atteint"},
    502: {"model": ErrorResponse, "description": "Échec de l'appel à l'API (réseau, clé refusée, erreur)"},
    503: {"model": ErrorResponse, "description": "API limitée ou source indisponible"},
}
