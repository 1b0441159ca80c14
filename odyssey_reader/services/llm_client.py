import logging
import threading
from typing import Callable, Optional

import httpx

from odyssey_reader.core.config import COST_PER_CALL, Settings
from odyssey_reader.core.errors import (
    AuthFailure,
    GenericAPIFailure,
    MissingKey,
    NetworkFailure,
    QuotaExceeded,
    RateLimited,
)

logger = logging.getLogger(__name__)

NEAR_LIMIT_RATIO = 0.9


class LLMClient:
    """
    Client minimal pour l'API Messages d'Anthropic.
    - un seul type de requête : prompt utilisateur unique -> texte
    - quota d'appels par session vérifié AVANT tout envoi réseau
    - le compteur n'augmente qu'après un appel réussi
    """

    def __init__(
        self,
        settings: Settings,
        api_key_provider: Callable[[], Optional[str]],
        max_calls: int,
        http_client: Optional[httpx.Client] = None,
    ):
        self.endpoint = settings.API_ENDPOINT
        self.model = settings.MODEL
        self.max_tokens = settings.MAX_TOKENS
        self.anthropic_version = settings.ANTHROPIC_VERSION
        self._api_key_provider = api_key_provider
        self._http = http_client or httpx.Client(timeout=settings.REQUEST_TIMEOUT)
        self._lock = threading.Lock()
        self.max_calls = max_calls
        self.call_count = 0  # remis à zéro à chaque démarrage

    # ---------- quota ----------

    @property
    def estimated_cost(self) -> float:
        return round(self.call_count * COST_PER_CALL, 2)

    @property
    def near_limit(self) -> bool:
        return self.call_count >= self.max_calls * NEAR_LIMIT_RATIO

    def check_ready(self) -> str:
        """
        Préconditions d'un appel : clé présente et quota non atteint.
        Retourne la clé.
        """
        api_key = self._api_key_provider()
        if not api_key:
            raise MissingKey()
        if self.call_count >= self.max_calls:
            raise QuotaExceeded(self.max_calls)
        return api_key

    # ---------- appel ----------

    def send(self, prompt: str) -> str:
        api_key = self.check_ready()

        logger.info("API call to %s (model=%s)", self.endpoint, self.model)
        try:
            response = self._http.post(
                self.endpoint,
                headers={
                    "content-type": "application/json",
                    "x-api-key": api_key,
                    "anthropic-version": self.anthropic_version,
                },
                json={
                    "model": self.model,
                    "max_tokens": self.max_tokens,
                    "messages": [{"role": "user", "content": prompt}],
                },
            )
        except httpx.TransportError as e:
            logger.warning("API transport error: %s", e)
            raise NetworkFailure() from e

        logger.debug("API response status: %s", response.status_code)
        if not response.is_success:
            raise self._classify_failure(response)

        try:
            data = response.json()
            blocks = data["content"]
            if not isinstance(blocks, list):
                raise TypeError(f"content is {type(blocks).__name__}, expected a list of blocks")
            text = "\n".join(
                block.get("text", "")
                for block in blocks
                if isinstance(block, dict) and block.get("type") == "text"
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("API response could not be parsed: %s", e)
            raise GenericAPIFailure("Unexpected response from API", status=response.status_code) from e

        with self._lock:
            self.call_count += 1
        logger.info("API call ok (%d/%d)", self.call_count, self.max_calls)
        return text

    def close(self) -> None:
        self._http.close()

    # ---------- interne ----------

    @staticmethod
    def _classify_failure(response: httpx.Response):
        status = response.status_code
        logger.warning("API error status=%s", status)

        if status == 401:
            return AuthFailure()
        if status == 429:
            return RateLimited()

        message = f"API request failed ({status})"
        try:
            body = response.json()
        except ValueError:
            # corps illisible -> texte du statut HTTP
            return GenericAPIFailure(response.reason_phrase or message, status=status)

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            message = error["message"]
        return GenericAPIFailure(message, status=status)
