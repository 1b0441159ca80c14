import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logger racine (une seule fois, les appels suivants ne font
    qu'ajuster le niveau).
    """
    root = logging.getLogger()
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    if not root.handlers:
        logging.basicConfig(level=numeric, format=LOG_FORMAT)
    root.setLevel(numeric)

    # httpx logge chaque requête en INFO
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
