import logging
import os

logger = logging.getLogger("ts_api_docs")
logger.setLevel(os.environ.get("TS_API_DOCS_LOG_LEVEL", "INFO").upper())

# Console handler with formatter
ch = logging.StreamHandler()
formatter = logging.Formatter("[%(levelname)s] %(message)s")
ch.setFormatter(formatter)

logger.addHandler(ch)
