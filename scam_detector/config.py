import os
import logging

LEXICON_PATH = os.environ.get("SCAM_DETECTOR_LEXICON", "")
MAX_UPLOAD_MB = int(os.environ.get("SCAM_DETECTOR_MAX_UPLOAD_MB", "10"))
HOST = os.environ.get("SCAM_DETECTOR_HOST", "0.0.0.0")
PORT = int(os.environ.get("SCAM_DETECTOR_PORT", "8000"))
LOG_LEVEL = os.environ.get("SCAM_DETECTOR_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level=None):
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format=LOG_FORMAT,
    )
