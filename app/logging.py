import logging, sys
from app.settings import settings

def configure_logging(level: str | None = None):
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    for noisy_logger in ("botocore", "boto3", "urllib3"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)
