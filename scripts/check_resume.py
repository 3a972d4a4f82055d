import sys
import logging
from typing import Dict, Optional

from app.settings import settings
from infra.storage.object_store import get_object_store

log = logging.getLogger("check_resume")


def check_resume(store, key: str) -> Optional[Dict[str, str]]:
    """Return the stored metadata of a resume object, or None when it is missing."""
    if not store.exists(key):
        log.warning(f"Resume NOT FOUND: {key}")
        return None
    metadata = store.get_metadata(key) or {}
    log.info(f"Resume found: {key}")
    for name, value in sorted(metadata.items()):
        log.info(f"  {name}: {value}")
    return metadata


if __name__ == "__main__":
    import argparse
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    parser = argparse.ArgumentParser(description="Check that a resume object exists and show its metadata")
    parser.add_argument("key", help="Object key, as stored in resumeBlobPath")
    args = parser.parse_args()
    found = check_resume(get_object_store(settings), args.key)
    sys.exit(0 if found is not None else 1)
