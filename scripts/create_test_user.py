from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.timecard_system.timecard_system.container import build_container
from src.timecard_system.timecard_system.core.exceptions import ValidationError

USERNAME = "testuser"
EMAIL = "test@example.com"
PASSWORD = "password123"


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    try:
        user_id = container.auth_service.register(username=USERNAME, email=EMAIL, password=PASSWORD)
        logging.info("Created test user %s (id=%s)", USERNAME, user_id)
    except ValidationError as e:
        logging.info("Test user not created: %s", e)
    logging.info("Username: %s / Password: %s", USERNAME, PASSWORD)


if __name__ == "__main__":
    main()
