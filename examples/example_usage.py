"""Example: call the service layer directly, without Flask.

Prints this month's summary across every factory.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.factory_ledger.factory_ledger.container import build_container
from src.factory_ledger.factory_ledger.users.model import Scope


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        owner_email=settings.OWNER_EMAIL,
        owner_password=settings.OWNER_PASSWORD,
        blob_dir=settings.BLOB_DIR,
    )
    try:
        report = container.report_service.build_report(Scope.owner("example"), window="monthly")
        print(report.summary.to_dict())
        for point in report.by_factory:
            print(f"{point.label}: {point.amount:.2f}")
    finally:
        container.close()


if __name__ == "__main__":
    main()
