#!/usr/bin/env python3
"""Varredura de vencimentos para rodar via cron externo."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from sqlalchemy.orm import Session  # noqa: E402

from app.core.database import SessionLocal  # noqa: E402
from app.core.logging_setup import configure_logging  # noqa: E402
from app.models.company import Company  # noqa: E402
from app.services.expiry_alerts import create_expiry_notifications  # noqa: E402

logger = logging.getLogger("scripts.expiry_alerts")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gera notificações de vencimento de infraestrutura.")
    parser.add_argument("--company-id", help="Processa apenas esta empresa")
    return parser.parse_args(argv)


def run(db: Session, company_id: str | None = None) -> dict[str, int]:
    query = db.query(Company.id)
    if company_id:
        query = query.filter(Company.id == company_id)
    else:
        query = query.filter(Company.is_active.is_(True))

    results: dict[str, int] = {}
    for (current_id,) in query.all():
        results[current_id] = create_expiry_notifications(db, current_id)
    return results


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    db = SessionLocal()
    try:
        results = run(db, args.company_id)
    finally:
        db.close()

    if args.company_id and not results:
        print(f"Empresa não encontrada: {args.company_id}")
        return 1

    total = sum(results.values())
    logger.info("Expiry sweep finished: companies=%s created=%s", len(results), total)
    print(f"Notificações criadas: {total} em {len(results)} empresa(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
