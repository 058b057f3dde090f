"""Slot configuration CLI.

Loads promoted listing slot settings from YAML into a tenant, runs dry-run
auctions against the configured database, and bootstraps tenant admins.

Example config::

    slots:
      - slot_type: SEARCH_TOP
        min_bid_amount: "0.50"
        reserve_price: "1.00"
        max_ads: 3
        target_keywords: [phone, laptop]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ads_api.db import ensure_schema, get_session
from ads_api.logging_config import setup_logging
from ads_api.models import PromotedListingSlot, User
from ads_api.schemas.slots import SlotAllocationOut, SlotConfigRequest, SlotContextRequest
from ads_api.security.passwords import hash_password, password_policy_error
from ads_api.services.ad_campaign import AdCampaignService
from ads_domain.errors import AdsError, ConflictError, ValidationError

logger = logging.getLogger("slots_cli")


def load_slot_config(path: Path) -> List[SlotConfigRequest]:
    """Parse and validate the ``slots`` list of a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    entries = data.get("slots") if isinstance(data, dict) else None
    if not isinstance(entries, list) or not entries:
        raise ValidationError([f"{path}: expected a non-empty 'slots' list"])
    try:
        return [SlotConfigRequest.model_validate(entry) for entry in entries]
    except SchemaValidationError as exc:
        raise ValidationError([f"{path}: {err['loc']}: {err['msg']}" for err in exc.errors()]) from exc


def apply_slot_config(
    session: Session, tenant_id: str, slots: List[SlotConfigRequest]
) -> List[PromotedListingSlot]:
    service = AdCampaignService(session)
    return [service.configure_slot(tenant_id, slot.slot_type, slot.to_fields()) for slot in slots]


def dry_run_auction(session: Session, tenant_id: str, request: SlotContextRequest) -> Dict[str, Any]:
    """Allocate a slot without recording anything."""
    result = AdCampaignService(session).allocate_slot(tenant_id, request.to_context())
    return SlotAllocationOut.model_validate(result).model_dump(mode="json")


def create_admin(session: Session, tenant_id: str, email: str, password: str) -> User:
    policy_error = password_policy_error(password)
    if policy_error:
        raise ValidationError([policy_error])
    user = User(
        tenant_id=tenant_id,
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role="admin",
        is_active=True,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(f"Email already registered: {user.email}") from exc
    return user


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slots_cli.py", description="Promoted listing slot tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Load slot settings from YAML")
    load_parser.add_argument("config", type=Path, help="Path to slot YAML config")
    load_parser.add_argument("--tenant", required=True, help="Tenant id")

    auction_parser = subparsers.add_parser("auction", help="Print a dry-run slot allocation")
    auction_parser.add_argument("--tenant", required=True, help="Tenant id")
    auction_parser.add_argument("--slot", required=True, dest="slot_type", help="Slot type, e.g. SEARCH_TOP")
    auction_parser.add_argument("--position", type=int, default=1)
    auction_parser.add_argument("--query", dest="search_query")
    auction_parser.add_argument("--category", dest="category_id")
    auction_parser.add_argument("--device", dest="device_type")
    auction_parser.add_argument("--country", help="Country code for location targeting")

    admin_parser = subparsers.add_parser("create-admin", help="Create a tenant administrator")
    admin_parser.add_argument("--tenant", required=True, help="Tenant id")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)
    ensure_schema()

    try:
        with get_session() as session:
            if args.command == "load":
                slots = apply_slot_config(session, args.tenant, load_slot_config(args.config))
                for slot in slots:
                    print(f"{slot.slot_type}: min_bid={slot.min_bid_amount} reserve={slot.reserve_price}")
            elif args.command == "auction":
                request = SlotContextRequest(
                    slot_type=args.slot_type,
                    position=args.position,
                    search_query=args.search_query,
                    category_id=args.category_id,
                    device_type=args.device_type,
                    location={"country": args.country} if args.country else None,
                )
                print(json.dumps(dry_run_auction(session, args.tenant, request), indent=2))
            elif args.command == "create-admin":
                user = create_admin(session, args.tenant, args.email, args.password)
                print(f"Created admin {user.email} ({user.id}) in tenant {user.tenant_id}")
    except AdsError as exc:
        logger.error("%s", exc.message)
        return 1
    except SchemaValidationError as exc:
        logger.error("Invalid arguments: %s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
