"""
Kenlo Pricing Engine — Main Entry Point

Quote a configuration file (CLI):
    python -m kenlo_pricing path/to/quote.json

Run as an API server (for the calculator front-end):
    python -m kenlo_pricing --serve
    # or: uvicorn kenlo_pricing.api:app --reload --port 8000

Or import and run programmatically:
    from kenlo_pricing.main import run
    record = run("path/to/quote.json")

The quote file holds either a bare configuration or
{"config": {...}, "client": {...}, "quoteInfo": {...}}.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from kenlo_pricing.config import get_settings
from kenlo_pricing.models.errors import InvalidConfigurationError, PricingError
from kenlo_pricing.models.schemas import ProposalData
from kenlo_pricing.models.state import ProposalRequest
from kenlo_pricing.services.quote_service import QuoteService
from kenlo_pricing.utils.formatters import format_currency
from kenlo_pricing.utils.logger import setup_logging


def load_request(file_path: str | Path) -> ProposalRequest:
    """Parse a quote file into a request, wrapping a bare configuration."""
    data = json.loads(Path(file_path).read_text(encoding="utf-8"))
    if "config" not in data:
        data = {"config": data}
    try:
        return ProposalRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid quote file {file_path}:\n{e}") from e


def run(file_path: str) -> dict[str, Any]:
    """Price a quote file and return the flat proposal record."""
    setup_logging(get_settings().log_level)

    request = load_request(file_path)
    proposal = QuoteService().export(request.config, request.client, request.quote_info)
    _print_summary(proposal)
    return proposal.to_export_dict()


def _print_summary(proposal: ProposalData) -> None:
    """Log a human-readable summary of the proposal."""
    logger = logging.getLogger(__name__)

    logger.info("-" * 60)
    logger.info("  PROPOSAL SUMMARY")
    logger.info("-" * 60)
    logger.info(f"  Client:          {proposal.client_name or 'N/A'}")
    logger.info(f"  Products:        {proposal.product_type.value}")
    logger.info(f"  Kombo:           {proposal.kombo_name or 'Sem Kombo'}")
    logger.info(f"  Frequency:       {proposal.frequency_label}")
    for item in proposal.line_items:
        price = item.price_sem_kombo if proposal.kombo.value == "none" else item.price_com_kombo
        logger.info(f"    {item.name:<20} {format_currency(price)}")
    logger.info(f"  Monthly:         {format_currency(proposal.total_monthly)}")
    logger.info(f"  Implementation:  {format_currency(proposal.implantation_fee)}")
    logger.info(f"  Post-paid:       {format_currency(proposal.post_paid_total)}")
    logger.info(f"  Net gain:        {format_currency(proposal.net_gain)}")
    if proposal.recommendation:
        logger.info(f"  Tip:             {proposal.recommendation.message}")
    logger.info("-" * 60)


def serve(host: str | None = None, port: int | None = None) -> None:
    """Start the FastAPI server."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    host = host or settings.api_host
    port = port or settings.api_port
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("kenlo_pricing.api:app", host=host, port=port, reload=settings.debug)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if "--serve" in argv:
        serve()
        return 0
    if not argv:
        print("usage: python -m kenlo_pricing QUOTE.json | --serve", file=sys.stderr)
        return 2
    try:
        record = run(argv[0])
    except (PricingError, OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(record, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
