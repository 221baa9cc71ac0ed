"""
Service options — match a SKU + warranty status against the published
service-options sheet.

The sheet is fetched fresh for every lookup; nothing is cached.
"""
import logging

import requests

from ..errors import ExternalLookupError, MalformedInput
from ..models import ClassificationKey, OptionLookup
from .csv_tokenizer import parse_csv
from .sku_classifier import identify_manufacturer, identify_product_type

logger = logging.getLogger(__name__)

MATCH_COLUMNS = ('Manufacturer', 'Product Type', 'Warranty Status')


class ServiceOptionSource:
    """Reads the service-options sheet as CSV over HTTP."""

    def __init__(self, csv_url, timeout=30):
        self.csv_url = csv_url
        self.timeout = timeout

    def fetch_csv(self):
        response = requests.get(self.csv_url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def fetch_rows(self):
        """Fetch and parse the sheet; raises ExternalLookupError on any failure."""
        if not self.csv_url:
            raise ExternalLookupError("No service options sheet URL configured")
        try:
            return parse_csv(self.fetch_csv())
        except requests.RequestException as e:
            raise ExternalLookupError(f"Failed to fetch service options sheet: {e}") from e
        except MalformedInput as e:
            raise ExternalLookupError(f"Service options sheet is malformed: {e}") from e


def classify(sku, warranty_status):
    """Build the match key for a SKU and the customer's warranty answer."""
    return ClassificationKey(
        manufacturer=identify_manufacturer(sku),
        product_type=identify_product_type(sku),
        warranty_status=warranty_status,
    )


def filter_options(rows, key):
    """Rows whose three match columns equal the key exactly, in sheet order."""
    wanted = (key.manufacturer, key.product_type, key.warranty_status)
    return [
        row for row in rows
        if tuple(row.get(column, '') for column in MATCH_COLUMNS) == wanted
    ]


def lookup_service_options(sku, warranty_status, source):
    """Run one lookup, keeping "no matches" and "lookup failed" apart."""
    key = classify(sku, warranty_status)
    try:
        rows = source.fetch_rows()
    except ExternalLookupError as e:
        logger.warning(f"Service options lookup failed for {sku}: {e.message}")
        return OptionLookup(key=key, failed=True, error=e.message)

    options = filter_options(rows, key)
    logger.info(
        f"Found {len(options)} service option(s) for {key.manufacturer} / "
        f"{key.product_type} / {key.warranty_status}"
    )
    return OptionLookup(key=key, options=options)


def find_service_options(sku, warranty_status, source):
    """Matching option rows; an unreadable sheet yields an empty list."""
    return lookup_service_options(sku, warranty_status, source).options
