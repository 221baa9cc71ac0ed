"""
SKU classification — map SKUs (and catalog category/description pairs) to
a manufacturer and product type.

Each classifier is an ordered list of (predicate, label) rules evaluated
first-match-wins. Several rules overlap on purpose (``C`` + digit is both
a Neff and a Miele prefix); order decides, so do not reorder.
"""
import re

UNKNOWN_MANUFACTURER = 'Unknown'
DEFAULT_PRODUCT_TYPE = 'Appliance'

_RE_NEFF = re.compile(r'^[BC]\d')
_RE_MIELE = re.compile(r'^[HKGCM]\d')
_RE_FISHER_PAYKEL = re.compile(r'^(DW|RB|WH|WM)')
_RE_SMEG = re.compile(r'^(SA|STA|FAB)')
_RE_OVEN_PREFIX = re.compile(r'^[BH]\d')


def _contains(*needles):
    return lambda value: any(needle in value for needle in needles)


def _matches(pattern):
    return lambda value: bool(pattern.search(value))


MANUFACTURER_RULES = [
    (_matches(_RE_NEFF), 'Neff'),
    (_matches(_RE_MIELE), 'Miele'),
    (_matches(_RE_FISHER_PAYKEL), 'Fisher & Paykel'),
    (_matches(_RE_SMEG), 'Smeg'),
]

PRODUCT_TYPE_RULES = [
    (_contains('DW'), 'Dishwasher'),
    (lambda sku: bool(_RE_OVEN_PREFIX.search(sku)) or 'OV' in sku, 'Oven'),
    (_contains('WM', 'WH'), 'Washing Machine'),
    (_contains('RB', 'RS'), 'Refrigerator'),
    (_contains('CT', 'KM'), 'Cooktop'),
]

# Checked against the upper-cased catalog category.
CATEGORY_RULES = [
    (_contains('DISHWASHER'), 'Dishwasher'),
    (_contains('OVEN', 'STOVE'), 'Oven'),
    (_contains('COOKTOP'), 'Cooktop'),
    (_contains('REFRIGERATOR', 'FREEZER'), 'Refrigerator'),
    (_contains('RANGEHOOD'), 'Rangehood'),
    (_contains('MICROWAVE'), 'Microwave'),
    (_contains('WASHER', 'DRYER'), 'Washing Machine'),
    (_contains('WINE'), 'Wine Cabinet'),
    (_contains('COOKTOP'), 'Cooktop'),
]

# Fallback against the upper-cased catalog description.
DESCRIPTION_RULES = [
    (_contains('DISHWASH'), 'Dishwasher'),
    (_contains('OVEN'), 'Oven'),
    (_contains('COOKTOP'), 'Cooktop'),
    (_contains('FRIDGE', 'FREEZE'), 'Refrigerator'),
    (_contains('RANGEHOOD', 'RH '), 'Rangehood'),
    (_contains('MICROWAVE', 'MW '), 'Microwave'),
    (_contains('WASH', 'DRY'), 'Washing Machine'),
]


def _first_match(rules, value):
    for predicate, label in rules:
        if predicate(value):
            return label
    return None


def identify_manufacturer(sku):
    """Return the manufacturer for a SKU, or 'Unknown'."""
    if not sku:
        return UNKNOWN_MANUFACTURER
    return _first_match(MANUFACTURER_RULES, sku) or UNKNOWN_MANUFACTURER


def identify_product_type(sku):
    """Return the product type for a SKU, or 'Appliance'."""
    if not sku:
        return DEFAULT_PRODUCT_TYPE
    return _first_match(PRODUCT_TYPE_RULES, sku) or DEFAULT_PRODUCT_TYPE


def classify_catalog_product(category, description):
    """Product type for a catalog row: category first, description as fallback."""
    return (
        _first_match(CATEGORY_RULES, (category or '').upper())
        or _first_match(DESCRIPTION_RULES, (description or '').upper())
        or DEFAULT_PRODUCT_TYPE
    )
