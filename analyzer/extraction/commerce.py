"""Commerce fields, policy mentions and breadcrumbs."""

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from analyzer.extraction.cleaner import normalize_whitespace
from analyzer.extraction.structured_data import StructuredDataObject, find_objects, text_value

GTIN_KEYS = ("gtin13", "gtin12", "gtin14", "gtin8", "gtin")

ADD_TO_CART_SELECTOR = (
    '[class*="add-to-cart"], [id*="add-to-cart"], [class*="addtocart"], '
    'button[name*="add"], form[action*="cart"] button'
)
VARIANT_SELECTOR = (
    'select[name*="size"], select[name*="color"], select[name*="variant"], '
    '[class*="variant"], [class*="swatch"], [data-variant]'
)
PRICE_SELECTOR = '[itemprop="price"], [class*="product-price"], [data-price], [class*="price"]'
PRODUCT_NAME_SELECTOR = '[itemprop="name"], h1[class*="product"], .product-title, h1'

BREADCRUMB_SELECTOR = (
    '[class*="breadcrumb"] a, nav[aria-label="breadcrumb"] a, '
    'nav[aria-label="Breadcrumb"] a, .breadcrumbs a, ol.breadcrumb a'
)

POLICY_PATTERNS = {
    "shipping": re.compile(r"shipping|delivery|free shipping|ships in|estimated delivery", re.I),
    "returns": re.compile(r"\breturns?\b|refund|money.?back|exchange", re.I),
    "warranty": re.compile(r"warranty|guarantee|protection plan", re.I),
    "contact": re.compile(r"contact|e-?mail|phone|call us|support|customer service", re.I),
}

PRICE_NUMBER = re.compile(r"\d[\d,]*(?:\.\d{1,2})?")


@dataclass(frozen=True)
class ProductData:
    """Product fields from structured data with DOM fallbacks."""

    name: str = ""
    price: str = ""
    currency: str = ""
    availability: str = ""
    sku: str = ""
    gtin: str = ""
    mpn: str = ""
    brand: str = ""
    description: str = ""
    rating: float | None = None
    review_count: int = 0
    has_add_to_cart: bool = False
    has_variants: bool = False
    from_structured_data: bool = False

    @property
    def has_identifiers(self) -> bool:
        return bool(self.gtin or self.mpn or self.sku)

    @property
    def has_commerce_signals(self) -> bool:
        return self.from_structured_data or self.has_add_to_cart

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "price": self.price,
            "currency": self.currency,
            "availability": self.availability,
            "sku": self.sku,
            "gtin": self.gtin,
            "mpn": self.mpn,
            "brand": self.brand,
            "description": self.description,
            "rating": self.rating,
            "review_count": self.review_count,
            "has_add_to_cart": self.has_add_to_cart,
            "has_variants": self.has_variants,
        }


@dataclass(frozen=True)
class Policies:
    has_shipping_info: bool = False
    has_returns_info: bool = False
    has_warranty_info: bool = False
    has_contact_info: bool = False
    has_privacy_policy: bool = False
    has_terms_of_service: bool = False

    def to_dict(self) -> dict:
        return {
            "has_shipping_info": self.has_shipping_info,
            "has_returns_info": self.has_returns_info,
            "has_warranty_info": self.has_warranty_info,
            "has_contact_info": self.has_contact_info,
            "has_privacy_policy": self.has_privacy_policy,
            "has_terms_of_service": self.has_terms_of_service,
        }


@dataclass(frozen=True)
class Breadcrumb:
    text: str
    href: str = ""

    def to_dict(self) -> dict:
        return {"text": self.text, "href": self.href}


def _first_offer(product: StructuredDataObject) -> dict[str, Any]:
    offers = product.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else {}
    if not isinstance(offers, dict):
        return {}
    # AggregateOffer carries lowPrice instead of price
    if "price" not in offers and "lowPrice" in offers:
        return {**offers, "price": offers["lowPrice"]}
    return offers


def _to_float(value: Any) -> float | None:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> int:
    number = _to_float(value)
    return int(number) if number is not None else 0


def _availability_label(value: str) -> str:
    # "https://schema.org/InStock" -> "InStock"
    return value.rstrip("/").rsplit("/", 1)[-1] if value else ""


def extract_product(
    soup: BeautifulSoup, structured_data: list[StructuredDataObject]
) -> ProductData:
    has_add_to_cart = bool(soup.select(ADD_TO_CART_SELECTOR))
    has_variants = bool(soup.select(VARIANT_SELECTOR))

    products = find_objects(structured_data, "Product")
    json_ld_products = [p for p in products if p.source == "json-ld"]
    if json_ld_products:
        product = json_ld_products[0]
        offer = _first_offer(product)
        rating = product.get("aggregateRating")
        rating = rating if isinstance(rating, dict) else {}
        gtin = next((text_value(product.get(key)) for key in GTIN_KEYS if product.get(key)), "")
        return ProductData(
            name=text_value(product.get("name")),
            price=text_value(offer.get("price")),
            currency=text_value(offer.get("priceCurrency")),
            availability=_availability_label(text_value(offer.get("availability"))),
            sku=text_value(product.get("sku")),
            gtin=gtin,
            mpn=text_value(product.get("mpn")),
            brand=text_value(product.get("brand")),
            description=text_value(product.get("description")),
            rating=_to_float(rating.get("ratingValue")),
            review_count=_to_int(rating.get("reviewCount") or rating.get("ratingCount")),
            has_add_to_cart=has_add_to_cart,
            has_variants=has_variants or bool(product.get("hasVariant")),
            from_structured_data=True,
        )

    if not (has_add_to_cart or products):
        return ProductData(has_variants=has_variants)

    name_tag = soup.select_one(PRODUCT_NAME_SELECTOR)
    price_tag = soup.select_one(PRICE_SELECTOR)
    price = ""
    if price_tag is not None:
        content = price_tag.get("content")
        raw = str(content) if content else price_tag.get_text(" ")
        match = PRICE_NUMBER.search(raw)
        price = match.group(0) if match else ""

    return ProductData(
        name=normalize_whitespace(name_tag.get_text(" ")) if name_tag else "",
        price=price,
        has_add_to_cart=has_add_to_cart,
        has_variants=has_variants,
    )


def extract_policies(soup: BeautifulSoup, text: str) -> Policies:
    """Policy mentions from the full page text (footers included) and policy links."""
    full_text = normalize_whitespace(soup.get_text(" ")) + " " + text
    return Policies(
        has_shipping_info=bool(POLICY_PATTERNS["shipping"].search(full_text)),
        has_returns_info=bool(POLICY_PATTERNS["returns"].search(full_text)),
        has_warranty_info=bool(POLICY_PATTERNS["warranty"].search(full_text)),
        has_contact_info=bool(POLICY_PATTERNS["contact"].search(full_text)),
        has_privacy_policy=soup.select_one('a[href*="privacy"]') is not None,
        has_terms_of_service=soup.select_one('a[href*="terms"]') is not None,
    )


def extract_breadcrumbs(
    soup: BeautifulSoup, url: str, structured_data: list[StructuredDataObject]
) -> list[Breadcrumb]:
    crumbs = [
        Breadcrumb(text=text, href=urljoin(url, str(tag.get("href", ""))))
        for tag in soup.select(BREADCRUMB_SELECTOR)
        if (text := normalize_whitespace(tag.get_text(" ")))
    ]
    if crumbs:
        return crumbs

    for trail in find_objects(structured_data, "BreadcrumbList"):
        items = trail.get("itemListElement") or []
        if not isinstance(items, list):
            continue
        for item in sorted(
            (i for i in items if isinstance(i, dict)), key=lambda i: _to_int(i.get("position"))
        ):
            target = item.get("item")
            href = target.get("@id", "") if isinstance(target, dict) else str(target or "")
            name = text_value(item.get("name")) or (
                text_value(target) if isinstance(target, dict) else ""
            )
            if name:
                crumbs.append(Breadcrumb(text=name, href=href))
    return crumbs
