"""Registry of source-specific product extraction rules.

Some sites do not follow the semantic class naming the generic product tier
relies on (generated class names such as ``css-1ma869u``).  For those, a
:class:`SiteRule` pairs a source predicate with a container selector and
the field selectors known to match that site's markup.

The extractor consults the registry only when the generic tier accepted no
candidate, and applies the first rule whose predicate matches the source
identifier.  Adding a site means registering a rule; the generic tier is
untouched.

Example — registering a rule::

    from product_pulse.scraper.site_rules import SiteRule, register

    register(
        SiteRule(
            name="example",
            matches=lambda source: "example.com" in source,
            container_selector=".tile",
            name_selector=".tile-name",
            price_selector=".tile-price",
            description_selector=".tile-blurb",
        )
    )
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteRule:
    """Fallback product extraction ruleset for one site.

    Attributes:
        name: Unique rule name, used as the registry key and in logs.
        matches: Predicate over the source identifier.
        container_selector: CSS selector for one product per match.
        name_selector: CSS selector for the product name inside a container.
        price_selector: CSS selector for the price inside a container.
        description_selector: CSS selector for the description.
    """

    name: str
    matches: Callable[[str], bool]
    container_selector: str
    name_selector: str
    price_selector: str
    description_selector: str


def source_contains(fragment: str) -> Callable[[str], bool]:
    """Build a predicate that is true when the source contains ``fragment``."""

    def _predicate(source: str) -> bool:
        return fragment in source

    return _predicate


# Registry singleton: rule name -> SiteRule, in registration order.
_REGISTRY: dict[str, SiteRule] = {}


def register(rule: SiteRule) -> SiteRule:
    """Add ``rule`` to the registry, replacing any rule with the same name."""
    if rule.name in _REGISTRY:
        logger.warning("site_rules: replacing existing rule '%s'", rule.name)
    _REGISTRY[rule.name] = rule
    return rule


def unregister(name: str) -> None:
    _REGISTRY.pop(name, None)


def find_rule(source: str) -> Optional[SiteRule]:
    """Return the first registered rule matching ``source``, or ``None``."""
    for rule in _REGISTRY.values():
        if rule.matches(source):
            return rule
    return None


def list_rules() -> list[SiteRule]:
    return list(_REGISTRY.values())


SEPHORA = register(
    SiteRule(
        name="sephora",
        matches=source_contains("sephora.com"),
        container_selector=".ProductTile-content",
        name_selector=".css-1ma869u",
        price_selector=".css-1f35s9q span",
        description_selector=".css-l6xvpz",
    )
)
