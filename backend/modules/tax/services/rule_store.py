# backend/modules/tax/services/rule_store.py

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from decimal import Decimal
from abc import ABC, abstractmethod
import asyncio
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..enums import TaxRuleType, TaxClass, StoreRuleCode
from ..exceptions import TaxRuleMappingError, TaxRuleStoreError
from ..models import TaxConfiguration
from ..schemas import TaxRule

logger = logging.getLogger(__name__)


# Store records use the admin tool's field names; both spellings are accepted
_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "min_amount": ("min_amount", "minAmount"),
    "max_amount": ("max_amount", "maxAmount"),
    "applicable_in": ("applicable_in", "applicableIn"),
    "product_types": ("product_types", "productTypes"),
    "is_active": ("is_active", "isActive"),
    "tax_class": ("tax_class", "taxClass"),
}

_STORE_CODE_MAPPING: Dict[StoreRuleCode, Tuple[TaxRuleType, TaxClass]] = {
    StoreRuleCode.GST: (TaxRuleType.PERCENTAGE_OF_SUBTOTAL, TaxClass.GST),
    StoreRuleCode.STATE_TAX: (TaxRuleType.PERCENTAGE_OF_SUBTOTAL, TaxClass.STATE),
    StoreRuleCode.CITY_TAX: (TaxRuleType.PERCENTAGE_OF_SUBTOTAL, TaxClass.CITY),
    StoreRuleCode.FIXED_AMOUNT: (TaxRuleType.FIXED_AMOUNT, TaxClass.GENERAL),
}


class TaxRuleStore(ABC):
    """Read-only source of truth for tax rules"""

    @abstractmethod
    async def list_active_rules(self) -> List[TaxRule]:
        """Return every active tax rule"""
        pass


class InMemoryTaxRuleStore(TaxRuleStore):
    """Rule store backed by a list, for embedding and tests"""

    def __init__(self, rules: Optional[Iterable[TaxRule]] = None):
        self._rules: List[TaxRule] = list(rules or [])
        self.fetch_count = 0

    async def list_active_rules(self) -> List[TaxRule]:
        self.fetch_count += 1
        return [rule for rule in self._rules if rule.active]

    def replace_rules(self, rules: Iterable[TaxRule]) -> None:
        self._rules = list(rules)


class SQLAlchemyTaxRuleStore(TaxRuleStore):
    """Reads tax_configurations rows through a sync session factory"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def list_active_rules(self) -> List[TaxRule]:
        return await asyncio.to_thread(self._load_active_rules)

    def _load_active_rules(self) -> List[TaxRule]:
        try:
            with self.session_factory() as db:
                records = db.query(TaxConfiguration).filter(
                    TaxConfiguration.is_active == True
                ).all()
                return rules_from_records(records)
        except SQLAlchemyError as e:
            raise TaxRuleStoreError(f"Failed to read tax configurations: {e}") from e


def rules_from_records(records: Iterable[Any]) -> List[TaxRule]:
    """Map store records to rules, skipping records that cannot be mapped"""
    rules = []
    for record in records:
        try:
            rules.append(rule_from_record(record))
        except TaxRuleMappingError as e:
            logger.warning(f"Skipping tax configuration {e.record_id}: {e.message}")
    return rules


def rule_from_record(record: Any) -> TaxRule:
    """Build a TaxRule from an ORM row or a mapping with store field names"""
    record_id = _field(record, "id")
    regions = _string_list(_field(record, "applicable_in"))
    categories = _string_list(_field(record, "product_types"))

    rule_type, tax_class = _resolve_type(
        _field(record, "type"), bool(categories), record_id
    )
    explicit_class = _field(record, "tax_class")
    if explicit_class:
        try:
            tax_class = TaxClass(str(explicit_class).lower())
        except ValueError:
            raise TaxRuleMappingError(
                f"Unknown tax class {explicit_class!r}", record_id=record_id
            )

    is_active = _field(record, "is_active")

    try:
        return TaxRule(
            id=str(record_id),
            name=_field(record, "name"),
            type=rule_type,
            tax_class=tax_class,
            rate=_to_decimal(_field(record, "rate")),
            min_order_amount=_to_decimal(_field(record, "min_amount")),
            max_order_amount=_to_decimal(_field(record, "max_amount")),
            applicable_regions=regions,
            applicable_categories=categories,
            active=True if is_active is None else bool(is_active),
        )
    except (ValidationError, TypeError, ArithmeticError) as e:
        raise TaxRuleMappingError(str(e), record_id=record_id) from e


def _resolve_type(
    raw_type: Any, has_categories: bool, record_id: Any
) -> Tuple[TaxRuleType, TaxClass]:
    code = str(raw_type or "").strip()

    if code.upper() == StoreRuleCode.PERCENTAGE.value:
        if has_categories:
            return TaxRuleType.PERCENTAGE_OF_ITEMS, TaxClass.GENERAL
        return TaxRuleType.PERCENTAGE_OF_SUBTOTAL, TaxClass.GENERAL

    try:
        return _STORE_CODE_MAPPING[StoreRuleCode(code.upper())]
    except (ValueError, KeyError):
        pass

    try:
        return TaxRuleType(code.lower()), TaxClass.GENERAL
    except ValueError:
        raise TaxRuleMappingError(
            f"Unknown tax rule type {raw_type!r}", record_id=record_id
        )


def _field(record: Any, name: str) -> Any:
    for key in _FIELD_ALIASES.get(name, (name,)):
        if isinstance(record, Mapping):
            if key in record:
                return record[key]
        elif hasattr(record, key):
            return getattr(record, key)
    return None


def _string_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(token).strip() for token in value if str(token).strip()]


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
